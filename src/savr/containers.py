"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from savr.adapters.openai_recipe_client import OpenAIRecipeClient
from savr.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from savr.adapters.supabase_daily_log_repository import SupabaseDailyLogRepository
from savr.adapters.supabase_pantry_repository import SupabasePantryRepository
from savr.adapters.supabase_profile_repository import SupabaseProfileRepository
from savr.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from savr.config import Settings
from savr.services.cache import InMemoryCache
from savr.services.foods import FoodLookupService
from savr.services.journal import JournalService
from savr.services.pantry import PantryService
from savr.services.profiles import ProfileService
from savr.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    journal_service: JournalService
    pantry_service: PantryService
    recipe_service: RecipeService
    food_lookup_service: FoodLookupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(
            supabase_client, default_timezone=resolved_settings.default_timezone
        ),
        default_timezone=resolved_settings.default_timezone,
        max_attempts=resolved_settings.cas_max_attempts,
    )
    journal_service = JournalService(
        repository=SupabaseDailyLogRepository(supabase_client),
        profile_service=profile_service,
        max_attempts=resolved_settings.cas_max_attempts,
    )
    pantry_service = PantryService(SupabasePantryRepository(supabase_client))
    openai_client = OpenAIRecipeClient.create(resolved_settings.openai_api_key)
    recipe_service = RecipeService(
        generator=openai_client,
        repository=SupabaseRecipeRepository(supabase_client),
        pantry_service=pantry_service,
        profile_service=profile_service,
        journal_service=journal_service,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        user_agent=resolved_settings.off_user_agent,
    )
    food_lookup_service = FoodLookupService(client=off_client, cache=InMemoryCache())

    async def close_resources() -> None:
        await off_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        journal_service=journal_service,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        food_lookup_service=food_lookup_service,
        close_resources=close_resources,
    )
