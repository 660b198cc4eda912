"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import httpx
import pytest

from savr.adapters.openfoodfacts_client import FoodDatabaseClient
from savr.config import Settings
from savr.containers import AppContainer
from savr.domain.daily_log import DailyLog
from savr.domain.pantry import Ingredient
from savr.domain.profile import UserProfile
from savr.domain.recipes import Recipe
from savr.services.cache import InMemoryCache
from savr.services.consistency import Versioned
from savr.services.foods import FoodLookupService
from savr.services.journal import DailyLogRepository, JournalService
from savr.services.pantry import PantryRepository, PantryService
from savr.services.profiles import ProfileRepository, ProfileService
from savr.services.recipes import RecipeGenerator, RecipeRepository, RecipeService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository with version counters."""

    profiles: dict[UUID, Versioned[UserProfile]] = field(default_factory=dict)
    conflicts: int = 0
    saves: int = 0

    def get_profile(self, user_id: UUID) -> Versioned[UserProfile] | None:
        return self.profiles.get(user_id)

    def save_profile(
        self, user_id: UUID, profile: UserProfile, expected_version: int | None
    ) -> bool:
        if self.conflicts:
            self.conflicts -= 1
            return False
        stored = self.profiles.get(user_id)
        current_version = stored.version if stored else None
        if current_version != expected_version:
            return False
        self.profiles[user_id] = Versioned(profile, (expected_version or 0) + 1)
        self.saves += 1
        return True


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily log repository with version counters."""

    logs: dict[tuple[UUID, date], Versioned[DailyLog]] = field(default_factory=dict)
    conflicts: int = 0
    saves: int = 0
    on_conflict: object | None = None

    def get_log(self, user_id: UUID, day: date) -> Versioned[DailyLog] | None:
        return self.logs.get((user_id, day))

    def save_log(
        self, user_id: UUID, log: DailyLog, expected_version: int | None
    ) -> bool:
        if self.conflicts:
            self.conflicts -= 1
            if callable(self.on_conflict):
                self.on_conflict()
            return False
        stored = self.logs.get((user_id, log.date))
        current_version = stored.version if stored else None
        if current_version != expected_version:
            return False
        self.logs[(user_id, log.date)] = Versioned(log, (expected_version or 0) + 1)
        self.saves += 1
        return True

    def list_logs(self, user_id: UUID, start: date, end: date) -> list[DailyLog]:
        return sorted(
            (
                stored.value
                for (owner, day), stored in self.logs.items()
                if owner == user_id and start <= day < end
            ),
            key=lambda log: log.date,
        )


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry repository for tests."""

    items: dict[UUID, dict[str, Ingredient]] = field(default_factory=dict)

    def list_items(self, user_id: UUID) -> list[Ingredient]:
        return list(self.items.get(user_id, {}).values())

    def get_item(self, user_id: UUID, item_id: str) -> Ingredient | None:
        return self.items.get(user_id, {}).get(item_id)

    def create_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        self.items.setdefault(user_id, {})[item.id] = item
        return item

    def update_item(self, user_id: UUID, item: Ingredient) -> Ingredient:
        self.items.setdefault(user_id, {})[item.id] = item
        return item

    def delete_item(self, user_id: UUID, item_id: str) -> None:
        self.items.get(user_id, {}).pop(item_id, None)


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory cookbook for tests."""

    recipes: dict[UUID, dict[str, Recipe]] = field(default_factory=dict)

    def list_recipes(self, user_id: UUID) -> list[Recipe]:
        return list(self.recipes.get(user_id, {}).values())

    def get_recipe(self, user_id: UUID, recipe_id: str) -> Recipe | None:
        return self.recipes.get(user_id, {}).get(recipe_id)

    def create_recipe(self, user_id: UUID, recipe: Recipe) -> Recipe:
        self.recipes.setdefault(user_id, {})[recipe.id] = recipe
        return recipe

    def delete_recipe(self, user_id: UUID, recipe_id: str) -> None:
        self.recipes.get(user_id, {}).pop(recipe_id, None)


def recipe_payload(**overrides: object) -> dict[str, object]:
    """Return one recipe as the generator would produce it."""
    payload: dict[str, object] = {
        "title": "Chicken rice bowl",
        "description": "Quick bowl",
        "prep_time": "10 min",
        "cook_time": "20 min",
        "calories": 520,
        "macros": {"protein": "40g", "carbs": "55g", "fats": "12g"},
        "ingredients": ["200g chicken breast", "1 cup rice", "1 tbsp soy sauce"],
        "instructions": ["Cook rice", "Grill chicken", "Serve"],
        "tags": ["high protein"],
    }
    payload.update(overrides)
    return payload


@dataclass
class FakeRecipeGenerator(RecipeGenerator):
    """Fake recipe generator that returns canned recipes."""

    recipes: list[dict[str, object]] = field(
        default_factory=lambda: [recipe_payload()]
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return {"recipes": self.recipes}


@dataclass
class FakeFoodDatabaseClient(FoodDatabaseClient):
    """Fake product database with canned payloads."""

    products: dict[str, dict[str, object]] = field(default_factory=dict)
    search_results: list[dict[str, object]] = field(default_factory=list)
    failures: int = 0
    product_calls: int = 0
    search_calls: int = 0

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.product_calls += 1
        self._maybe_fail()
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0, "status_verbose": "product not found"}
        return {"status": 1, "product": product}

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        self.search_calls += 1
        self._maybe_fail()
        return {"products": self.search_results[:page_size]}

    def _maybe_fail(self) -> None:
        if self.failures:
            self.failures -= 1
            raise httpx.ConnectError("connection refused")


def off_product(code: str = "3017620422003", **overrides: object) -> dict[str, object]:
    """Return an Open Food Facts product payload."""
    product: dict[str, object] = {
        "code": code,
        "product_name": "Hazelnut spread",
        "brands": "Nutella",
        "image_front_small_url": "https://images.example/nutella.jpg",
        "serving_size": "15 g",
        "quantity": "400 g",
        "nutriments": {
            "energy-kcal_100g": 539,
            "proteins_100g": 6.3,
            "carbohydrates_100g": 57.5,
            "fat_100g": 30.9,
        },
    }
    product.update(overrides)
    return product


def example_profile(**overrides: object) -> UserProfile:
    """Return a complete profile for a 30 year old man losing weight."""
    profile = UserProfile(
        name="Alex",
        height=175,
        weight=75,
        age=30,
        gender="male",
        goal="weight_loss",
    )
    return replace(profile, **overrides)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def log_repository() -> InMemoryDailyLogRepository:
    return InMemoryDailyLogRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def journal_service(
    log_repository: InMemoryDailyLogRepository, profile_service: ProfileService
) -> JournalService:
    return JournalService(log_repository, profile_service)


@pytest.fixture
def pantry_service() -> PantryService:
    return PantryService(InMemoryPantryRepository())


@pytest.fixture
def recipe_generator() -> FakeRecipeGenerator:
    return FakeRecipeGenerator()


@pytest.fixture
def recipe_service(
    recipe_generator: FakeRecipeGenerator,
    pantry_service: PantryService,
    profile_service: ProfileService,
    journal_service: JournalService,
) -> RecipeService:
    return RecipeService(
        generator=recipe_generator,
        repository=InMemoryRecipeRepository(),
        pantry_service=pantry_service,
        profile_service=profile_service,
        journal_service=journal_service,
        model="gpt-5.2",
    )


@pytest.fixture
def food_client() -> FakeFoodDatabaseClient:
    return FakeFoodDatabaseClient(products={"3017620422003": off_product()})


@pytest.fixture
def food_lookup_service(food_client: FakeFoodDatabaseClient) -> FoodLookupService:
    return FoodLookupService(
        client=food_client, cache=InMemoryCache(), retry_delay_seconds=0
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    journal_service: JournalService,
    pantry_service: PantryService,
    recipe_service: RecipeService,
    food_lookup_service: FoodLookupService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        journal_service=journal_service,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        food_lookup_service=food_lookup_service,
        close_resources=close_resources,
    )
