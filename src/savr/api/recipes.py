"""Recipe generation and cookbook endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from savr.api.dependencies import get_container, require_token
from savr.api.models import DailyLogResponse, GenerateRecipesPayload, LogRecipePayload
from savr.containers import AppContainer
from savr.domain.recipes import Recipe
from savr.services.recipes import GenerationOptions

router = APIRouter(
    prefix="/users/{user_id}/recipes",
    tags=["recipes"],
    dependencies=[Depends(require_token)],
)


@router.post("/generate")
async def generate_recipes(
    user_id: UUID,
    payload: GenerateRecipesPayload,
    container: AppContainer = Depends(get_container),
) -> list[Recipe]:
    """Generate recipes from the selected pantry items."""
    options = GenerationOptions(
        meal_type=payload.meal_type,
        time_limit=payload.time_limit,
        skill_level=payload.skill_level,
        equipment=payload.equipment,
    )
    return await container.recipe_service.generate(
        user_id, strict_mode=payload.strict_mode, options=options
    )


@router.get("")
async def list_recipes(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> list[Recipe]:
    """Return the cookbook annotated against the current pantry."""
    return container.recipe_service.list_saved(user_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    user_id: UUID, recipe: Recipe, container: AppContainer = Depends(get_container)
) -> Recipe:
    """Save a recipe to the cookbook."""
    return container.recipe_service.save_recipe(user_id, recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    user_id: UUID, recipe_id: str, container: AppContainer = Depends(get_container)
) -> None:
    """Remove a recipe from the cookbook."""
    container.recipe_service.delete_recipe(user_id, recipe_id)


@router.post("/{recipe_id}/log")
async def log_recipe(
    user_id: UUID,
    recipe_id: str,
    payload: LogRecipePayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Log servings of a saved recipe in the journal."""
    log = container.recipe_service.log_serving(
        user_id,
        recipe_id,
        payload.type,
        day=payload.day,
        servings=payload.servings,
    )
    return DailyLogResponse.from_domain(log)
