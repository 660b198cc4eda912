"""Journal endpoints: meals, water and the activity calendar."""

from datetime import date
from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Path

from savr.api.dependencies import get_container, require_token
from savr.api.models import (
    CalendarResponse,
    DailyLogResponse,
    MealPayload,
    ProductPortionPayload,
    WaterPayload,
)
from savr.containers import AppContainer
from savr.domain.errors import ProductNotFoundError
from savr.domain.foods import to_meal_entry

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["journal"],
    dependencies=[Depends(require_token)],
)


@router.get("/journal/{day}")
async def get_day(
    user_id: UUID, day: date, container: AppContainer = Depends(get_container)
) -> DailyLogResponse:
    """Return one day of the journal."""
    return DailyLogResponse.from_domain(
        container.journal_service.get_day(user_id, day)
    )


@router.post("/journal/{day}/meals")
async def add_meal(
    user_id: UUID,
    day: date,
    payload: MealPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Log a meal."""
    entry = payload.to_domain(payload.id or uuid4().hex)
    return DailyLogResponse.from_domain(
        container.journal_service.add_meal(user_id, day, entry)
    )


@router.put("/journal/{day}/meals/{meal_id}")
async def update_meal(  # noqa: PLR0913
    user_id: UUID,
    day: date,
    meal_id: str,
    payload: MealPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Replace a logged meal."""
    return DailyLogResponse.from_domain(
        container.journal_service.update_meal(user_id, day, payload.to_domain(meal_id))
    )


@router.delete("/journal/{day}/meals/{meal_id}")
async def remove_meal(
    user_id: UUID,
    day: date,
    meal_id: str,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Remove a logged meal."""
    return DailyLogResponse.from_domain(
        container.journal_service.remove_meal(user_id, day, meal_id)
    )


@router.post("/journal/{day}/products/{barcode}")
async def log_product(
    user_id: UUID,
    day: date,
    barcode: str,
    payload: ProductPortionPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Log a portion of a scanned product."""
    product = await container.food_lookup_service.lookup_barcode(barcode)
    if product is None:
        raise ProductNotFoundError(f"Product {barcode} not found")
    entry = to_meal_entry(product, uuid4().hex, payload.type, payload.grams)
    return DailyLogResponse.from_domain(
        container.journal_service.add_meal(user_id, day, entry)
    )


@router.put("/journal/{day}/water")
async def set_water(
    user_id: UUID,
    day: date,
    payload: WaterPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Set the water intake for a day."""
    return DailyLogResponse.from_domain(
        container.journal_service.set_water(user_id, day, payload.amount_ml)
    )


@router.post("/journal/{day}/water")
async def adjust_water(
    user_id: UUID,
    day: date,
    payload: WaterPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogResponse:
    """Add or remove water for a day."""
    return DailyLogResponse.from_domain(
        container.journal_service.adjust_water(user_id, day, payload.amount_ml)
    )


@router.get("/calendar/{year}/{month}")
async def calendar(
    user_id: UUID,
    year: int = Path(ge=1),
    month: int = Path(ge=1, le=12),
    container: AppContainer = Depends(get_container),
) -> CalendarResponse:
    """Return the days of a month with logged activity."""
    days = container.journal_service.calendar(user_id, year, month)
    return CalendarResponse(year=year, month=month, active_days=days)
