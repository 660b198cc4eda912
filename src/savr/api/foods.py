"""Food search and barcode lookup endpoints."""

from fastapi import APIRouter, Depends, Query

from savr.api.dependencies import get_container, require_token
from savr.api.models import FoodProductResponse
from savr.containers import AppContainer
from savr.domain.errors import ProductNotFoundError

router = APIRouter(
    prefix="/foods", tags=["foods"], dependencies=[Depends(require_token)]
)


@router.get("/search")
async def search_foods(
    q: str = Query(min_length=1), container: AppContainer = Depends(get_container)
) -> list[FoodProductResponse]:
    """Search the local catalog and Open Food Facts."""
    products = await container.food_lookup_service.search(q)
    return [FoodProductResponse.from_domain(product) for product in products]


@router.get("/barcode/{barcode}")
async def lookup_barcode(
    barcode: str, container: AppContainer = Depends(get_container)
) -> FoodProductResponse:
    """Return the product for a barcode."""
    product = await container.food_lookup_service.lookup_barcode(barcode)
    if product is None:
        raise ProductNotFoundError(f"Product {barcode} not found")
    return FoodProductResponse.from_domain(product)
