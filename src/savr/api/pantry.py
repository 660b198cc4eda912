"""Pantry endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from savr.api.dependencies import get_container, require_token
from savr.api.models import PantryItemPayload, PantryItemResponse, SelectAllPayload
from savr.containers import AppContainer
from savr.domain.errors import ProductNotFoundError

router = APIRouter(
    prefix="/users/{user_id}/pantry",
    tags=["pantry"],
    dependencies=[Depends(require_token)],
)


@router.get("")
async def list_items(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> list[PantryItemResponse]:
    """Return the pantry."""
    return [
        PantryItemResponse.from_domain(item)
        for item in container.pantry_service.list_items(user_id)
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_item(
    user_id: UUID,
    payload: PantryItemPayload,
    container: AppContainer = Depends(get_container),
) -> PantryItemResponse:
    """Add an item, merging into an existing item with the same name."""
    item = container.pantry_service.add_ingredient(user_id, payload.to_domain(""))
    return PantryItemResponse.from_domain(item)


@router.post("/barcode/{barcode}", status_code=status.HTTP_201_CREATED)
async def add_scanned_product(
    user_id: UUID, barcode: str, container: AppContainer = Depends(get_container)
) -> PantryItemResponse:
    """Look up a scanned barcode and add the product."""
    product = await container.food_lookup_service.lookup_barcode(barcode)
    if product is None:
        raise ProductNotFoundError(f"Product {barcode} not found")
    item = container.pantry_service.add_product(user_id, product, scanned=True)
    return PantryItemResponse.from_domain(item)


@router.post("/select-all")
async def select_all(
    user_id: UUID,
    payload: SelectAllPayload,
    container: AppContainer = Depends(get_container),
) -> list[PantryItemResponse]:
    """Select or deselect every item."""
    return [
        PantryItemResponse.from_domain(item)
        for item in container.pantry_service.select_all(user_id, payload.selected)
    ]


@router.patch("/{item_id}")
async def update_item(
    user_id: UUID,
    item_id: str,
    payload: PantryItemPayload,
    container: AppContainer = Depends(get_container),
) -> PantryItemResponse:
    """Overwrite an item."""
    current = container.pantry_service.get_item(user_id, item_id)
    item = container.pantry_service.update_item(
        user_id, payload.to_domain(item_id, is_scanned=current.is_scanned)
    )
    return PantryItemResponse.from_domain(item)


@router.post("/{item_id}/toggle")
async def toggle_item(
    user_id: UUID, item_id: str, container: AppContainer = Depends(get_container)
) -> PantryItemResponse:
    """Flip an item's selection."""
    return PantryItemResponse.from_domain(
        container.pantry_service.toggle(user_id, item_id)
    )


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(
    user_id: UUID, item_id: str, container: AppContainer = Depends(get_container)
) -> None:
    """Remove an item."""
    container.pantry_service.remove_item(user_id, item_id)
