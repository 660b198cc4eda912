"""Food search and barcode lookup backed by Open Food Facts."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from savr.adapters.openfoodfacts_client import FoodDatabaseClient
from savr.domain.foods import FoodProduct, search_catalog
from savr.domain.nutrition import NutritionFacts
from savr.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

_UNKNOWN_NAMES = {"", "unknown product", "produit inconnu"}


@dataclass
class FoodLookupService:
    """Service for product lookups with caching."""

    client: FoodDatabaseClient
    cache: Cache
    search_ttl_seconds: int = 3600
    product_ttl_seconds: int = 86400
    page_size: int = 20
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[FoodProduct]:
        """Return local catalog matches followed by remote products.

        Remote failures degrade to local results only.
        """
        local = search_catalog(query)
        try:
            remote = await self._search_remote(query)
        except httpx.HTTPError:
            _logger.warning("Product search failed for %r", query, exc_info=True)
            remote = []
        return [*local, *remote]

    async def lookup_barcode(self, barcode: str) -> FoodProduct | None:
        """Return the product for a barcode, or None when it is unknown."""
        cache_key = f"off:product:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodProduct):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.get_product(barcode), action=f"product:{barcode}"
        )
        raw = payload.get("product")
        if payload.get("status") == 0 or not isinstance(raw, dict):
            return None
        product = parse_product(raw, fallback_id=barcode)
        self.cache.set(cache_key, product, ttl_seconds=self.product_ttl_seconds)
        return product

    async def _search_remote(self, query: str) -> list[FoodProduct]:
        cache_key = f"off:search:{query.strip().lower()}:{self.page_size}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.search_products(query, page_size=self.page_size),
            action="search",
        )
        products: list[FoodProduct] = []
        seen: set[str] = set()
        for raw in payload.get("products", []):
            if not isinstance(raw, dict):
                continue
            product = parse_product(raw)
            normalized = product.name.strip().lower()
            if normalized in _UNKNOWN_NAMES or normalized in seen:
                continue
            if product.per_100g.calories is None:
                continue
            seen.add(normalized)
            products.append(product)
        self.cache.set(cache_key, products, ttl_seconds=self.search_ttl_seconds)
        _logger.info("Product search: query=%s results=%s", query, len(products))
        return products

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the product database with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except httpx.HTTPError as exc:
                attempt += 1
                _logger.warning(
                    "Open Food Facts %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def parse_product(raw: dict[str, object], fallback_id: str = "") -> FoodProduct:
    """Convert an Open Food Facts product payload into a ``FoodProduct``."""
    nutriments = raw.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    name = (
        _text(raw.get("product_name_en"))
        or _text(raw.get("product_name"))
        or _text(raw.get("generic_name"))
        or "Unknown product"
    )
    return FoodProduct(
        id=str(raw.get("code") or fallback_id),
        name=name,
        per_100g=NutritionFacts(
            calories=_number(
                nutriments.get("energy-kcal_100g", nutriments.get("energy-kcal"))
            ),
            protein=_number(nutriments.get("proteins_100g")),
            carbs=_number(nutriments.get("carbohydrates_100g")),
            fats=_number(nutriments.get("fat_100g")),
        ),
        brand=_text(raw.get("brands")),
        image=_text(raw.get("image_front_small_url") or raw.get("image_url")),
        serving_size=_text(raw.get("serving_size")),
        quantity=_text(raw.get("quantity")),
        source="openfoodfacts",
    )


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
