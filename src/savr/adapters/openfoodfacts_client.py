"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

PRODUCT_FIELDS = (
    "code,product_name,product_name_en,generic_name,brands,image_url,"
    "image_front_small_url,nutriments,serving_size,quantity"
)


class FoodDatabaseClient(Protocol):
    """Interface for product database interactions."""

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode and return raw API data."""

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        """Search products by name and return raw API data."""


@dataclass
class HttpxOpenFoodFactsClient(FoodDatabaseClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str, user_agent: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(headers={"User-Agent": user_agent}),
        )

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product by barcode."""
        response = await self.http_client.get(
            f"{self.base_url}/api/v0/product/{barcode}.json",
            params={"fields": PRODUCT_FIELDS},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def search_products(
        self, query: str, page_size: int = 20
    ) -> dict[str, object]:
        """Search products sorted by popularity."""
        response = await self.http_client.get(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": page_size,
                "sort_by": "unique_scans_n",
                "fields": PRODUCT_FIELDS,
            },
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
