import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from storefront.core.exceptions.errors import FetchError
from storefront.schemas.product import ProductRead

ADMIN_PRODUCTS_PATH = "/admin/products"


def sort_by_sequence(products: List[ProductRead]) -> List[ProductRead]:
    # sorted() é estável: empates mantêm a ordem do servidor
    return sorted(products, key=lambda p: p.sequence or 0)


@dataclass
class ProductPage:
    products: List[ProductRead]
    page: int
    total_pages: int


async def get_json(http: httpx.AsyncClient, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    try:
        response = await http.get(path, params=params)
    except httpx.RequestError as e:
        logging.error(f"FETCH >>> Erro de rede em {path}: {e}")
        raise FetchError(f"Failed to fetch {path}") from e

    if not response.is_success:
        raise FetchError(f"Failed to fetch {path}", status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise FetchError("Invalid data format received", status_code=response.status_code) from e


class ProductFetcher:
    def __init__(self, http: httpx.AsyncClient, path: str = ADMIN_PRODUCTS_PATH):
        self.http = http
        self.path = path

    async def fetch_products(self, page: int = 1) -> ProductPage:
        data = await get_json(self.http, self.path, params={"page": page})

        if not isinstance(data, dict) or not isinstance(data.get("products"), list):
            raise FetchError("Invalid data format received")

        try:
            products = [ProductRead.model_validate(p) for p in data["products"]]
        except ValidationError as e:
            raise FetchError(f"Invalid product in response: {e.error_count()} error(s)") from e

        return ProductPage(
            products=sort_by_sequence(products),
            page=page,
            total_pages=data.get("total_pages") or 1,
        )
