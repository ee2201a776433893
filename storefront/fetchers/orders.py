from typing import List

import httpx
from pydantic import ValidationError

from storefront.core.exceptions.errors import FetchError
from storefront.fetchers.products import get_json
from storefront.schemas.order import OrderRead

ORDERS_PATH = "/orders/"


class OrderFetcher:
    def __init__(self, http: httpx.AsyncClient, path: str = ORDERS_PATH):
        self.http = http
        self.path = path

    async def fetch_orders(self) -> List[OrderRead]:
        data = await get_json(self.http, self.path)

        if not isinstance(data, list):
            raise FetchError("Invalid data format received")

        try:
            return [OrderRead.model_validate(order) for order in data]
        except ValidationError as e:
            raise FetchError(f"Invalid order in response: {e.error_count()} error(s)") from e
