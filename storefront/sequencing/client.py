import logging
from typing import List

import httpx

from storefront.core.exceptions.errors import NotAuthenticatedError, ReorderRejectedError
from storefront.schemas.reorder import SequenceAssignment

REORDER_PATH = "/admin/products/reorder"
DEFAULT_ERROR = "Failed to update product sequence"


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return DEFAULT_ERROR
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("error")
        if isinstance(detail, str) and detail:
            return detail
    return DEFAULT_ERROR


class ReorderClient:
    """Envia o lote de sequências para o endpoint de reordenação."""

    def __init__(self, http: httpx.AsyncClient, path: str = REORDER_PATH):
        self.http = http
        self.path = path

    async def send(self, assignments: List[SequenceAssignment]) -> None:
        body = {"products": [a.model_dump() for a in assignments]}
        try:
            response = await self.http.post(self.path, json=body)
        except httpx.RequestError as e:
            logging.error(f"REORDENAÇÃO >>> Erro de rede ao enviar sequências: {e}")
            raise ReorderRejectedError(f"{DEFAULT_ERROR}. Please try again.") from e

        if response.is_success:
            return

        message = _error_message(response)
        if response.status_code == 401 or "Not authenticated" in message:
            raise NotAuthenticatedError(message)
        raise ReorderRejectedError(message, status_code=response.status_code)
