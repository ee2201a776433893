# storefront/cart/store.py
import json
import logging
from typing import Any, Dict, List

from storefront.cart.storage import KeyValueStorage
from storefront.core.exceptions.errors import CorruptCartError
from storefront.schemas.cart import CartItem

CART_STORAGE_KEY = "cart"

_STRING_FIELDS = ("id", "name", "description", "image", "category", "selected_package")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def migrate_cart_item(raw: Any) -> Dict[str, Any]:
    """
    Converte um item salvo (possivelmente de uma versão antiga) para o formato atual.
    Campos ausentes ou com tipo errado recebem o valor padrão do tipo.
    """
    if not isinstance(raw, dict):
        raise CorruptCartError(f"Item do carrinho não é um objeto: {type(raw).__name__}")

    migrated = {field: raw.get(field) if isinstance(raw.get(field), str) else "" for field in _STRING_FIELDS}
    migrated["price"] = raw.get("price") if _is_number(raw.get("price")) else 0
    migrated["quantity"] = raw.get("quantity") if _is_number(raw.get("quantity")) else 1
    migrated["packages"] = raw.get("packages") if isinstance(raw.get("packages"), list) else []
    migrated["total_price"] = raw.get("total_price") if _is_number(raw.get("total_price")) else 0
    return migrated


def _is_valid_package(pkg: Any) -> bool:
    return (
        isinstance(pkg, dict)
        and isinstance(pkg.get("id"), str)
        and isinstance(pkg.get("name"), str)
        and _is_number(pkg.get("price"))
    )


def validate_cart_item(item: Dict[str, Any]) -> bool:
    return (
        all(isinstance(item.get(field), str) for field in _STRING_FIELDS)
        and _is_number(item.get("price"))
        and isinstance(item.get("quantity"), int)
        and not isinstance(item.get("quantity"), bool)
        and item["quantity"] >= 1
        and isinstance(item.get("packages"), list)
        and all(_is_valid_package(pkg) for pkg in item["packages"])
        and _is_number(item.get("total_price"))
    )


def parse_cart(payload: str) -> List[CartItem]:
    """Desserializa, migra e valida o carrinho inteiro. Qualquer falha invalida tudo."""
    try:
        parsed = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise CorruptCartError(f"JSON inválido: {e}") from e

    if not isinstance(parsed, list):
        raise CorruptCartError("Estrutura do carrinho inválida")

    migrated = [migrate_cart_item(raw) for raw in parsed]
    if not all(validate_cart_item(item) for item in migrated):
        raise CorruptCartError("Item(ns) inválido(s) no carrinho")

    return [CartItem.model_validate(item) for item in migrated]


def serialize_cart(items: List[CartItem]) -> str:
    return json.dumps([item.model_dump() for item in items], ensure_ascii=False)


class PersistentCartStore:
    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> List[CartItem]:
        saved = self.storage.get(self.key)
        if not saved:
            return []

        try:
            return parse_cart(saved)
        except CorruptCartError as e:
            logging.error(f"CARRINHO >>> Erro ao carregar carrinho, descartando: {e}")
            self.storage.delete(self.key)
            return []

    def save(self, items: List[CartItem]) -> None:
        try:
            self.storage.set(self.key, serialize_cart(items))
        except Exception as e:
            logging.error(f"CARRINHO >>> Erro ao salvar carrinho: {e}")
            raise

    def clear(self) -> None:
        self.storage.delete(self.key)
