from storefront.cart.pricing import get_item_price, calculate_item_total
from storefront.cart.reducer import CartReducer
from storefront.cart.store import PersistentCartStore
from storefront.cart.provider import CartProvider

__all__ = [
    "get_item_price",
    "calculate_item_total",
    "CartReducer",
    "PersistentCartStore",
    "CartProvider",
]
