# storefront/cart/provider.py
from typing import Optional

from storefront.cart.reducer import CartReducer
from storefront.cart.storage import KeyValueStorage
from storefront.cart.store import CART_STORAGE_KEY, PersistentCartStore


class CartProvider:
    """
    Único ponto de construção do carrinho de um cliente.

    O carrinho só existe entre open() e close(); acessar fora disso é erro
    de programação. teardown() limpa o carrinho persistido (logout/checkout).
    """

    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self.store = PersistentCartStore(storage, key)
        self._cart: Optional[CartReducer] = None

    @property
    def cart(self) -> CartReducer:
        if self._cart is None:
            raise RuntimeError("cart must be used within an open CartProvider")
        return self._cart

    def open(self) -> CartReducer:
        if self._cart is None:
            self._cart = CartReducer.load(self.store)
        return self._cart

    def close(self) -> None:
        self._cart = None

    def teardown(self) -> None:
        self.open().clear_cart()
        self.close()

    def __enter__(self) -> CartReducer:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
