# storefront/cart/reducer.py
import logging
from typing import List, Optional

from storefront.cart.pricing import calculate_item_total, find_package, get_item_price
from storefront.cart.store import PersistentCartStore
from storefront.core.exceptions.errors import CartValidationError
from storefront.schemas.cart import CartItem, CartProduct


class CartReducer:
    """
    Estado do carrinho em memória. Toda operação que altera os itens
    regrava o carrinho inteiro no store.
    """

    def __init__(self, store: Optional[PersistentCartStore] = None, items: Optional[List[CartItem]] = None):
        self.store = store
        self.items: List[CartItem] = list(items or [])

    @classmethod
    def load(cls, store: PersistentCartStore) -> "CartReducer":
        return cls(store=store, items=store.load())

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.items)

    def add_item(self, product: CartProduct, quantity: int, selected_package: str) -> CartItem:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise CartValidationError("Quantity must be a positive integer")

        existing = next(
            (item for item in self.items if item.id == product.id and item.selected_package == selected_package),
            None,
        )

        if existing:
            existing.quantity += quantity
            existing.total_price = calculate_item_total(existing)
            self._persist()
            return existing

        cart_item = CartItem(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            quantity=quantity,
            image=product.image,
            category=product.category,
            packages=[pkg.model_copy() for pkg in product.packages],
            selected_package=selected_package,
        )
        cart_item.total_price = calculate_item_total(cart_item)

        self.items.append(cart_item)
        self._persist()
        logging.info(f"CARRINHO >>> Item adicionado: {cart_item.id} ({selected_package or 'padrão'}) x {quantity}")
        return cart_item

    def remove_item(self, item_id: str) -> None:
        self.items = [item for item in self.items if item.id != item_id]
        self._persist()

    def update_quantity(self, item_id: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise CartValidationError("Quantity must be an integer")
        if quantity < 1:
            return

        for item in self.items:
            if item.id == item_id:
                item.quantity = quantity
                item.total_price = calculate_item_total(item)
        self._persist()

    def update_package(self, item_id: str, package_id: str) -> None:
        merged: List[CartItem] = []
        for item in self.items:
            if item.id != item_id:
                merged.append(item)
                continue

            if find_package(item, package_id) is None:
                # TODO: confirmar com o produto se pacote inexistente deve ser rejeitado
                logging.warning(f"CARRINHO >>> Pacote {package_id!r} não existe no item {item_id}, usando preço base")
            item.selected_package = package_id

            # Uma linha por (produto, pacote): linhas que passam a coincidir são somadas
            twin = next((m for m in merged if m.id == item_id and m.selected_package == package_id), None)
            if twin:
                twin.quantity += item.quantity
                twin.total_price = calculate_item_total(twin)
                continue

            item.total_price = calculate_item_total(item)
            merged.append(item)

        self.items = merged
        self._persist()

    def clear_cart(self) -> None:
        self.items = []
        if self.store is not None:
            self.store.clear()

    # Derivações puras

    @staticmethod
    def get_item_price(item: CartItem) -> float:
        return get_item_price(item)

    def get_cart_total(self) -> float:
        return sum(item.total_price for item in self.items)

    def get_cart_count(self) -> int:
        return sum(item.quantity for item in self.items)
