# storefront/routes/cart.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from storefront.cart.dependencies import get_cart_provider
from storefront.cart.provider import CartProvider
from storefront.cart.reducer import CartReducer
from storefront.core.exceptions.app_exception import AppHttpException
from storefront.core.exceptions.errors import CartValidationError
from storefront.database.connection import get_session
from storefront.models.product import Product
from storefront.schemas.cart import (
    CartItemCreate,
    CartPackage,
    CartPackageUpdate,
    CartProduct,
    CartQuantityUpdate,
    CartRead,
)
from storefront.storage.bucket import resolve_public_url

db_session = get_session


def to_cart_product(product: Product) -> CartProduct:
    return CartProduct(
        id=str(product.id),
        name=product.name,
        description=product.description or "",
        price=product.price,
        image=resolve_public_url(product.image),
        category=product.category.name if product.category else "",
        packages=[CartPackage(id=pkg.id, name=pkg.name, price=pkg.price) for pkg in product.packages],
    )


def cart_response(cart: CartReducer) -> CartRead:
    return CartRead(items=cart.items, total=cart.get_cart_total(), count=cart.get_cart_count())


def ensure_stock(product: Product, requested: int) -> None:
    if requested > (product.stock or 0):
        raise AppHttpException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Not enough stock",
            solution=f"Only {product.stock} unit(s) available",
        )


class CartRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/cart", self.get_cart, methods=["GET"], response_model=CartRead)
        self.add_api_route("/cart", self.clear_cart, methods=["DELETE"], response_model=CartRead)
        self.add_api_route("/cart/items", self.add_item, methods=["POST"], response_model=CartRead)
        self.add_api_route("/cart/items/{item_id}/quantity", self.update_quantity, methods=["PATCH"], response_model=CartRead)
        self.add_api_route("/cart/items/{item_id}/package", self.update_package, methods=["PATCH"], response_model=CartRead)
        self.add_api_route("/cart/items/{item_id}", self.remove_item, methods=["DELETE"], response_model=CartRead)

    def get_cart(self, provider: CartProvider = Depends(get_cart_provider)):
        return cart_response(provider.cart)

    def add_item(
        self,
        item_data: CartItemCreate,
        provider: CartProvider = Depends(get_cart_provider),
        session: Session = Depends(db_session),
    ):
        product = session.get(Product, item_data.product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

        cart = provider.cart
        selected_package = item_data.selected_package or ""

        # O reducer não controla estoque; quem chama garante o limite.
        # Todas as linhas do produto contam, qualquer que seja o pacote.
        in_cart = sum(item.quantity for item in cart.items if item.id == str(product.id))
        ensure_stock(product, in_cart + item_data.quantity)

        try:
            cart.add_item(to_cart_product(product), item_data.quantity, selected_package)
        except CartValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        return cart_response(cart)

    def update_quantity(
        self,
        item_id: str,
        update: CartQuantityUpdate,
        provider: CartProvider = Depends(get_cart_provider),
        session: Session = Depends(db_session),
    ):
        cart = provider.cart
        lines = [item for item in cart.items if item.id == item_id]
        if not lines:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found in cart")

        # A quantidade vale para cada linha do produto
        product = session.get(Product, int(item_id)) if item_id.isdigit() else None
        if product is not None and update.quantity >= 1:
            ensure_stock(product, update.quantity * len(lines))

        cart.update_quantity(item_id, update.quantity)
        return cart_response(cart)

    def update_package(
        self,
        item_id: str,
        update: CartPackageUpdate,
        provider: CartProvider = Depends(get_cart_provider),
    ):
        cart = provider.cart
        if not any(item.id == item_id for item in cart.items):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found in cart")

        cart.update_package(item_id, update.package_id)
        return cart_response(cart)

    def remove_item(self, item_id: str, provider: CartProvider = Depends(get_cart_provider)):
        provider.cart.remove_item(item_id)
        return cart_response(provider.cart)

    def clear_cart(self, provider: CartProvider = Depends(get_cart_provider)):
        provider.cart.clear_cart()
        logging.info("CARRINHO >>> Carrinho limpo pelo cliente")
        return cart_response(provider.cart)
