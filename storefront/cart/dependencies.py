import secrets
from typing import Iterator

from fastapi import Depends, Request, Response
from sqlmodel import Session

from storefront.cart.provider import CartProvider
from storefront.cart.storage import DatabaseStorage
from storefront.configuration.settings import Configuration
from storefront.database.connection import get_session

configuration = Configuration()

CART_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def get_cart_key(request: Request, response: Response) -> str:
    """Chave do carrinho do navegador; criada no primeiro acesso."""
    cart_key = request.cookies.get(configuration.cart_cookie_name)
    if not cart_key:
        cart_key = secrets.token_urlsafe(16)
        response.set_cookie(
            configuration.cart_cookie_name,
            cart_key,
            max_age=CART_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
            secure=configuration.is_production,
        )
    return cart_key


def get_cart_provider(
    cart_key: str = Depends(get_cart_key),
    session: Session = Depends(get_session),
) -> Iterator[CartProvider]:
    provider = CartProvider(DatabaseStorage(session, namespace=cart_key))
    provider.open()
    try:
        yield provider
    finally:
        provider.close()
