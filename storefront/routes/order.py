# storefront/routes/order.py
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from storefront.auth.auth import AuthRouter
from storefront.cart.dependencies import get_cart_provider
from storefront.cart.pricing import find_package, get_item_price
from storefront.cart.provider import CartProvider
from storefront.database.connection import get_session
from storefront.models.order import Order, OrderItem
from storefront.models.product import Product
from storefront.models.user import User
from storefront.schemas.order import CheckoutRequest, OrderItemRead, OrderRead
from storefront.storage.bucket import resolve_public_url

db_session = get_session
auth_router = AuthRouter()
get_current_user = auth_router.get_current_user
get_optional_user = auth_router.get_optional_user


def to_order_read(order: Order) -> OrderRead:
    return OrderRead(
        id=order.id,
        customer_name=order.customer_name,
        status=order.status,
        total_amount=order.total_amount,
        payment_method=order.payment_method,
        created_at=order.created_at,
        items=[
            OrderItemRead(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product.name if item.product else None,
                product_image=resolve_public_url(item.product.image) if item.product else None,
                package_type=item.package_type,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in order.items
        ],
    )


class OrderRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/orders/", self.get_my_orders, methods=["GET"], response_model=List[OrderRead])
        self.add_api_route("/orders/", self.create_order, methods=["POST"], response_model=OrderRead, status_code=status.HTTP_201_CREATED)

    def get_my_orders(self, current_user: User = Depends(get_current_user), session: Session = Depends(db_session)):
        orders = session.exec(
            select(Order)
            .where(Order.user_id == current_user.id)
            .options(selectinload(Order.items).selectinload(OrderItem.product))
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()
        return [to_order_read(order) for order in orders]

    def create_order(
        self,
        checkout: CheckoutRequest,
        provider: CartProvider = Depends(get_cart_provider),
        current_user: Optional[User] = Depends(get_optional_user),
        session: Session = Depends(db_session),
    ):
        cart = provider.cart
        if not cart.items:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")

        order = Order(
            user_id=current_user.id if current_user else None,
            customer_email=checkout.customer_email or (current_user.email if current_user else None),
            **checkout.model_dump(exclude={"customer_email"}),
            total_amount=cart.get_cart_total(),
        )

        for cart_item in cart.items:
            product = session.get(Product, int(cart_item.id)) if cart_item.id.isdigit() else None
            if not product:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Product {cart_item.id} is no longer available")
            if product.stock < cart_item.quantity:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Not enough stock for {product.name}")

            product.stock -= cart_item.quantity
            session.add(product)

            package = find_package(cart_item, cart_item.selected_package)
            order.items.append(
                OrderItem(
                    product_id=product.id,
                    package_type=package.name if package else None,
                    quantity=cart_item.quantity,
                    unit_price=get_item_price(cart_item),
                    total_price=cart_item.total_price,
                )
            )

        session.add(order)
        session.commit()
        session.refresh(order)

        cart.clear_cart()
        logging.info(f"PEDIDO >>> Pedido {order.id} criado com {len(order.items)} itens, total {order.total_amount}")
        return to_order_read(order)
