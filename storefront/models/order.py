from datetime import datetime, timezone
from typing import Optional, List, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel
from sqlalchemy import Column, Enum

from storefront.enums.order_status import OrderStatus

if TYPE_CHECKING:
    from storefront.models.user import User
    from storefront.models.product import Product

class Order(SQLModel, table=True):
    __tablename__ = "tb_order"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: Optional[int] = Field(default=None, foreign_key="tb_user.id")
    user: Optional["User"] = Relationship(back_populates="orders")

    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    shipping_address: str
    shipping_city: str
    shipping_postal_code: Optional[str] = None
    shipping_country: str = Field(default="Bangladesh")

    payment_method: str = Field(default="cash_on_delivery")
    status: OrderStatus = Field(default=OrderStatus.PENDING, sa_column=Column(Enum(OrderStatus), nullable=False))
    total_amount: float = Field(default=0.0)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)
    updated_at: Optional[datetime] = None

    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class OrderItem(SQLModel, table=True):
    __tablename__ = "tb_order_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: Optional[int] = Field(default=None, foreign_key="tb_order.id")
    product_id: int = Field(foreign_key="tb_product.id")

    package_type: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0)
    total_price: float = Field(default=0.0)

    order: Optional[Order] = Relationship(back_populates="items")
    product: Optional["Product"] = Relationship()
