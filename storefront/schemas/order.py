from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from storefront.enums.order_status import OrderStatus


class CheckoutRequest(BaseModel):
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: str = Field(..., min_length=1)
    shipping_city: str = Field(..., min_length=1)
    shipping_postal_code: Optional[str] = None
    shipping_country: str = "Bangladesh"
    payment_method: str = "cash_on_delivery"


class OrderItemRead(BaseModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    product_image: Optional[str] = None
    package_type: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float


class OrderRead(BaseModel):
    id: int
    customer_name: str
    status: OrderStatus
    total_amount: float
    payment_method: str
    created_at: datetime
    items: List[OrderItemRead] = []


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class MonthlyOrderStats(BaseModel):
    month: str
    year: int
    total_orders: int
    delivered_orders: int
    pending_orders: int
