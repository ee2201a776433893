# storefront/reports/export.py
from datetime import date, datetime, time
from io import BytesIO
from typing import List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from storefront.helpers.formatters import format_currency, format_order_date
from storefront.models.order import Order

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (cabeçalho, largura)
COLUMNS: List[Tuple[str, int]] = [
    ("Order ID", 15),
    ("Customer Name", 20),
    ("Customer Email", 25),
    ("Customer Phone", 15),
    ("Shipping Address", 40),
    ("Order Date", 12),
    ("Total Amount", 12),
    ("Payment Method", 15),
    ("Status", 12),
    ("Items Count", 10),
    ("Items Details", 60),
]


def date_range(start_date: Optional[date], end_date: Optional[date]) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Intervalo de filtro; a data final vale até 23:59:59.999999."""
    start = datetime.combine(start_date, time.min) if start_date else None
    end = datetime.combine(end_date, time.max) if end_date else None
    return start, end


def shipping_line(order: Order) -> str:
    parts = [order.shipping_address, order.shipping_city, order.shipping_postal_code, order.shipping_country]
    return ", ".join(p or "" for p in parts)


def items_details(order: Order) -> str:
    return "; ".join(
        f"{item.product.name if item.product else f'Product #{item.product_id}'} "
        f"({item.package_type or 'Default'}) x {item.quantity} @ {format_currency(item.unit_price)}"
        for item in order.items
    )


def order_row(order: Order) -> list:
    return [
        order.id,
        order.customer_name,
        order.customer_email or "",
        order.customer_phone or "",
        shipping_line(order),
        format_order_date(order.created_at),
        order.total_amount,
        order.payment_method,
        order.status.value if hasattr(order.status, "value") else order.status,
        len(order.items),
        items_details(order),
    ]


def build_orders_workbook(orders: List[Order]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Orders"

    sheet.append([header for header, _ in COLUMNS])
    for order in orders:
        sheet.append(order_row(order))

    for index, (_, width) in enumerate(COLUMNS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
