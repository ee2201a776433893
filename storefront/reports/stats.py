# storefront/reports/stats.py
from datetime import datetime
from typing import Iterable, List, Tuple

from storefront.enums.order_status import OrderStatus
from storefront.schemas.order import MonthlyOrderStats

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def window_start(now: datetime) -> Tuple[int, int]:
    """(ano, mês) do primeiro dos 12 meses que terminam no mês atual."""
    month_index = now.year * 12 + (now.month - 1) - 11
    return month_index // 12, month_index % 12 + 1


def monthly_order_stats(orders: Iterable[Tuple[datetime, OrderStatus]], now: datetime) -> List[MonthlyOrderStats]:
    start_year, start_month = window_start(now)
    start_index = start_year * 12 + (start_month - 1)

    totals = [0] * 12
    delivered = [0] * 12

    for created_at, status in orders:
        offset = created_at.year * 12 + (created_at.month - 1) - start_index
        if 0 <= offset < 12:
            totals[offset] += 1
            if status == OrderStatus.DELIVERED:
                delivered[offset] += 1

    stats = []
    for offset in range(12):
        year, month = divmod(start_index + offset, 12)
        stats.append(
            MonthlyOrderStats(
                month=MONTH_NAMES[month],
                year=year,
                total_orders=totals[offset],
                delivered_orders=delivered[offset],
                pending_orders=totals[offset] - delivered[offset],
            )
        )
    return stats
