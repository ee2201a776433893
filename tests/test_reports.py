"""Tests for the order export and the monthly statistics."""

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import load_workbook

from storefront.enums.order_status import OrderStatus
from storefront.models.order import Order, OrderItem
from storefront.reports.export import COLUMNS, date_range
from storefront.reports.stats import monthly_order_stats, window_start


def create_order(session, product, created_at, status=OrderStatus.PENDING, package_type=None):
    order = Order(
        customer_name="Ana",
        customer_email="ana@example.com",
        shipping_address="Rua 1",
        shipping_city="Dhaka",
        shipping_postal_code="1200",
        status=status,
        total_amount=product.price * 2,
        created_at=created_at,
    )
    order.items.append(
        OrderItem(product_id=product.id, package_type=package_type, quantity=2, unit_price=product.price, total_price=product.price * 2)
    )
    session.add(order)
    session.commit()
    session.refresh(order)
    return order


class TestExport:
    def test_requires_admin(self, client, user_headers):
        assert client.get("/admin/orders/export", headers=user_headers).status_code == 403

    def test_workbook_rows(self, client, session, products, admin_headers):
        create_order(session, products[1], datetime(2026, 3, 10, 9, 30), package_type="Large")

        response = client.get("/admin/orders/export", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
        assert "orders.xlsx" in response.headers["content-disposition"]

        sheet = load_workbook(BytesIO(response.content))["Orders"]
        rows = list(sheet.iter_rows(values_only=True))
        assert list(rows[0]) == [header for header, _ in COLUMNS]
        assert len(rows) == 2

        row = dict(zip(rows[0], rows[1]))
        assert row["Order Date"] == "2026-03-10"
        assert row["Shipping Address"] == "Rua 1, Dhaka, 1200, Bangladesh"
        assert row["Items Count"] == 1
        assert row["Items Details"].startswith("B (Large) x 2 @ ")
        assert row["Status"] == "PENDING"
        assert sheet.column_dimensions["K"].width == 60

    def test_date_filter_includes_whole_end_day(self, client, session, products, admin_headers):
        create_order(session, products[0], datetime(2026, 3, 1, 8, 0))
        create_order(session, products[0], datetime(2026, 3, 31, 23, 59))
        create_order(session, products[0], datetime(2026, 4, 1, 0, 1))

        response = client.get(
            "/admin/orders/export", params={"startDate": "2026-03-01", "endDate": "2026-03-31"}, headers=admin_headers
        )

        rows = list(load_workbook(BytesIO(response.content))["Orders"].iter_rows(values_only=True))
        assert len(rows) == 3

    def test_date_range_bounds(self):
        start, end = date_range(datetime(2026, 1, 1).date(), datetime(2026, 1, 2).date())

        assert start == datetime(2026, 1, 1)
        assert end.date() == datetime(2026, 1, 2).date()
        assert (end.hour, end.minute, end.second) == (23, 59, 59)


class TestMonthlyStats:
    def test_window_crosses_year(self):
        assert window_start(datetime(2026, 3, 15)) == (2025, 4)
        assert window_start(datetime(2026, 12, 1)) == (2026, 1)

    def test_buckets(self):
        now = datetime(2026, 3, 15)
        rows = [
            (datetime(2026, 3, 1), OrderStatus.DELIVERED),
            (datetime(2026, 3, 2), OrderStatus.PENDING),
            (datetime(2025, 4, 30), OrderStatus.CANCELLED),
            (datetime(2025, 3, 31), OrderStatus.DELIVERED),
        ]

        stats = monthly_order_stats(rows, now)

        assert len(stats) == 12
        assert (stats[0].month, stats[0].year) == ("Apr", 2025)
        assert (stats[-1].month, stats[-1].year) == ("Mar", 2026)
        assert stats[-1].total_orders == 2
        assert stats[-1].delivered_orders == 1
        assert stats[-1].pending_orders == 1
        assert stats[0].total_orders == 1
        assert sum(s.total_orders for s in stats) == 3

    def test_endpoint(self, client, session, products, admin_headers):
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        create_order(session, products[0], now, status=OrderStatus.DELIVERED)
        create_order(session, products[0], now)

        response = client.get("/admin/stats/monthly-orders", headers=admin_headers)

        assert response.status_code == 200
        current = response.json()[-1]
        assert current["total_orders"] == 2
        assert current["delivered_orders"] == 1
        assert current["pending_orders"] == 1


class TestOrderStatus:
    def test_admin_updates_status(self, client, session, products, admin_headers):
        order = create_order(session, products[0], datetime(2026, 3, 10))

        response = client.patch(f"/admin/orders/{order.id}/status", json={"status": "SHIPPED"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "SHIPPED"

    def test_admin_lists_orders(self, client, session, products, admin_headers):
        create_order(session, products[0], datetime(2026, 3, 10))

        response = client.get("/admin/orders", headers=admin_headers)

        assert len(response.json()) == 1
