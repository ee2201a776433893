import logging
from datetime import date, datetime, timezone
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from storefront.core.middlewares.users import require_admin
from storefront.database.connection import get_session
from storefront.models.order import Order, OrderItem
from storefront.reports.export import XLSX_MEDIA_TYPE, build_orders_workbook, date_range
from storefront.reports.stats import monthly_order_stats, window_start
from storefront.routes.order import to_order_read
from storefront.schemas.order import MonthlyOrderStats, OrderRead, OrderStatusUpdate

db_session = get_session


class AdminOrderRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_api_route("/admin/orders", self.list_orders, methods=["GET"], response_model=List[OrderRead])
        self.add_api_route("/admin/orders/export", self.export_orders, methods=["GET"])
        self.add_api_route("/admin/orders/{order_id}/status", self.update_order_status, methods=["PATCH"], response_model=OrderRead)
        self.add_api_route("/admin/stats/monthly-orders", self.monthly_orders, methods=["GET"], response_model=List[MonthlyOrderStats])

    def list_orders(self, admin: dict = Depends(require_admin), session: Session = Depends(db_session)):
        orders = session.exec(
            select(Order)
            .options(selectinload(Order.items).selectinload(OrderItem.product))
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()
        return [to_order_read(order) for order in orders]

    def export_orders(
        self,
        start_date: Optional[date] = Query(None, alias="startDate"),
        end_date: Optional[date] = Query(None, alias="endDate"),
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        start, end = date_range(start_date, end_date)

        statement = select(Order).options(selectinload(Order.items).selectinload(OrderItem.product))
        if start:
            statement = statement.where(Order.created_at >= start)
        if end:
            statement = statement.where(Order.created_at <= end)

        try:
            orders = session.exec(statement.order_by(Order.created_at.desc())).all()
            content = build_orders_workbook(orders)
        except Exception as e:
            logging.error(f"RELATÓRIO >>> Erro ao exportar pedidos: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export orders")

        logging.info(f"RELATÓRIO >>> {len(orders)} pedidos exportados")
        return Response(
            content=content,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": 'attachment; filename="orders.xlsx"'},
        )

    def update_order_status(
        self,
        order_id: int,
        update: OrderStatusUpdate,
        admin: dict = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        order = session.get(Order, order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")

        order.status = update.status
        order.updated_at = datetime.now(timezone.utc)
        session.add(order)
        session.commit()
        session.refresh(order)
        return to_order_read(order)

    def monthly_orders(self, admin: dict = Depends(require_admin), session: Session = Depends(db_session)):
        now = datetime.now(timezone.utc)
        start_year, start_month = window_start(now)

        try:
            rows = session.exec(
                select(Order.created_at, Order.status).where(Order.created_at >= datetime(start_year, start_month, 1))
            ).all()
        except Exception as e:
            logging.error(f"RELATÓRIO >>> Erro ao buscar estatísticas mensais: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching statistics")

        return monthly_order_stats(rows, now)
