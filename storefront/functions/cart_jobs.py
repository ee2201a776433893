from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

from sqlmodel import Session, select

from storefront.configuration.settings import Configuration
from storefront.database.connection import session_scope
from storefront.models.storage_record import StorageRecord

configuration = Configuration()


def purge_stale_cart_records(session: Session, now: Optional[datetime] = None) -> int:
    now = now or datetime.now(timezone.utc)
    threshold = now - timedelta(days=configuration.cart_record_ttl_days)

    records = session.exec(
        select(StorageRecord).where(StorageRecord.updated_at < threshold.replace(tzinfo=None))
    ).all()

    for record in records:
        session.delete(record)

    session.commit()
    logging.info(f"CARRINHO >>> Apagando {len(records)} carrinhos abandonados")
    return len(records)


def purge_stale_carts_job():
    with session_scope() as session:
        purge_stale_cart_records(session)
