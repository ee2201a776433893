# storefront/functions/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler

from storefront.functions.cart_jobs import purge_stale_carts_job


def start_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone="UTC")

    # Roda 1x por dia, 3 da manhã UTC
    scheduler.add_job(purge_stale_carts_job, "cron", hour=3, minute=0)

    scheduler.start()
    return scheduler
