from datetime import datetime
from typing import Optional
from babel.numbers import format_currency as babel_format_currency
from babel.dates import format_date as babel_format_date

from storefront.configuration.settings import Configuration

configuration = Configuration()


def format_currency(value: float, currency: Optional[str] = None, locale_str: Optional[str] = None) -> str:
    return babel_format_currency(value, currency or configuration.currency, locale=locale_str or configuration.locale)


def format_order_date(date: datetime, locale_str: Optional[str] = None) -> str:
    return babel_format_date(date, "yyyy-MM-dd", locale=locale_str or configuration.locale)
