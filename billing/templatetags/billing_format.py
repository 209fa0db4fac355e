from datetime import date, datetime
from decimal import Decimal

from django import template

register = template.Library()


@register.filter
def currency(amount):
    """Format an amount in minor units as dollars, e.g. 123456 -> $1,234.56."""
    if amount in (None, ""):
        return ""
    dollars = Decimal(amount) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


@register.filter
def local_date(value):
    """Render an ISO date (string or date) as e.g. Jan 5, 2024."""
    if not value:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = date.fromisoformat(str(value)[:10])
        except ValueError:
            return value
    return f"{value:%b} {value.day}, {value.year}"
