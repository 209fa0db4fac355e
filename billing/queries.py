"""
Read-side SQL for the dashboard pages.

All statements use positional parameters; amounts come back in minor
units unless stated otherwise.
"""

import math
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.conf import settings

from .services.collaborators import SqlPersistence


INVOICE_SEARCH_WHERE = """
    WHERE LOWER(customers.name) LIKE %s ESCAPE '\\'
       OR LOWER(customers.email) LIKE %s ESCAPE '\\'
       OR CAST(invoices.amount AS TEXT) LIKE %s ESCAPE '\\'
       OR CAST(invoices.date AS TEXT) LIKE %s ESCAPE '\\'
       OR LOWER(invoices.status) LIKE %s ESCAPE '\\'
"""


def _pattern(query: str) -> str:
    """Substring LIKE pattern; wildcards typed by the user match literally."""
    text = query.strip().lower()
    for char in ("\\", "%", "_"):
        text = text.replace(char, "\\" + char)
    return f"%{text}%"


def fetch_card_data(persistence=None) -> Dict[str, int]:
    db = persistence if persistence is not None else SqlPersistence()
    invoices = db.fetch_one(
        """
        SELECT COUNT(*) AS invoice_count,
               COALESCE(SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END), 0) AS total_paid,
               COALESCE(SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END), 0) AS total_pending
        FROM invoices
        """
    ) or {}
    customers = db.fetch_one("SELECT COUNT(*) AS customer_count FROM customers") or {}
    return {
        "invoice_count": int(invoices.get("invoice_count") or 0),
        "customer_count": int(customers.get("customer_count") or 0),
        "total_paid": int(invoices.get("total_paid") or 0),
        "total_pending": int(invoices.get("total_pending") or 0),
    }


def fetch_latest_invoices(limit: int = 5, persistence=None) -> List[Dict[str, Any]]:
    db = persistence if persistence is not None else SqlPersistence()
    return db.fetch_all(
        """
        SELECT invoices.id, invoices.amount, invoices.status, invoices.date,
               customers.name, customers.email, customers.image_url
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        ORDER BY invoices.date DESC
        LIMIT %s
        """,
        [limit],
    )


def fetch_filtered_invoices(query: str = "", page: int = 1, persistence=None) -> List[Dict[str, Any]]:
    db = persistence if persistence is not None else SqlPersistence()
    per_page = settings.BILLING_ITEMS_PER_PAGE
    offset = (max(page, 1) - 1) * per_page
    pattern = _pattern(query)
    return db.fetch_all(
        f"""
        SELECT invoices.id, invoices.customer_id, invoices.amount, invoices.status, invoices.date,
               customers.name, customers.email, customers.image_url
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        {INVOICE_SEARCH_WHERE}
        ORDER BY invoices.date DESC
        LIMIT %s OFFSET %s
        """,
        [pattern] * 5 + [per_page, offset],
    )


def fetch_invoices_pages(query: str = "", persistence=None) -> int:
    db = persistence if persistence is not None else SqlPersistence()
    row = db.fetch_one(
        f"""
        SELECT COUNT(*) AS total
        FROM invoices
        JOIN customers ON invoices.customer_id = customers.id
        {INVOICE_SEARCH_WHERE}
        """,
        [_pattern(query)] * 5,
    ) or {}
    return math.ceil(int(row.get("total") or 0) / settings.BILLING_ITEMS_PER_PAGE)


def fetch_invoice_by_id(invoice_id: str, persistence=None) -> Optional[Dict[str, Any]]:
    """Invoice row for the edit form, with ``amount`` in major units."""
    db = persistence if persistence is not None else SqlPersistence()
    invoice = db.fetch_one(
        "SELECT id, customer_id, amount, status FROM invoices WHERE id = %s",
        [invoice_id],
    )
    if invoice is None:
        return None
    invoice["amount"] = Decimal(invoice["amount"]) / 100
    return invoice


def fetch_customers(persistence=None) -> List[Dict[str, Any]]:
    db = persistence if persistence is not None else SqlPersistence()
    return db.fetch_all("SELECT id, name FROM customers ORDER BY name ASC")


def fetch_filtered_customers(query: str = "", persistence=None) -> List[Dict[str, Any]]:
    db = persistence if persistence is not None else SqlPersistence()
    pattern = _pattern(query)
    return db.fetch_all(
        """
        SELECT customers.id, customers.name, customers.email, customers.address, customers.image_url,
               COUNT(invoices.id) AS total_invoices,
               COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
               COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
        FROM customers
        LEFT JOIN invoices ON customers.id = invoices.customer_id
        WHERE LOWER(customers.name) LIKE %s ESCAPE '\\'
           OR LOWER(customers.email) LIKE %s ESCAPE '\\'
        GROUP BY customers.id, customers.name, customers.email, customers.address, customers.image_url
        ORDER BY customers.name ASC
        """,
        [pattern, pattern],
    )
