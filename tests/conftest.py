from datetime import date
from unittest.mock import MagicMock

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import Client

from billing.services.collaborators import Navigator, SqlPersistence

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def collaborators():
    """Mocked persistence, view cache and navigator sharing one call log."""
    manager = MagicMock()
    persistence = MagicMock()
    view_cache = MagicMock()
    navigator = MagicMock()
    navigator.redirect.side_effect = Navigator().redirect
    manager.attach_mock(persistence, "persistence")
    manager.attach_mock(view_cache, "view_cache")
    manager.attach_mock(navigator, "navigator")
    return manager


@pytest.fixture
def fixed_today():
    return date(2024, 3, 15)


@pytest.fixture
def client():
    return Client()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='TestPass123!'
    )


@pytest.fixture
def authenticated_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def persistence(db):
    return SqlPersistence()


@pytest.fixture
def customer(persistence):
    persistence.execute(
        "INSERT INTO customers (name, email, address, image_url) VALUES (%s, %s, %s, %s)",
        ["Delba de Oliveira", "delba@oliveira.com", "12 Harbour Road", "/customers/default.png"],
    )
    return persistence.fetch_one("SELECT * FROM customers WHERE email = %s", ["delba@oliveira.com"])


@pytest.fixture
def invoice(persistence, customer):
    persistence.execute(
        "INSERT INTO invoices (customer_id, amount, status, date) VALUES (%s, %s, %s, %s)",
        [customer["id"], 15795, "pending", "2024-01-05"],
    )
    return persistence.fetch_one("SELECT * FROM invoices WHERE customer_id = %s", [customer["id"]])
