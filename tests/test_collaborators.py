"""
Tests for the SQL persistence and listing cache collaborators.
"""
import pytest
from django.core.cache import cache

from billing.services.collaborators import DjangoViewCache, Navigator
from billing.services.outcomes import Redirect


class TestDjangoViewCache:
    def test_get_miss(self):
        assert DjangoViewCache().get('/dashboard/invoices', 'q=&page=1') is None

    def test_set_then_get(self):
        view_cache = DjangoViewCache()
        view_cache.set('/dashboard/invoices', 'q=&page=1', {'invoices': [1, 2]})
        assert view_cache.get('/dashboard/invoices', 'q=&page=1') == {'invoices': [1, 2]}

    def test_invalidate_drops_every_variant(self):
        view_cache = DjangoViewCache()
        view_cache.set('/dashboard/invoices', 'q=&page=1', 'first')
        view_cache.set('/dashboard/invoices', 'q=paid&page=2', 'second')

        view_cache.invalidate('/dashboard/invoices')

        assert view_cache.get('/dashboard/invoices', 'q=&page=1') is None
        assert view_cache.get('/dashboard/invoices', 'q=paid&page=2') is None

    def test_invalidate_is_scoped_to_path(self):
        view_cache = DjangoViewCache()
        view_cache.set('/dashboard/customers', 'q=', ['customer'])

        view_cache.invalidate('/dashboard/invoices')

        assert view_cache.get('/dashboard/customers', 'q=') == ['customer']

    def test_invalidate_without_prior_entries(self):
        view_cache = DjangoViewCache()
        view_cache.invalidate('/dashboard/customers')
        view_cache.set('/dashboard/customers', 'q=', 'fresh')
        assert view_cache.get('/dashboard/customers', 'q=') == 'fresh'

    def test_invalidate_after_version_eviction(self):
        view_cache = DjangoViewCache()
        view_cache.set('/dashboard/invoices', '', 'stale')
        cache.delete(view_cache._version_key('/dashboard/invoices'))

        view_cache.invalidate('/dashboard/invoices')

        assert view_cache.get('/dashboard/invoices', '') is None


class TestNavigator:
    def test_redirect_outcome(self):
        assert Navigator().redirect('/dashboard/customers') == Redirect(path='/dashboard/customers')


@pytest.mark.django_db
class TestSqlPersistence:
    def test_execute_and_fetch(self, persistence):
        affected = persistence.execute(
            "INSERT INTO customers (name, email, address, image_url) VALUES (%s, %s, %s, %s)",
            ["Amy Burns", "amy@burns.com", "9 Bay Street", "/customers/default.png"],
        )
        row = persistence.fetch_one("SELECT name, email, image_url FROM customers WHERE email = %s", ["amy@burns.com"])

        assert affected == 1
        assert row == {"name": "Amy Burns", "email": "amy@burns.com", "image_url": "/customers/default.png"}

    def test_ids_are_assigned_by_the_database(self, customer):
        assert customer["id"]

    def test_parameters_are_not_interpolated(self, persistence, customer):
        rows = persistence.fetch_all("SELECT id FROM customers WHERE name = %s", ["x' OR '1'='1"])
        assert rows == []

    def test_fetch_one_missing(self, persistence):
        assert persistence.fetch_one("SELECT id FROM invoices WHERE id = %s", ["missing"]) is None

