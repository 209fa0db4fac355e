"""
Invoice mutation pipeline tests: validation, persistence, cache and redirect.
"""
from unittest.mock import call

import pytest
from django.db import DatabaseError

from billing.services.invoice_service import InvoiceService, to_minor_units
from billing.services.outcomes import FormState, PersistFailed, Redirect, ValidationFailed
from billing.validation.errors import DisabledOperationError


@pytest.fixture
def service(collaborators, fixed_today):
    return InvoiceService(
        persistence=collaborators.persistence,
        view_cache=collaborators.view_cache,
        navigator=collaborators.navigator,
        clock=lambda: fixed_today,
    )


def call_names(manager):
    return [c[0] for c in manager.mock_calls]


class TestCreateInvoice:
    def test_persists_minor_units_and_today(self, service, collaborators):
        outcome = service.create_invoice(FormState(), {
            'customerId': 'cust-1', 'amount': '157.95', 'status': 'paid',
        })

        assert outcome == Redirect('/dashboard/invoices')
        collaborators.persistence.execute.assert_called_once_with(
            "INSERT INTO invoices (customer_id, amount, status, date) VALUES (%s, %s, %s, %s)",
            ['cust-1', 15795, 'paid', '2024-03-15'],
        )

    def test_invalidates_then_redirects_once(self, service, collaborators):
        service.create_invoice(FormState(), {'customerId': 'cust-1', 'amount': '10', 'status': 'pending'})

        assert call_names(collaborators) == [
            'persistence.execute',
            'view_cache.invalidate',
            'navigator.redirect',
        ]
        collaborators.view_cache.invalidate.assert_called_once_with('/dashboard/invoices')
        collaborators.navigator.redirect.assert_called_once_with('/dashboard/invoices')

    @pytest.mark.parametrize('amount', ['0', '-1', '-250.50'])
    def test_non_positive_amount_never_writes(self, service, collaborators, amount):
        outcome = service.create_invoice(FormState(), {
            'customerId': 'cust-1', 'amount': amount, 'status': 'pending',
        })

        assert isinstance(outcome, ValidationFailed)
        assert outcome.message == 'Missing Fields. Failed to Create Invoice.'
        assert outcome.errors == {'amount': ['Please enter an amount greater than $0.']}
        assert collaborators.mock_calls == []

    def test_sub_cent_amount_never_writes(self, service, collaborators):
        outcome = service.create_invoice(FormState(), {
            'customerId': 'cust-1', 'amount': '0.004', 'status': 'paid',
        })

        assert isinstance(outcome, ValidationFailed)
        assert outcome.errors == {'amount': ['Please enter an amount greater than $0.']}
        assert collaborators.mock_calls == []

    @pytest.mark.parametrize('amount', ['1e30', '123456789012345678901234567', '1e999999', '21474836.48'])
    def test_amount_too_large_for_storage_never_writes(self, service, collaborators, amount):
        outcome = service.create_invoice(FormState(), {
            'customerId': 'cust-1', 'amount': amount, 'status': 'paid',
        })

        assert isinstance(outcome, ValidationFailed)
        assert outcome.errors == {'amount': ['Please enter an amount less than $21,474,836.48.']}
        assert collaborators.mock_calls == []

    def test_largest_storable_amount(self, service, collaborators):
        service.create_invoice(FormState(), {
            'customerId': 'cust-1', 'amount': '21474836.47', 'status': 'paid',
        })
        assert collaborators.persistence.execute.call_args[0][1][1] == 2147483647

    def test_unknown_status_never_writes(self, service, collaborators):
        outcome = service.create_invoice(None, {'customerId': 'cust-1', 'amount': '5', 'status': 'void'})

        assert isinstance(outcome, ValidationFailed)
        assert 'status' in outcome.errors
        collaborators.persistence.execute.assert_not_called()

    def test_database_error_returns_message_without_side_effects(self, service, collaborators):
        collaborators.persistence.execute.side_effect = DatabaseError('connection refused')

        outcome = service.create_invoice(FormState(), {'customerId': 'cust-1', 'amount': '5', 'status': 'paid'})

        assert outcome == PersistFailed(message='Database Error: Failed to Create Invoice.')
        assert outcome.errors == {}
        collaborators.view_cache.invalidate.assert_not_called()
        collaborators.navigator.redirect.assert_not_called()

    def test_other_errors_propagate(self, service, collaborators):
        collaborators.persistence.execute.side_effect = RuntimeError('bug')

        with pytest.raises(RuntimeError):
            service.create_invoice(FormState(), {'customerId': 'cust-1', 'amount': '5', 'status': 'paid'})


class TestUpdateInvoice:
    def test_updates_by_id_without_touching_date(self, service, collaborators):
        outcome = service.update_invoice('inv-9', FormState(), {
            'customerId': 'cust-2', 'amount': '20.5', 'status': 'pending',
        })

        assert outcome == Redirect('/dashboard/invoices')
        sql, params = collaborators.persistence.execute.call_args.args
        assert sql == "UPDATE invoices SET customer_id = %s, amount = %s, status = %s WHERE id = %s"
        assert params == ['cust-2', 2050, 'pending', 'inv-9']
        assert 'date' not in sql
        assert collaborators.mock_calls[1:] == [
            call.view_cache.invalidate('/dashboard/invoices'),
            call.navigator.redirect('/dashboard/invoices'),
        ]

    def test_validation_failure_keeps_create_wording(self, service, collaborators):
        outcome = service.update_invoice('inv-9', FormState(), {'customerId': 'cust-2', 'amount': '0', 'status': 'paid'})

        assert outcome.message == 'Missing Fields. Failed to Create Invoice.'
        collaborators.persistence.execute.assert_not_called()

    @pytest.mark.parametrize('amount', ['1e30', '0.001'])
    def test_unstorable_amount_never_writes(self, service, collaborators, amount):
        outcome = service.update_invoice('inv-9', FormState(), {'customerId': 'cust-2', 'amount': amount, 'status': 'paid'})

        assert isinstance(outcome, ValidationFailed)
        assert list(outcome.errors) == ['amount']
        assert collaborators.mock_calls == []

    def test_database_error(self, service, collaborators):
        collaborators.persistence.execute.side_effect = DatabaseError('deadlock')

        outcome = service.update_invoice('inv-9', FormState(), {'customerId': 'cust-2', 'amount': '3', 'status': 'paid'})

        assert outcome == PersistFailed(message='Database Error: Failed to Update Invoice.')
        collaborators.view_cache.invalidate.assert_not_called()


class TestDeleteInvoice:
    @pytest.mark.parametrize('invoice_id', ['123', '', 'd6e15727-9fe1-4961-8c5b-ea44a9bd81aa'])
    def test_always_disabled(self, service, collaborators, invoice_id):
        with pytest.raises(DisabledOperationError) as exc_info:
            service.delete_invoice(invoice_id)

        assert exc_info.value.message == 'Failed to Delete Invoice'
        assert exc_info.value.status == 501
        assert collaborators.mock_calls == []


class TestMinorUnits:
    @pytest.mark.parametrize('amount,expected', [
        ('1', 100),
        ('0.01', 1),
        ('157.95', 15795),
        ('0.005', 1),
        ('10.004', 1000),
    ])
    def test_conversion(self, amount, expected):
        from decimal import Decimal
        assert to_minor_units(Decimal(amount)) == expected
