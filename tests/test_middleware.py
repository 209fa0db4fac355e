from django.test import RequestFactory

from billing.middleware import ErrorHandlingMiddleware
from billing.validation.errors import DisabledOperationError


def handle(request, exc):
    return ErrorHandlingMiddleware(lambda r: None).process_exception(request, exc)


class TestErrorHandlingMiddleware:
    def test_path_alone_does_not_select_json(self):
        request = RequestFactory().post('/api/invoices/1/delete')
        response = handle(request, DisabledOperationError("Failed to Delete Invoice"))

        assert response.status_code == 501
        assert response['Content-Type'].startswith('text/html')

    def test_accept_header_selects_json(self):
        request = RequestFactory().post('/dashboard/invoices/1/delete', HTTP_ACCEPT='application/json')
        response = handle(request, DisabledOperationError("Failed to Delete Invoice"))

        assert response.status_code == 501
        assert response['Content-Type'] == 'application/json'

    def test_unexpected_error_is_generic_500(self, settings):
        settings.DEBUG = False
        request = RequestFactory().get('/dashboard/invoices', HTTP_ACCEPT='application/json')
        response = handle(request, RuntimeError("boom"))

        assert response.status_code == 500
        assert b'Something went wrong!' in response.content
        assert b'boom' not in response.content
