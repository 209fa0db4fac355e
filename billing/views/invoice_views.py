
from django.contrib.auth.decorators import login_required
from django.http import Http404
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from .. import queries
from ..services.collaborators import DjangoViewCache
from ..services.invoice_service import InvoiceService
from ..services.outcomes import FormState
from .helpers import breadcrumbs, page_number, respond_with_outcome


@login_required
def invoice_list(request):
    search_query = request.GET.get('q', '').strip()
    page = page_number(request)

    view_cache = DjangoViewCache()
    variant = f"q={search_query}&page={page}"
    listing = view_cache.get(InvoiceService.LISTING_PATH, variant)
    if listing is None:
        listing = {
            'invoices': queries.fetch_filtered_invoices(search_query, page),
            'total_pages': queries.fetch_invoices_pages(search_query),
        }
        view_cache.set(InvoiceService.LISTING_PATH, variant, listing)

    context = {
        'invoices': listing['invoices'],
        'total_pages': listing['total_pages'],
        'pages': range(1, listing['total_pages'] + 1),
        'current_page': page,
        'search_query': search_query,
        'page_title': 'Invoices',
    }
    return render(request, "pages/invoices/list.html", context)


@login_required
@require_http_methods(["GET", "POST"])
def invoice_create(request):
    context = {
        'customers': queries.fetch_customers(),
        'breadcrumbs': breadcrumbs(
            ('Invoices', reverse('billing:invoice_list')),
            ('Create Invoice', reverse('billing:invoice_create')),
        ),
        'form_action': reverse('billing:invoice_create'),
        'submit_label': 'Create Invoice',
        'page_title': 'Create Invoice',
    }

    if request.method == 'POST':
        outcome = InvoiceService().create_invoice(FormState(), request.POST)
        return respond_with_outcome(request, outcome, "pages/invoices/form.html", context)

    return render(request, "pages/invoices/form.html", {**context, 'state': FormState(), 'form_data': {}})


@login_required
@require_http_methods(["GET", "POST"])
def invoice_edit(request, invoice_id):
    invoice = queries.fetch_invoice_by_id(invoice_id)
    if invoice is None:
        raise Http404("Invoice not found")

    edit_url = reverse('billing:invoice_edit', kwargs={'invoice_id': invoice_id})
    context = {
        'invoice': invoice,
        'customers': queries.fetch_customers(),
        'breadcrumbs': breadcrumbs(
            ('Invoices', reverse('billing:invoice_list')),
            ('Edit Invoice', edit_url),
        ),
        'form_action': edit_url,
        'submit_label': 'Edit Invoice',
        'page_title': 'Edit Invoice',
    }

    if request.method == 'POST':
        outcome = InvoiceService().update_invoice(invoice_id, FormState(), request.POST)
        return respond_with_outcome(request, outcome, "pages/invoices/form.html", context)

    form_data = {
        'customerId': invoice['customer_id'],
        'amount': invoice['amount'],
        'status': invoice['status'],
    }
    return render(request, "pages/invoices/form.html", {**context, 'state': FormState(), 'form_data': form_data})


@login_required
@require_POST
def invoice_delete(request, invoice_id):
    return InvoiceService().delete_invoice(invoice_id)
