from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from .. import queries
from ..services.collaborators import DjangoViewCache
from ..services.customer_service import CustomerService
from ..services.outcomes import FormState
from .helpers import breadcrumbs, respond_with_outcome


@login_required
def customer_list(request):
    search_query = request.GET.get('q', '').strip()

    view_cache = DjangoViewCache()
    variant = f"q={search_query}"
    customers = view_cache.get(CustomerService.LISTING_PATH, variant)
    if customers is None:
        customers = queries.fetch_filtered_customers(search_query)
        view_cache.set(CustomerService.LISTING_PATH, variant, customers)

    return render(request, 'pages/customers/list.html', {
        'customers': customers,
        'search_query': search_query,
        'page_title': 'Customers',
    })


@login_required
@require_http_methods(["GET", "POST"])
def customer_create(request):
    context = {
        'breadcrumbs': breadcrumbs(
            ('Clients', reverse('billing:customer_list')),
            ('Create Client', reverse('billing:customer_create')),
        ),
        'page_title': 'Create Client',
    }

    if request.method == 'POST':
        outcome = CustomerService().create_customer(FormState(), request.POST)
        return respond_with_outcome(request, outcome, 'pages/customers/form.html', context)

    return render(request, 'pages/customers/form.html', {**context, 'state': FormState(), 'form_data': {}})


@login_required
@require_POST
def customer_delete(request, customer_id):
    return CustomerService().delete_customer(customer_id)
