from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from .. import queries


@login_required
def dashboard_overview(request):
    context = {
        'cards': queries.fetch_card_data(),
        'latest_invoices': queries.fetch_latest_invoices(),
        'page_title': 'Dashboard',
    }
    return render(request, "pages/dashboard.html", context)
