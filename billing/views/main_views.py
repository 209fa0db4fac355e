"""
Landing, sign-in and sign-out pages.
"""
import logging

from django.conf import settings
from django.contrib import auth
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST
from django_ratelimit.decorators import ratelimit

from ..auth_services import authenticate

logger = logging.getLogger(__name__)


def landing_view(request):
    return render(request, "pages/landing.html")


@ratelimit(key='ip', rate='10/m', method='POST', block=True)
def login_view(request):
    if request.user.is_authenticated:
        return redirect('billing:dashboard')

    error_message = None
    if request.method == 'POST':
        error_message = authenticate(request, None, request.POST)
        if error_message is None:
            next_url = request.GET.get('next', '')
            if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                next_url = settings.LOGIN_REDIRECT_URL
            return redirect(next_url)

    return render(request, 'pages/auth/login.html', {
        'error_message': error_message,
        'email': request.POST.get('email', ''),
    })


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        logger.info(f"User {request.user.pk} signed out")
    auth.logout(request)
    return redirect(settings.LOGOUT_REDIRECT_URL)


def custom_404_view(request, exception=None):
    return render(request, "errors/404.html", status=404)


def custom_500_view(request):
    return render(request, "errors/error.html", {"message": "Something went wrong!", "status_code": 500}, status=500)
