"""
Authentication Services
Credential sign-in through named providers, mapped to form messages.
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from django import forms
from django.contrib import auth
from django.contrib.auth import get_user_model

logger = logging.getLogger(__name__)
User = get_user_model()


class AuthError(Exception):
    """Base class for provider-reported sign-in failures, matched on ``type``."""
    type = "AuthError"


class CredentialsSignin(AuthError):
    type = "CredentialsSignin"


class InvalidProvider(AuthError):
    type = "InvalidProvider"


class CallbackRouteError(AuthError):
    type = "CallbackRouteError"


class CredentialsForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(min_length=6, strip=False)


class CredentialsProvider:
    """Email + password sign-in against Django's auth backends."""

    name = "credentials"

    def authorize(self, request, credentials: Mapping[str, Any]):
        form = CredentialsForm(data={
            "email": credentials.get("email", ""),
            "password": credentials.get("password", ""),
        })
        if not form.is_valid():
            logger.info("Sign-in rejected: malformed credentials")
            return None

        email = form.cleaned_data["email"]
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            logger.info(f"Sign-in rejected: no account for {email}")
            return None

        return auth.authenticate(
            request,
            username=user.get_username(),
            password=form.cleaned_data["password"],
        )

    def sign_in(self, request, credentials: Mapping[str, Any]):
        user = self.authorize(request, credentials)
        if user is None:
            raise CredentialsSignin("Invalid email or password")
        auth.login(request, user)
        logger.info(f"User {user.pk} signed in")
        return user


PROVIDERS: Dict[str, Callable[[], Any]] = {
    CredentialsProvider.name: CredentialsProvider,
}


def sign_in(provider: str, form_data: Mapping[str, Any], request=None):
    factory = PROVIDERS.get(provider)
    if factory is None:
        raise InvalidProvider(f"Unknown sign-in provider: {provider}")
    return factory().sign_in(request, form_data)


def authenticate(
    request,
    prev_state: Optional[str],
    form_data: Mapping[str, Any],
    sign_in_func: Callable[..., Any] = sign_in,
) -> Optional[str]:
    """
    Sign the user in with the ``credentials`` provider.

    Returns ``None`` once the session is established, otherwise the message
    to show on the login form. Errors that are not provider auth errors are
    re-raised for the top-level error handler.
    """
    try:
        sign_in_func("credentials", form_data, request)
    except AuthError as error:
        if error.type == CredentialsSignin.type:
            return "Invalid credentials."
        logger.warning(f"Sign-in failed with {error.type}: {error}")
        return "Something went wrong."
    return None
