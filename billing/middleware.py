"""
Error Handling Middleware

Top-level boundary for exceptions that escape a view. Disabled operations
and other APIErrors keep their status; anything else is logged and shown
as a generic error page.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render

from .validation.errors import APIError, ErrorCode, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware:
    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        return self.get_response(request)

    def process_exception(self, request: HttpRequest, exc: Exception) -> Optional[HttpResponse]:
        request_id = getattr(request, "request_id", None) or str(uuid.uuid4())
        is_api_request = self._is_api_request(request)

        if isinstance(exc, APIError):
            exc.request_id = request_id
            logger.warning(f"{exc.code} on {request.method} {request.path}: {exc.message}")
            if is_api_request:
                return exc.to_json_response()
            return self._render_error_page(request, exc.status, exc.message, request_id)

        # Let Django's own handlers deal with these.
        if isinstance(exc, (Http404, PermissionDenied)):
            return None

        logger.exception(
            f"Unhandled exception [request_id={request_id}]: {exc}",
            extra={"request_id": request_id},
        )

        message = "Something went wrong!"
        if settings.DEBUG:
            message = f"{type(exc).__name__}: {exc}"

        if is_api_request:
            return self._create_json_error(ErrorCode.INTERNAL_ERROR, message, 500, request_id)
        return self._render_error_page(request, 500, message, request_id)

    def _is_api_request(self, request: HttpRequest) -> bool:
        content_type = request.content_type or ""
        if "application/json" in content_type:
            return True

        accept = request.headers.get("Accept", "")
        return "application/json" in accept

    def _create_json_error(
        self,
        code: ErrorCode,
        message: str,
        status: int,
        request_id: str,
    ) -> JsonResponse:
        return ErrorResponse(
            error=ErrorDetail(code=code.value, message=message),
            request_id=request_id,
        ).to_json_response(status)

    def _render_error_page(
        self,
        request: HttpRequest,
        status: int,
        message: str,
        request_id: str,
    ) -> HttpResponse:
        return render(request, "errors/error.html", {
            "message": message,
            "request_id": request_id,
            "status_code": status,
        }, status=status)
