"""
Standardized Error Handling

Provides consistent error format:
Forms: { errors: { field: [messages] }, message }
API: { success: false, error: { code, message }, request_id }
UI: inline field errors + dedicated error pages

HTTP Status Code Standards:
- 400: Bad Request (validation errors, malformed input)
- 404: Not Found
- 500: Internal Server Error
- 501: Not Implemented (disabled operations)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from django.http import JsonResponse


class ErrorCode(str, Enum):
    FIELD_REQUIRED = "FIELD_REQUIRED"
    FIELD_INVALID = "FIELD_INVALID"
    FIELD_INVALID_TYPE = "FIELD_INVALID_TYPE"
    FIELD_OUT_OF_RANGE = "FIELD_OUT_OF_RANGE"
    FIELD_INVALID_FORMAT = "FIELD_INVALID_FORMAT"

    OPERATION_DISABLED = "OPERATION_DISABLED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class FieldError:
    field: str
    code: str
    message: str


@dataclass
class ErrorDetail:
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
        }


@dataclass
class ErrorResponse:
    success: bool = False
    error: Optional[ErrorDetail] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "error": self.error.to_dict() if self.error else None,
            "request_id": self.request_id,
        }

    def to_json_response(self, status: int = 400) -> JsonResponse:
        return JsonResponse(self.to_dict(), status=status)


class APIError(Exception):
    def __init__(
        self,
        code: Union[ErrorCode, str],
        message: str,
        status: int = 400,
        request_id: Optional[str] = None,
    ):
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message
        self.status = status
        self.request_id = request_id or str(uuid.uuid4())
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            success=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
            ),
            request_id=self.request_id,
        )

    def to_json_response(self) -> JsonResponse:
        return self.to_response().to_json_response(self.status)


class DisabledOperationError(APIError):
    """Raised by operations that are switched off and must not reach the database."""

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
    ):
        super().__init__(
            code=ErrorCode.OPERATION_DISABLED,
            message=message,
            status=501,
            request_id=request_id,
        )


def flatten_field_errors(errors: List[FieldError]) -> Dict[str, List[str]]:
    """Group field errors into ``{field: [message, ...]}`` in first-seen order."""
    flattened: Dict[str, List[str]] = {}
    for error in errors:
        flattened.setdefault(error.field, []).append(error.message)
    return flattened
