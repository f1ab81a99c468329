# common/api.py

"""
API ERROR NORMALIZATION

DRF EXCEPTION_HANDLER for engine errors.

Mapping:
- CommerceValidationError -> 400
- NotFoundError           -> 404
- ConflictError           -> 409
- ConsistencyError / StorageError / anything else engine-side -> 500,
  generic message (details go to the log only)

DRF's own exceptions (serializer validation, auth, 404 from get_object)
keep the stock DRF handling.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.exceptions import CommerceError

logger = logging.getLogger("api")

GENERIC_FAILURE_MESSAGE = "The operation could not be completed. Please try again later."


def error_response(*, code: str, message: str, http_status: int):
    """
    Canonical API error response.
    """
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def commerce_exception_handler(exc, context):
    if not isinstance(exc, CommerceError):
        return exception_handler(exc, context)

    if exc.user_visible:
        return error_response(code=exc.code, message=exc.message, http_status=exc.http_status)

    view = context.get("view")
    logger.error(
        "Internal engine failure",
        extra={
            "code": exc.code,
            "view": view.__class__.__name__ if view is not None else None,
            "context": {k: str(v) for k, v in exc.context.items()},
        },
        exc_info=exc,
    )
    return error_response(code=exc.code, message=GENERIC_FAILURE_MESSAGE, http_status=exc.http_status)
