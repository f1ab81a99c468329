# common/exceptions.py

"""
COMMERCE ENGINE ERRORS

Single error taxonomy shared by the ledger, sales, installments and
repairs services.

Every error carries:
- code:        stable machine-readable identifier (API contract)
- http_status: status used by the API exception handler

Only ValidationError / NotFound / Conflict messages are shown to end users.
ConsistencyError and StorageError are logged with context and surfaced as a
generic failure.
"""

from __future__ import annotations


class CommerceError(Exception):
    """Base exception for all engine failures."""

    code = "commerce_error"
    http_status = 500
    user_visible = True

    def __init__(self, message: str = "", **context):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.context = context

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.code


# ============================================================
# CLIENT ERRORS
# ============================================================


class CommerceValidationError(CommerceError):
    """Bad input shape or range."""

    code = "validation_error"
    http_status = 400


class InvalidDiscount(CommerceValidationError):
    """Discount exceeds the gross line total."""

    code = "invalid_discount"


class PriceNotConfigured(CommerceValidationError):
    """The catalog record has no usable selling price."""

    code = "price_not_configured"


class NotFoundError(CommerceError):
    """Referenced row does not exist."""

    code = "not_found"
    http_status = 404


class ItemNotFound(NotFoundError):
    """Catalog item does not exist."""

    code = "item_not_found"


class ConflictError(CommerceError):
    """Request conflicts with the current state of a row."""

    code = "conflict"
    http_status = 409


class ItemNotAvailable(ConflictError):
    """Item already sold or stock insufficient."""

    code = "item_not_available"


class InvalidCheckTransition(ConflictError):
    """Check status change not allowed from its current state."""

    code = "invalid_check_transition"


class InvalidRepairTransition(ConflictError):
    """Repair status change not allowed from its current state."""

    code = "invalid_repair_transition"


# ============================================================
# INTERNAL ERRORS (generic message to users)
# ============================================================


class ConsistencyError(CommerceError):
    """An internal invariant was violated."""

    code = "consistency_error"
    user_visible = False


class StorageError(CommerceError):
    """The underlying store failed to apply or commit a unit."""

    code = "storage_error"
    user_visible = False
