# common/transactions.py

"""
ATOMIC UNIT HELPER

Every multi-row engine operation (sale, sales order, installment schedule,
payment application, repair finalization) runs inside exactly one atomic unit.

RULES:
- Any exception inside the unit rolls back every write of that unit.
- Domain errors (CommerceError) surface unchanged.
- Model validation failures (full_clean) surface as CommerceValidationError.
- Database failures surface as StorageError, chained to the driver error.
- No retry here: callers decide, using the definitive commit/rollback outcome.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from common.exceptions import CommerceError, CommerceValidationError, StorageError

logger = logging.getLogger("storage")


def _context_for_log(context) -> dict:
    return {k: str(v) for k, v in context.items()}


@contextmanager
def atomic_unit(operation: str, **context):
    try:
        with transaction.atomic():
            yield
    except CommerceError:
        raise
    except ValidationError as exc:
        logger.warning(
            "Atomic unit rejected by model validation; rolled back",
            extra={"operation": operation, "context": _context_for_log(context), "errors": exc.messages},
        )
        raise CommerceValidationError("; ".join(exc.messages), operation=operation) from exc
    except DatabaseError as exc:
        logger.error(
            "Atomic unit failed in storage; rolled back",
            extra={"operation": operation, "context": _context_for_log(context)},
            exc_info=True,
        )
        raise StorageError(
            f"{operation} could not be saved",
            operation=operation,
            **context,
        ) from exc
