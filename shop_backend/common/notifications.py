# common/notifications.py

"""
NOTIFICATION HAND-OFF

The engine hands a (event, object id) pair to the configured dispatcher
(SMS reminders, receipts) once its atomic unit has COMMITTED.

GUARANTEES:
- Never runs inside the engine's atomic unit (transaction.on_commit).
- Never fires for a rolled-back unit.
- Dispatcher failures are logged and do not reach the engine caller.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

logger = logging.getLogger("notifications")

DEFAULT_DISPATCHER = "common.notifications.log_dispatcher"

# Filled by memory_dispatcher (test settings), like django.core.mail.outbox.
outbox: list[tuple[str, object]] = []


def log_dispatcher(event: str, object_id) -> None:
    logger.info("Notification handed off", extra={"event": event, "object_id": str(object_id)})


def memory_dispatcher(event: str, object_id) -> None:
    outbox.append((event, object_id))


def dispatch(event: str, object_id) -> None:
    path = getattr(settings, "NOTIFICATION_DISPATCHER", "") or DEFAULT_DISPATCHER
    try:
        import_string(path)(event, object_id)
    except Exception:
        logger.exception(
            "Notification dispatch failed",
            extra={"event": event, "object_id": str(object_id), "dispatcher": path},
        )


def notify_after_commit(event: str, object_id) -> None:
    transaction.on_commit(lambda: dispatch(event, object_id))
