# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import AccountCreateSerializer, AccountSerializer
from accounting.api.serializers.ledger_entries import (
    LedgerEntryCreateSerializer,
    LedgerEntrySerializer,
)

__all__ = [
    "AccountSerializer",
    "AccountCreateSerializer",
    "LedgerEntrySerializer",
    "LedgerEntryCreateSerializer",
]
