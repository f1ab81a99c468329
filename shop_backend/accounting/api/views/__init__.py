# accounting/api/views/__init__.py

from accounting.api.views.accounts import AccountDetailView, AccountListCreateView
from accounting.api.views.ledger import AccountLedgerView

__all__ = [
    "AccountListCreateView",
    "AccountDetailView",
    "AccountLedgerView",
]
