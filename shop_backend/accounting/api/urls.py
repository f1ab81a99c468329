# accounting/api/urls.py

from django.urls import path

from accounting.api.views.accounts import AccountDetailView, AccountListCreateView
from accounting.api.views.ledger import AccountLedgerView

urlpatterns = [
    path("accounts/", AccountListCreateView.as_view(), name="accounts"),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),
    path("accounts/<int:pk>/ledger/", AccountLedgerView.as_view(), name="account-ledger"),
]
