# installments/api/urls.py

from django.urls import path

from installments.api.views import (
    CheckStatusView,
    InstallmentSaleDetailView,
    InstallmentSaleListCreateView,
    OverduePaymentsView,
    PaymentPaidFlagView,
    PaymentTransactionCreateView,
)

urlpatterns = [
    # explicit non-PK routes first
    path("overdue/", OverduePaymentsView.as_view(), name="installments-overdue"),
    path(
        "payments/<int:pk>/transactions/",
        PaymentTransactionCreateView.as_view(),
        name="installment-payment-transactions",
    ),
    path("payments/<int:pk>/paid/", PaymentPaidFlagView.as_view(), name="installment-payment-paid"),
    path("checks/<int:pk>/status/", CheckStatusView.as_view(), name="installment-check-status"),
    path("", InstallmentSaleListCreateView.as_view(), name="installments"),
    path("<int:pk>/", InstallmentSaleDetailView.as_view(), name="installment-detail"),
]
