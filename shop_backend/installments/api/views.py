# installments/api/views.py

"""
======================================================
PATH: installments/api/views.py
======================================================
INSTALLMENTS API

GET  /api/installments/                              list (?customer=)
POST /api/installments/                              open an installment sale
GET  /api/installments/<id>/                         detail + schedule + checks
GET  /api/installments/overdue/                      open obligations due before today
POST /api/installments/payments/<id>/transactions/   partial payment
POST /api/installments/payments/<id>/paid/           mark paid / unpaid
POST /api/installments/checks/<id>/status/           check status transition

Views stay thin: shape validation here, business rules in services.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListAPIView, ListCreateAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from installments.api.serializers import (
    CheckInstrumentSerializer,
    CheckStatusSerializer,
    InstallmentPaymentSerializer,
    InstallmentSaleCreateSerializer,
    InstallmentSaleDetailSerializer,
    InstallmentSaleSerializer,
    InstallmentTransactionSerializer,
    OverduePaymentSerializer,
    PartialPaymentSerializer,
    PaymentPaidFlagSerializer,
)
from installments.models import InstallmentPayment, InstallmentSale
from installments.services.check_lifecycle import set_check_status
from installments.services.payment_service import apply_partial_payment, set_payment_paid
from installments.services.scheduler import CheckDescriptor, create_installment_sale
from installments.services.status import list_overdue_payments


@extend_schema(tags=["installments"])
class InstallmentSaleListCreateView(ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    queryset = (
        InstallmentSale.objects.select_related("customer", "phone")
        .prefetch_related("payments__transactions")
        .order_by("-created_at", "-id")
    )
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["customer"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return InstallmentSaleCreateSerializer
        return InstallmentSaleSerializer

    @extend_schema(
        tags=["installments"],
        request=InstallmentSaleCreateSerializer,
        responses={201: InstallmentSaleDetailSerializer},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        sale = create_installment_sale(
            customer=data["customer"],
            phone_id=data["phone"],
            sale_price=data["sale_price"],
            down_payment=data.get("down_payment", 0),
            installment_count=data["installment_count"],
            installment_amount=data["installment_amount"],
            start_date=data["start_date"],
            checks=[CheckDescriptor(**c) for c in data.get("checks", [])],
            notes=data.get("notes", ""),
            user=request.user,
        )

        return Response(InstallmentSaleDetailSerializer(sale).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["installments"])
class InstallmentSaleDetailView(RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = InstallmentSaleDetailSerializer
    queryset = InstallmentSale.objects.select_related("customer", "phone").prefetch_related(
        "payments__transactions",
        "checks",
    )


@extend_schema(tags=["installments"])
class OverduePaymentsView(ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OverduePaymentSerializer

    def get_queryset(self):
        return list_overdue_payments()


class PaymentTransactionCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["installments"],
        request=PartialPaymentSerializer,
        responses={201: InstallmentTransactionSerializer},
    )
    def post(self, request, pk: int):
        s = PartialPaymentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        txn = apply_partial_payment(
            payment_id=pk,
            amount=data["amount"],
            payment_date=data["payment_date"],
            notes=data.get("notes", ""),
            user=request.user,
        )

        return Response(InstallmentTransactionSerializer(txn).data, status=status.HTTP_201_CREATED)


class PaymentPaidFlagView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["installments"],
        request=PaymentPaidFlagSerializer,
        responses={200: InstallmentPaymentSerializer},
    )
    def post(self, request, pk: int):
        s = PaymentPaidFlagSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        set_payment_paid(
            payment_id=pk,
            paid=data["paid"],
            payment_date=data.get("payment_date"),
            user=request.user,
        )

        payment = InstallmentPayment.objects.prefetch_related("transactions").get(pk=pk)
        return Response(InstallmentPaymentSerializer(payment).data, status=status.HTTP_200_OK)


class CheckStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["installments"],
        request=CheckStatusSerializer,
        responses={200: CheckInstrumentSerializer},
    )
    def post(self, request, pk: int):
        s = CheckStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        check = set_check_status(pk, s.validated_data["status"])
        return Response(CheckInstrumentSerializer(check).data, status=status.HTTP_200_OK)
