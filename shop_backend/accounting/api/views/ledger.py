# accounting/api/views/ledger.py

"""
PATH: accounting/api/views/ledger.py

ACCOUNT LEDGER API

GET  /api/accounting/accounts/<id>/ledger/   history, oldest first (insertion order)
POST /api/accounting/accounts/<id>/ledger/   manual posting via post_entry()
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounting.api.serializers.ledger_entries import (
    LedgerEntryCreateSerializer,
    LedgerEntrySerializer,
)
from accounting.models.account import Account
from accounting.models.ledger import LedgerEntry
from accounting.services.ledger_service import post_entry


class AccountLedgerView(GenericAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = LedgerEntryCreateSerializer

    def _account(self) -> Account:
        return get_object_or_404(Account, pk=self.kwargs["pk"])

    @extend_schema(
        tags=["accounting"],
        responses=LedgerEntrySerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        account = self._account()
        qs = LedgerEntry.objects.filter(account=account).order_by("id")

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(LedgerEntrySerializer(page, many=True).data)

        return Response(LedgerEntrySerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["accounting"],
        request=LedgerEntryCreateSerializer,
        responses={201: LedgerEntrySerializer},
    )
    def post(self, request, *args, **kwargs):
        account = self._account()

        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        entry = post_entry(
            account=account,
            description=data["description"],
            debit=data.get("debit", 0),
            credit=data.get("credit", 0),
            posted_at=data.get("posted_at"),
            reference_type=data.get("reference_type") or "manual",
            reference_id=data.get("reference_id"),
            user=request.user,
        )

        return Response(LedgerEntrySerializer(entry).data, status=status.HTTP_201_CREATED)
