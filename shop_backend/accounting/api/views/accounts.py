# accounting/api/views/accounts.py

"""
PATH: accounting/api/views/accounts.py

PARTY ACCOUNTS API

GET  /api/accounting/accounts/          ?kind=customer|partner  ?search=<name>
POST /api/accounting/accounts/          register a customer or partner
GET  /api/accounting/accounts/<id>/

Registration goes through accounting.services.party_service; the balance is
never writable from here.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.filters import SearchFilter
from rest_framework.generics import ListCreateAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from accounting.api.serializers.accounts import AccountCreateSerializer, AccountSerializer
from accounting.models.account import Account
from accounting.services.party_service import register_customer, register_partner


@extend_schema(tags=["accounting"])
class AccountListCreateView(ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    queryset = Account.objects.all().order_by("display_name", "id")
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ["kind"]
    search_fields = ["display_name", "phone_number"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return AccountCreateSerializer
        return AccountSerializer

    @extend_schema(
        tags=["accounting"],
        request=AccountCreateSerializer,
        responses={201: AccountSerializer},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        if data["kind"] == Account.Kind.CUSTOMER:
            account = register_customer(
                display_name=data["display_name"],
                phone_number=data.get("phone_number"),
                address=data.get("address", ""),
                notes=data.get("notes", ""),
            )
        else:
            account = register_partner(
                display_name=data["display_name"],
                partner_type=data.get("partner_type", ""),
                phone_number=data.get("phone_number"),
                address=data.get("address", ""),
                notes=data.get("notes", ""),
            )

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["accounting"])
class AccountDetailView(RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountSerializer
    queryset = Account.objects.all()
