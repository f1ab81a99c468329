# sales/views/sale.py

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListCreateAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from sales.models import SaleRecord
from sales.serializers import RecordSaleInputSerializer, SaleRecordSerializer
from sales.services.sale_service import record_sale


@extend_schema(tags=["sales"])
class SaleRecordListCreateView(ListCreateAPIView):
    """
    SALES ENDPOINT

    GET  -> sales history, newest first
            ?item_kind=  ?payment_method=  ?customer=  ?transaction_date=
    POST -> record one sale (atomic: inventory + record + customer debit)
    """

    permission_classes = [IsAuthenticated]
    queryset = SaleRecord.objects.select_related("customer").order_by("-transaction_date", "-id")
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["item_kind", "payment_method", "customer", "transaction_date"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return RecordSaleInputSerializer
        return SaleRecordSerializer

    @extend_schema(
        request=RecordSaleInputSerializer,
        responses={201: SaleRecordSerializer},
        description="Record a single-item cash or credit sale",
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        sale = record_sale(
            item_kind=data["item_kind"],
            item_id=data["item_id"],
            quantity=data.get("quantity", 1),
            unit_price_override=data.get("unit_price"),
            customer=data.get("customer"),
            discount=data.get("discount", 0),
            payment_method=data["payment_method"],
            transaction_date=data["transaction_date"],
            notes=data.get("notes", ""),
            user=request.user,
        )

        return Response(SaleRecordSerializer(sale).data, status=status.HTTP_201_CREATED)
