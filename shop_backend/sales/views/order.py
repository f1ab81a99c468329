# sales/views/order.py

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import ListCreateAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from sales.models import SalesOrder
from sales.serializers import RecordSalesOrderInputSerializer, SalesOrderSerializer
from sales.services.sale_service import OrderLine, record_sales_order


def _orders():
    return SalesOrder.objects.select_related("customer").prefetch_related("lines")


@extend_schema(tags=["sales"])
class SalesOrderListCreateView(ListCreateAPIView):
    """
    SALES ORDERS ENDPOINT

    GET  -> orders with their lines, newest first
            ?payment_method=  ?customer=  ?transaction_date=
    POST -> check out a cart (atomic: every line + header + one customer debit)
    """

    permission_classes = [IsAuthenticated]
    queryset = _orders().order_by("-transaction_date", "-id")
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["payment_method", "customer", "transaction_date"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return RecordSalesOrderInputSerializer
        return SalesOrderSerializer

    @extend_schema(
        request=RecordSalesOrderInputSerializer,
        responses={201: SalesOrderSerializer},
        description="Record a multi-line cash or credit sales order",
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = record_sales_order(
            items=[OrderLine(**line) for line in data["items"]],
            customer=data.get("customer"),
            discount=data.get("discount", 0),
            payment_method=data["payment_method"],
            transaction_date=data["transaction_date"],
            notes=data.get("notes", ""),
            user=request.user,
        )

        return Response(SalesOrderSerializer(_orders().get(pk=order.pk)).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["sales"])
class SalesOrderDetailView(RetrieveAPIView):
    """Invoice data for one order."""

    permission_classes = [IsAuthenticated]
    serializer_class = SalesOrderSerializer
    queryset = _orders()
