# products/api/views.py

"""
STOCK INTAKE + PRICE INQUIRY API

POST /api/products/phones/receive/               register a purchased phone
POST /api/products/receive/                      register a purchased bulk product
GET  /api/products/quote/<item_kind>/<item_id>/  selling price + stock for the counter

Intake is purchase-led: with a supplier the partner ledger is credited with
the cost in the same atomic unit as the new row.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from products.api.serializers import (
    ItemQuoteSerializer,
    PhoneIntakeSerializer,
    PhoneSerializer,
    ProductIntakeSerializer,
    ProductSerializer,
)
from products.services import inventory
from products.services.stock_intake import receive_phone, receive_product


class PhoneIntakeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["products"], request=PhoneIntakeSerializer, responses={201: PhoneSerializer})
    def post(self, request):
        s = PhoneIntakeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)

        phone = receive_phone(
            model=data.pop("model"),
            imei=data.pop("imei"),
            purchase_price=data.pop("purchase_price"),
            sale_price=data.pop("sale_price", None),
            supplier_id=data.pop("supplier", None),
            purchase_date=data.pop("purchase_date", None),
            user=request.user,
            **data,
        )
        return Response(PhoneSerializer(phone).data, status=status.HTTP_201_CREATED)


class ProductIntakeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["products"], request=ProductIntakeSerializer, responses={201: ProductSerializer})
    def post(self, request):
        s = ProductIntakeSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        product = receive_product(
            name=data["name"],
            quantity=data["quantity"],
            purchase_price=data["purchase_price"],
            selling_price=data.get("selling_price", 0),
            supplier_id=data.get("supplier"),
            user=request.user,
        )
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ItemQuoteView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["products"], responses={200: ItemQuoteSerializer})
    def get(self, request, item_kind: str, item_id: int):
        payload = {
            "item_kind": item_kind,
            "item_id": item_id,
            "stock": inventory.get_stock(item_kind, item_id),
            "price": inventory.get_price(item_kind, item_id),
        }
        return Response(ItemQuoteSerializer(payload).data, status=status.HTTP_200_OK)
