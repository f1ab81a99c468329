# sales/serializers/order.py

from rest_framework import serializers

from common.fields import ShopDateField
from products.services.inventory import ITEM_KINDS
from sales.models import SaleRecord, SalesOrder, SalesOrderLine


class SalesOrderLineSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesOrderLine
        fields = ["id", "item_kind", "item_id", "item_name", "quantity", "unit_price", "discount", "line_total"]
        read_only_fields = fields


class SalesOrderSerializer(serializers.ModelSerializer):
    """
    Sales order with its lines (read-only, immutable once written).
    """

    customer_name = serializers.CharField(source="customer.display_name", read_only=True, default=None)
    lines = SalesOrderLineSerializer(many=True, read_only=True)

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "payment_method",
            "customer",
            "customer_name",
            "subtotal",
            "items_discount",
            "discount",
            "grand_total",
            "transaction_date",
            "notes",
            "recorded_by",
            "created_at",
            "lines",
        ]
        read_only_fields = fields


class OrderLineInputSerializer(serializers.Serializer):
    item_kind = serializers.ChoiceField(choices=list(ITEM_KINDS))
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    unit_price = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, allow_null=True)
    discount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)


class RecordSalesOrderInputSerializer(serializers.Serializer):
    """
    One cart. Totals are computed by the service; no tax is applied.
    """

    items = OrderLineInputSerializer(many=True, allow_empty=False)
    payment_method = serializers.ChoiceField(choices=SaleRecord.PAYMENT_METHOD_CHOICES)
    customer = serializers.IntegerField(required=False, allow_null=True)
    discount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    transaction_date = ShopDateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
