# sales/serializers/sale.py

from rest_framework import serializers

from common.fields import ShopDateField
from products.services.inventory import ITEM_KINDS
from sales.models import SaleRecord


class SaleRecordSerializer(serializers.ModelSerializer):
    """
    Sale record (read-only). Records are immutable once written.
    """

    customer_name = serializers.SerializerMethodField()

    class Meta:
        model = SaleRecord
        fields = [
            "id",
            "item_kind",
            "item_id",
            "item_name",
            "quantity",
            "unit_price",
            "discount",
            "net_total",
            "payment_method",
            "customer",
            "customer_name",
            "transaction_date",
            "notes",
            "recorded_by",
            "created_at",
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        return obj.customer.display_name if obj.customer_id else None


class RecordSaleInputSerializer(serializers.Serializer):
    """
    Explicit sale input serializer.

    Documents ONLY what the client is allowed to send. Totals are computed
    by the service; unit_price is an optional override of the catalog price.
    """

    item_kind = serializers.ChoiceField(choices=list(ITEM_KINDS))
    item_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)
    unit_price = serializers.DecimalField(
        max_digits=16,
        decimal_places=2,
        required=False,
        allow_null=True,
        help_text="Optional override of the catalog selling price",
    )
    discount = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    payment_method = serializers.ChoiceField(choices=SaleRecord.PAYMENT_METHOD_CHOICES)
    customer = serializers.IntegerField(required=False, allow_null=True)
    transaction_date = ShopDateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
