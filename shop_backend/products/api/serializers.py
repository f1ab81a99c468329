# products/api/serializers.py

from rest_framework import serializers

from common.fields import ShopDateField
from products.models import Phone, Product
from products.services.inventory import ITEM_KINDS


class PhoneSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source="supplier.display_name", read_only=True, default=None)

    class Meta:
        model = Phone
        fields = [
            "id",
            "model",
            "color",
            "storage",
            "ram",
            "imei",
            "battery_health",
            "condition",
            "purchase_price",
            "sale_price",
            "status",
            "purchase_date",
            "sale_date",
            "supplier",
            "supplier_name",
            "notes",
            "registered_at",
        ]
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source="supplier.display_name", read_only=True, default=None)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "purchase_price",
            "selling_price",
            "stock_quantity",
            "sale_count",
            "supplier",
            "supplier_name",
            "created_at",
        ]
        read_only_fields = fields


class PhoneIntakeSerializer(serializers.Serializer):
    """
    Purchase receipt for one phone. supplier (a partner account) is credited
    with purchase_price when given.
    """

    model = serializers.CharField(max_length=255)
    imei = serializers.CharField(max_length=32)
    purchase_price = serializers.DecimalField(max_digits=16, decimal_places=2, min_value=0)
    sale_price = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, allow_null=True)
    supplier = serializers.IntegerField(required=False, allow_null=True)
    purchase_date = ShopDateField(required=False, allow_null=True)
    color = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    storage = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    ram = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    battery_health = serializers.IntegerField(min_value=0, max_value=100, required=False, allow_null=True)
    condition = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ProductIntakeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=0)
    purchase_price = serializers.DecimalField(max_digits=16, decimal_places=2, min_value=0)
    selling_price = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    supplier = serializers.IntegerField(required=False, allow_null=True)


class ItemQuoteSerializer(serializers.Serializer):
    """
    Counter price inquiry. stock is the on-hand quantity for products, the
    status for phones and null for services.
    """

    item_kind = serializers.ChoiceField(choices=list(ITEM_KINDS))
    item_id = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=16, decimal_places=2)
    stock = serializers.JSONField(allow_null=True)
