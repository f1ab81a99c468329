# repairs/api/serializers.py

from rest_framework import serializers

from repairs.models import Repair, RepairPart


class RepairPartSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    price_per_item = serializers.DecimalField(
        source="product.selling_price",
        max_digits=16,
        decimal_places=2,
        read_only=True,
    )

    class Meta:
        model = RepairPart
        fields = ["id", "repair", "product", "product_name", "price_per_item", "quantity_used"]
        read_only_fields = fields


class RepairSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.display_name", read_only=True)
    technician_name = serializers.SerializerMethodField()
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    parts = RepairPartSerializer(many=True, read_only=True)

    class Meta:
        model = Repair
        fields = [
            "id",
            "customer",
            "customer_name",
            "device_model",
            "device_color",
            "serial_number",
            "problem_description",
            "technician_notes",
            "status",
            "status_display",
            "estimated_cost",
            "final_cost",
            "labor_fee",
            "technician",
            "technician_name",
            "date_received",
            "date_completed",
            "parts",
        ]
        read_only_fields = fields

    def get_technician_name(self, obj):
        return obj.technician.display_name if obj.technician_id else None


class RepairCreateSerializer(serializers.Serializer):
    customer = serializers.IntegerField(min_value=1)
    device_model = serializers.CharField(max_length=255)
    device_color = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    serial_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    problem_description = serializers.CharField()
    estimated_cost = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, allow_null=True)


class RepairPartInputSerializer(serializers.Serializer):
    product = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class FinalizeRepairSerializer(serializers.Serializer):
    final_cost = serializers.DecimalField(max_digits=16, decimal_places=2)
    labor_fee = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    technician = serializers.IntegerField(required=False, allow_null=True)


class RepairStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Repair.Status.choices)
    technician_notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
