# installments/api/serializers.py

from rest_framework import serializers

from common.fields import ShopDateField
from common.shop_calendar import format_shop_date
from installments.models import (
    CheckInstrument,
    InstallmentPayment,
    InstallmentSale,
    InstallmentTransaction,
)
from installments.services.scheduler import MAX_INSTALLMENT_COUNT
from installments.services.status import collected_on, summarize_sale


# ============================================================
# READ SERIALIZERS
# ============================================================


class InstallmentTransactionSerializer(serializers.ModelSerializer):
    class Meta:
        model = InstallmentTransaction
        fields = ["id", "amount_paid", "payment_date", "notes", "received_by", "created_at"]
        read_only_fields = fields


class InstallmentPaymentSerializer(serializers.ModelSerializer):
    transactions = InstallmentTransactionSerializer(many=True, read_only=True)
    total_paid = serializers.SerializerMethodField()
    due_date_display = serializers.SerializerMethodField()

    class Meta:
        model = InstallmentPayment
        fields = [
            "id",
            "number",
            "due_date",
            "due_date_display",
            "amount_due",
            "status",
            "paid_on",
            "total_paid",
            "transactions",
        ]
        read_only_fields = fields

    def get_total_paid(self, obj):
        return str(collected_on(obj))

    def get_due_date_display(self, obj):
        return format_shop_date(obj.due_date)


class CheckInstrumentSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = CheckInstrument
        fields = [
            "id",
            "check_number",
            "bank_name",
            "due_date",
            "amount",
            "status",
            "status_display",
            "status_changed_at",
        ]
        read_only_fields = fields


class InstallmentSaleSerializer(serializers.ModelSerializer):
    """
    Installment sale with its derived figures.

    overall_status / remaining_balance / next_due_date are recomputed from
    the rows on every serialization. Querysets feeding this serializer
    prefetch payments__transactions.
    """

    customer_name = serializers.CharField(source="customer.display_name", read_only=True)
    phone_model = serializers.CharField(source="phone.model", read_only=True)
    phone_imei = serializers.CharField(source="phone.imei", read_only=True)

    class Meta:
        model = InstallmentSale
        fields = [
            "id",
            "customer",
            "customer_name",
            "phone",
            "phone_model",
            "phone_imei",
            "sale_price",
            "down_payment",
            "installment_count",
            "installment_amount",
            "start_date",
            "notes",
            "created_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance):
        data = super().to_representation(instance)
        summary = summarize_sale(instance)
        data.update(
            {
                "overall_status": summary.status,
                "total_paid": str(summary.total_paid),
                "remaining_balance": str(summary.remaining_balance),
                "paid_installments": summary.paid_installments,
                "next_due_date": summary.next_due_date,
            }
        )
        return data


class InstallmentSaleDetailSerializer(InstallmentSaleSerializer):
    payments = InstallmentPaymentSerializer(many=True, read_only=True)
    checks = CheckInstrumentSerializer(many=True, read_only=True)

    class Meta(InstallmentSaleSerializer.Meta):
        fields = InstallmentSaleSerializer.Meta.fields + ["payments", "checks"]
        read_only_fields = fields


class OverduePaymentSerializer(serializers.ModelSerializer):
    sale_id = serializers.IntegerField(source="sale.id", read_only=True)
    customer_id = serializers.IntegerField(source="sale.customer_id", read_only=True)
    customer_name = serializers.CharField(source="sale.customer.display_name", read_only=True)
    customer_phone = serializers.CharField(source="sale.customer.phone_number", read_only=True)
    phone_model = serializers.CharField(source="sale.phone.model", read_only=True)

    class Meta:
        model = InstallmentPayment
        fields = [
            "id",
            "sale_id",
            "number",
            "due_date",
            "amount_due",
            "status",
            "customer_id",
            "customer_name",
            "customer_phone",
            "phone_model",
        ]
        read_only_fields = fields


# ============================================================
# INPUT SERIALIZERS
# ============================================================


class CheckInputSerializer(serializers.Serializer):
    check_number = serializers.CharField(max_length=64)
    bank_name = serializers.CharField(max_length=128)
    due_date = ShopDateField()
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    status = serializers.ChoiceField(choices=CheckInstrument.Status.choices, required=False, allow_null=True)


class InstallmentSaleCreateSerializer(serializers.Serializer):
    customer = serializers.IntegerField(min_value=1)
    phone = serializers.IntegerField(min_value=1)
    sale_price = serializers.DecimalField(max_digits=16, decimal_places=2)
    down_payment = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    installment_count = serializers.IntegerField(min_value=1, max_value=MAX_INSTALLMENT_COUNT)
    installment_amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    start_date = ShopDateField()
    checks = CheckInputSerializer(many=True, required=False, default=list)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PartialPaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    payment_date = ShopDateField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentPaidFlagSerializer(serializers.Serializer):
    paid = serializers.BooleanField()
    payment_date = ShopDateField(required=False, allow_null=True)


class CheckStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=CheckInstrument.Status.choices)
