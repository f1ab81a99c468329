# accounting/api/serializers/ledger_entries.py

from rest_framework import serializers

from accounting.models.ledger import LedgerEntry


class LedgerEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = LedgerEntry
        fields = (
            "id",
            "account",
            "posted_at",
            "description",
            "debit",
            "credit",
            "balance",
            "reference_type",
            "reference_id",
            "recorded_by",
            "created_at",
        )
        read_only_fields = fields


class LedgerEntryCreateSerializer(serializers.Serializer):
    """
    Manual posting (payments received, payments made, corrections).
    posted_at may be backdated; ordering stays by insertion.
    """

    description = serializers.CharField(max_length=500)
    debit = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    credit = serializers.DecimalField(max_digits=16, decimal_places=2, required=False, default=0)
    posted_at = serializers.DateTimeField(required=False, allow_null=True)
    reference_type = serializers.CharField(max_length=64, required=False, allow_blank=True, default="manual")
    reference_id = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
