# accounting/api/serializers/accounts.py

from rest_framework import serializers

from accounting.models.account import Account


class AccountSerializer(serializers.ModelSerializer):
    """
    Read serializer. current_balance is the denormalized balance written by
    the ledger service; it always equals the latest entry's balance.
    """

    class Meta:
        model = Account
        fields = (
            "id",
            "kind",
            "display_name",
            "phone_number",
            "partner_type",
            "address",
            "notes",
            "current_balance",
            "created_at",
        )
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=Account.Kind.choices)
    display_name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True, allow_null=True)
    partner_type = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
