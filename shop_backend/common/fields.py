# common/fields.py

"""
Shared DRF fields.
"""

from __future__ import annotations

from rest_framework import serializers

from common.exceptions import CommerceValidationError
from common.shop_calendar import parse_shop_date


class ShopDateField(serializers.DateField):
    """
    Date input in either form the counter types:
    - ISO 'YYYY-MM-DD' (Gregorian)
    - 'YYYY/MM/DD' in the shop calendar (Jalali by default)
    """

    def to_internal_value(self, value):
        if isinstance(value, str) and "/" in value:
            try:
                return parse_shop_date(value)
            except CommerceValidationError as exc:
                raise serializers.ValidationError(exc.message) from exc
        return super().to_internal_value(value)
