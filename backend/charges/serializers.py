from __future__ import annotations

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from core.money import HUNDRED, MONEY_PREC, ZERO

from .models import FeeConfiguration


class FeeConfigurationSerializer(serializers.ModelSerializer):
    class Meta:
        model = FeeConfiguration
        fields = [
            "id", "name", "description",
            "pelleting_fee_type", "pelleting_fee",
            "system_fee_percent",
            "formulation_fee_type", "formulation_fee",
            "active", "archived",
            "created_at", "updated_at",
        ]
        read_only_fields = ("created_at", "updated_at")
        extra_kwargs = {
            "name": {"error_messages": {
                "required": "Name is required.",
                "blank": "Name is required.",
                "max_length": "Name too long (max 100 chars).",
            }},
            "pelleting_fee_type": {"required": True, "error_messages": {"required": "Pelleting basis required."}},
            "formulation_fee_type": {"required": True, "error_messages": {"required": "Formulation basis required."}},
        }

    def validate_pelleting_fee(self, value):
        if value < ZERO:
            raise serializers.ValidationError("Pelleting fee cannot be negative.")
        return value

    def validate_formulation_fee(self, value):
        if value < ZERO:
            raise serializers.ValidationError("Formulation fee cannot be negative.")
        return value

    def validate_system_fee_percent(self, value):
        if value < ZERO or value > HUNDRED:
            raise serializers.ValidationError("System fee percent must be 0..100.")
        return value


class ChargeBreakdownSerializer(serializers.Serializer):
    quantity_kg = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=3, rounding=ROUND_HALF_UP)
    unit_price_per_kg = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=4, rounding=ROUND_HALF_UP)
    product_value = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=2, rounding=ROUND_HALF_UP)
    pelleting_charge = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=2, rounding=ROUND_HALF_UP)
    system_charge = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=2, rounding=ROUND_HALF_UP)
    formulation_charge = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=2, rounding=ROUND_HALF_UP)
    total = serializers.DecimalField(max_digits=MONEY_PREC, decimal_places=2, rounding=ROUND_HALF_UP)
