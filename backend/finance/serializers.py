from __future__ import annotations

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from charges.serializers import ChargeBreakdownSerializer
from core.money import HUNDRED, ZERO

from .models import Customer, Invoice
from .services.invoicing import DEFAULT_SERVICE_TYPE


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = "__all__"
        read_only_fields = ("created_at", "updated_at")


class InvoiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Invoice
        fields = [
            "id", "customer", "customer_name", "batch", "fee_configuration",
            "service_type", "quantity_kg", "unit_rate", "amount",
            "tax_rate", "discount", "notes",
            "status", "date_issued", "paid", "amount_paid", "payment_date", "updated_at",
        ]
        read_only_fields = ("status", "date_issued", "paid", "amount_paid", "payment_date", "updated_at")

    def validate_amount(self, value):
        if value < ZERO:
            raise serializers.ValidationError("Amount cannot be negative.")
        return value

    def validate_discount(self, value):
        if value < ZERO:
            raise serializers.ValidationError("Discount cannot be negative.")
        return value

    def validate_tax_rate(self, value):
        if value < ZERO or value > HUNDRED:
            raise serializers.ValidationError("Tax rate must be 0..100.")
        return value

    def validate(self, attrs):
        customer = attrs.get("customer")
        if customer is not None and not attrs.get("customer_name"):
            attrs["customer_name"] = customer.name
        return attrs


class InvoicePrefillSerializer(serializers.Serializer):
    batch = serializers.IntegerField(source="batch_id")
    fee_configuration = serializers.IntegerField(source="fee_configuration_id")
    quantity_kg = serializers.DecimalField(max_digits=None, decimal_places=3, rounding=ROUND_HALF_UP)
    unit_rate = serializers.DecimalField(max_digits=None, decimal_places=4, rounding=ROUND_HALF_UP)
    amount = serializers.DecimalField(max_digits=None, decimal_places=2, rounding=ROUND_HALF_UP)
    time_taken_minutes = serializers.IntegerField(allow_null=True)
    breakdown = ChargeBreakdownSerializer()


# ---------- Request payloads ----------
class PrefillRequestSerializer(serializers.Serializer):
    fee_configuration = serializers.IntegerField()
    batch = serializers.IntegerField()


class InvoiceFromBatchSerializer(PrefillRequestSerializer):
    customer = serializers.IntegerField(required=False, allow_null=True, default=None)
    service_type = serializers.CharField(required=False, allow_blank=True, max_length=100, default=DEFAULT_SERVICE_TYPE)


class PaymentSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=ZERO, required=False, allow_null=True, default=None)
    payment_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
