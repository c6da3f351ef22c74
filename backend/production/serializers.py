from __future__ import annotations

from rest_framework import serializers

from core.money import ZERO

from .models import Formulation, PelletingBatch


class FormulationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Formulation
        fields = "__all__"
        read_only_fields = ("created_at", "updated_at")

    def validate_cost_per_kg(self, value):
        if value < ZERO:
            raise serializers.ValidationError("Cost per kg cannot be negative.")
        return value


class PelletingBatchSerializer(serializers.ModelSerializer):
    formulation_name = serializers.CharField(source="formulation.name", read_only=True)
    time_taken_minutes = serializers.IntegerField(read_only=True)
    billable_quantity_kg = serializers.DecimalField(max_digits=12, decimal_places=3, read_only=True)

    class Meta:
        model = PelletingBatch
        fields = [
            "id", "formulation", "formulation_name",
            "target_quantity_kg", "machine_used", "operator_name",
            "status", "actual_yield_kg", "total_wastage_kg",
            "operator_comments", "leftover_raw_materials",
            "start_time", "end_time", "time_taken_minutes",
            "billable_quantity_kg", "archived",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


# ---------- Request payloads ----------
class BatchCreateSerializer(serializers.Serializer):
    formulation = serializers.IntegerField()
    target_quantity_kg = serializers.DecimalField(max_digits=12, decimal_places=3)
    machine_used = serializers.CharField(required=False, allow_blank=True, max_length=100, default="")
    operator_name = serializers.CharField(required=False, allow_blank=True, max_length=100, default="")


class BatchStartSerializer(serializers.Serializer):
    machine_used = serializers.CharField(required=False, allow_blank=True, max_length=100)
    operator_name = serializers.CharField(required=False, allow_blank=True, max_length=100)


class BatchCompleteSerializer(serializers.Serializer):
    actual_yield_kg = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=ZERO)
    total_wastage_kg = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=ZERO, required=False, default=ZERO)
    operator_comments = serializers.CharField(required=False, allow_blank=True, default="")
    leftover_raw_materials = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class BatchStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
