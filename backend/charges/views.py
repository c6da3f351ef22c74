from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.money import parse_bool

from .models import FeeConfiguration
from .serializers import ChargeBreakdownSerializer, FeeConfigurationSerializer
from .services.calculator import compute_charge_breakdown

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (copy)"


def _flag_or_400(request, name):
    raw = request.query_params.get(name)
    if raw is None and isinstance(request.data, dict):
        raw = request.data.get(name)
    value = parse_bool(raw)
    if value is None:
        return None, Response(
            {"detail": f"'{name}' must be true or false"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return value, None


class FeeConfigurationViewSet(viewsets.ModelViewSet):
    serializer_class = FeeConfigurationSerializer

    def get_queryset(self):
        qs = FeeConfiguration.objects.all()
        # Query flags filter the list only; detail actions read the same names as values
        if self.action != "list":
            return qs
        params = self.request.query_params
        for flag in ("active", "archived"):
            value = parse_bool(params.get(flag))
            if value is not None:
                qs = qs.filter(**{flag: value})
        q = (params.get("q") or "").strip()
        if q:
            qs = qs.filter(name__icontains=q)
        return qs

    @action(detail=True, methods=["post"])
    def duplicate(self, request, pk=None):
        source = self.get_object()
        copy = FeeConfiguration.objects.create(
            name=(source.name + COPY_SUFFIX)[:100],
            description=source.description,
            pelleting_fee_type=source.pelleting_fee_type,
            pelleting_fee=source.pelleting_fee,
            system_fee_percent=source.system_fee_percent,
            formulation_fee_type=source.formulation_fee_type,
            formulation_fee=source.formulation_fee,
            active=False,
            archived=False,
        )
        logger.info("Duplicated fee configuration %s as %s", source.pk, copy.pk)
        return Response(self.get_serializer(copy).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch"], url_path="active")
    def set_active(self, request, pk=None):
        config = self.get_object()
        value, error = _flag_or_400(request, "active")
        if error:
            return error
        config.active = value
        config.save(update_fields=["active", "updated_at"])
        logger.info("Fee configuration %s active=%s", config.pk, value)
        return Response(self.get_serializer(config).data)

    @action(detail=True, methods=["patch"], url_path="archive")
    def set_archived(self, request, pk=None):
        config = self.get_object()
        value, error = _flag_or_400(request, "archived")
        if error:
            return error
        config.archived = value
        config.save(update_fields=["archived", "updated_at"])
        logger.info("Fee configuration %s archived=%s", config.pk, value)
        return Response(self.get_serializer(config).data)

    @action(detail=False, methods=["post"])
    def preview(self, request):
        # Unsaved configuration: the calculator coerces whatever it is given.
        payload = request.data if isinstance(request.data, dict) else {}
        breakdown = compute_charge_breakdown(
            payload,
            quantity_kg=payload.get("quantity_kg", payload.get("quantityKg")),
            unit_price_per_kg=payload.get("unit_price_per_kg", payload.get("unitPricePerKg")),
        )
        return Response(ChargeBreakdownSerializer(breakdown.rounded()).data)

    @action(detail=True, methods=["get"], url_path="preview")
    def stored_preview(self, request, pk=None):
        config = self.get_object()
        defaults = settings.FEEDMILL
        params = request.query_params
        breakdown = compute_charge_breakdown(
            config,
            quantity_kg=params.get("quantity_kg", defaults["PREVIEW_QUANTITY_KG"]),
            unit_price_per_kg=params.get("unit_price_per_kg", defaults["PREVIEW_UNIT_PRICE"]),
        )
        return Response(ChargeBreakdownSerializer(breakdown.rounded()).data)
