from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.money import parse_bool

from .models import Formulation, PelletingBatch
from .serializers import (
    BatchCompleteSerializer,
    BatchCreateSerializer,
    BatchStartSerializer,
    BatchStatusSerializer,
    FormulationSerializer,
    PelletingBatchSerializer,
)
from .services import batches
from .services.batches import ProductionError

logger = logging.getLogger(__name__)


class FormulationViewSet(viewsets.ModelViewSet):
    queryset = Formulation.objects.all()
    serializer_class = FormulationSerializer


class PelletingBatchViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    serializer_class = PelletingBatchSerializer

    def get_queryset(self):
        qs = PelletingBatch.objects.select_related('formulation')
        if self.action != "list":
            return qs
        params = self.request.query_params
        batch_status = (params.get("status") or "").strip().upper()
        if batch_status:
            qs = qs.filter(status=batch_status)
        archived = parse_bool(params.get("archived"))
        if archived is not None:
            qs = qs.filter(archived=archived)
        return qs

    def _respond(self, batch, code=status.HTTP_200_OK):
        return Response(PelletingBatchSerializer(batch).data, status=code)

    def create(self, request):
        ser = BatchCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        get_object_or_404(Formulation, pk=data["formulation"])
        try:
            batch = batches.create_batch(
                data["formulation"],
                data["target_quantity_kg"],
                machine_used=data["machine_used"],
                operator_name=data["operator_name"],
            )
        except ProductionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._respond(batch, status.HTTP_201_CREATED)

    @action(detail=True, methods=["post", "put"])
    def start(self, request, pk=None):
        batch = self.get_object()
        ser = BatchStartSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            batch = batches.start_batch(batch.pk, **ser.validated_data)
        except ProductionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._respond(batch)

    @action(detail=True, methods=["post", "put"])
    def complete(self, request, pk=None):
        batch = self.get_object()
        ser = BatchCompleteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        try:
            batch = batches.complete_batch(
                batch.pk,
                actual_yield_kg=data["actual_yield_kg"],
                wastage_kg=data["total_wastage_kg"],
                comments=data["operator_comments"],
                leftovers=data["leftover_raw_materials"],
            )
        except ProductionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._respond(batch)

    @action(detail=True, methods=["post", "put"], url_path="status")
    def change_status(self, request, pk=None):
        batch = self.get_object()
        ser = BatchStatusSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            batch = batches.update_status(batch.pk, ser.validated_data["status"])
        except ProductionError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return self._respond(batch)

    @action(detail=True, methods=["patch"])
    def archive(self, request, pk=None):
        batch = self.get_object()
        archived = parse_bool(request.query_params.get("archived"))
        if archived is None:
            return Response({"detail": "'archived' must be true or false"}, status=status.HTTP_400_BAD_REQUEST)
        return self._respond(batches.set_archived(batch.pk, archived))
