from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from charges.models import FeeConfiguration
from production.models import PelletingBatch

from .models import Customer, Invoice
from .serializers import (
    CustomerSerializer,
    InvoiceFromBatchSerializer,
    InvoicePrefillSerializer,
    InvoiceSerializer,
    PaymentSerializer,
    PrefillRequestSerializer,
)
from .services import invoicing
from .services.invoicing import InvoicingError

logger = logging.getLogger(__name__)


def _error(e):
    return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)


class CustomerViewSet(viewsets.ModelViewSet):
    serializer_class = CustomerSerializer

    def get_queryset(self):
        qs = Customer.objects.all()
        if self.action != "list":
            return qs
        customer_status = (self.request.query_params.get("status") or "").strip().upper()
        if customer_status:
            qs = qs.filter(status=customer_status)
        return qs


class InvoiceViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = InvoiceSerializer

    def get_queryset(self):
        qs = Invoice.objects.select_related('customer', 'batch', 'fee_configuration')
        if self.action != "list":
            return qs
        invoice_status = (self.request.query_params.get("status") or "").strip().upper()
        if invoice_status:
            qs = qs.filter(status=invoice_status)
        return qs

    def perform_create(self, serializer):
        invoice = serializer.save()
        logger.info("Invoice %s created manually: amount=%s", invoice.pk, invoice.amount)

    @action(detail=True, methods=["patch", "put"], url_path="status")
    def change_status(self, request, pk=None):
        invoice = self.get_object()
        new_status = request.query_params.get("status")
        if new_status is None and isinstance(request.data, dict):
            new_status = request.data.get("status")
        if not new_status:
            return Response({"detail": "'status' is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            invoice = invoicing.update_status(invoice.pk, new_status)
        except InvoicingError as e:
            return _error(e)
        return Response(InvoiceSerializer(invoice).data)

    @action(detail=True, methods=["post"])
    def pay(self, request, pk=None):
        invoice = self.get_object()
        ser = PaymentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            invoice = invoicing.mark_paid(invoice.pk, **ser.validated_data)
        except InvoicingError as e:
            return _error(e)
        return Response(InvoiceSerializer(invoice).data)

    @action(detail=False, methods=["get"], url_path=r"customer/(?P<customer_id>\d+)")
    def by_customer(self, request, customer_id=None):
        qs = self.get_queryset().filter(customer_id=customer_id)
        return Response(InvoiceSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"], url_path="unpaid-customers")
    def unpaid_customers(self, request):
        return Response(invoicing.unpaid_customer_names())

    @action(detail=False, methods=["post"])
    def prefill(self, request):
        ser = PrefillRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        batch = get_object_or_404(PelletingBatch, pk=ser.validated_data["batch"])
        config = get_object_or_404(FeeConfiguration, pk=ser.validated_data["fee_configuration"])
        prefill = invoicing.prefill_invoice(config.pk, batch.pk)
        return Response(InvoicePrefillSerializer(prefill).data)

    @action(detail=False, methods=["post"], url_path="from-batch")
    def from_batch(self, request):
        ser = InvoiceFromBatchSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        batch = get_object_or_404(PelletingBatch, pk=data["batch"])
        config = get_object_or_404(FeeConfiguration, pk=data["fee_configuration"])
        customer = get_object_or_404(Customer, pk=data["customer"]) if data["customer"] is not None else None
        try:
            invoice = invoicing.create_invoice_from_batch(
                batch.pk,
                config.pk,
                customer_id=customer.pk if customer else None,
                service_type=data["service_type"],
            )
        except InvoicingError as e:
            return _error(e)
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)
