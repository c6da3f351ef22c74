"""
Invoicing for pelleting work.

An invoice for a batch is priced with the same charge breakdown the fee
configuration preview shows, so the amount a user previews is the amount that
gets billed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from django.db import transaction
from django.utils import timezone

from charges.dataclasses import ChargeBreakdown
from charges.models import FeeConfiguration
from charges.services.calculator import breakdown_for_batch
from core.money import ZERO, nz, q2, q3, q4
from production.models import PelletingBatch

from ..models import Customer, Invoice

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_TYPE = "Pelleting+Formulation"


class InvoicingError(Exception):
    """Base exception for invoicing operations"""
    pass


class BatchNotCompletedError(InvoicingError):
    """Raised when invoicing a batch that has not finished pelleting"""
    pass


class FeeConfigurationUnavailableError(InvoicingError):
    """Raised when the chosen fee configuration is inactive or archived"""
    pass


class InvoiceStatusError(InvoicingError):
    """Raised on a payment or status change the invoice cannot take"""
    pass


@dataclass(frozen=True)
class InvoicePrefill:
    batch_id: int
    fee_configuration_id: int
    quantity_kg: Decimal
    # effective charge per kg billed
    unit_rate: Decimal
    amount: Decimal
    time_taken_minutes: Optional[int]
    breakdown: ChargeBreakdown


ALLOWED_TRANSITIONS = {
    Invoice.UNPAID: {Invoice.PAID, Invoice.CANCELLED},
    Invoice.CANCELLED: {Invoice.UNPAID},
    Invoice.PAID: set(),
}


def _load(batch_id: int, config_id: int):
    batch = PelletingBatch.objects.select_related('formulation').get(pk=batch_id)
    config = FeeConfiguration.objects.get(pk=config_id)
    return batch, config


def _prefill(batch: PelletingBatch, config: FeeConfiguration) -> InvoicePrefill:
    shown = breakdown_for_batch(config, batch).rounded()
    qty = q3(shown.quantity_kg)
    unit_rate = q4(shown.total / qty) if qty > ZERO else ZERO
    return InvoicePrefill(
        batch_id=batch.pk,
        fee_configuration_id=config.pk,
        quantity_kg=qty,
        unit_rate=unit_rate,
        amount=shown.total,
        time_taken_minutes=batch.time_taken_minutes,
        breakdown=shown,
    )


def prefill_invoice(config_id: int, batch_id: int) -> InvoicePrefill:
    """Figures for the invoice form. Does not check batch status or config flags."""
    batch, config = _load(batch_id, config_id)
    return _prefill(batch, config)


def invoice_notes(prefill: InvoicePrefill) -> str:
    minutes = "-" if prefill.time_taken_minutes is None else prefill.time_taken_minutes
    b = prefill.breakdown
    return (
        f"Pelleting duration: {minutes} min | Pelleting={b.pelleting_charge} "
        f"| System={b.system_charge} | Formulation={b.formulation_charge}"
    )


@transaction.atomic
def create_invoice_from_batch(
    batch_id: int,
    config_id: int,
    customer_id: Optional[int] = None,
    service_type: str = DEFAULT_SERVICE_TYPE,
) -> Invoice:
    batch, config = _load(batch_id, config_id)
    if batch.status != PelletingBatch.COMPLETED:
        raise BatchNotCompletedError(f"Batch {batch.pk} is not completed")
    if not config.is_usable:
        raise FeeConfigurationUnavailableError(f"Fee configuration '{config.name}' is inactive or archived")

    customer = Customer.objects.get(pk=customer_id) if customer_id is not None else None
    prefill = _prefill(batch, config)

    invoice = Invoice.objects.create(
        customer=customer,
        customer_name=customer.name if customer else "",
        batch=batch,
        fee_configuration=config,
        service_type=service_type or DEFAULT_SERVICE_TYPE,
        quantity_kg=prefill.quantity_kg,
        unit_rate=prefill.unit_rate,
        amount=prefill.amount,
        tax_rate=ZERO,
        discount=ZERO,
        notes=invoice_notes(prefill),
        status=Invoice.UNPAID,
    )
    logger.info("Invoice %s created for batch %s: amount=%s", invoice.pk, batch.pk, invoice.amount)
    return invoice


def _locked_invoice(invoice_id: int) -> Invoice:
    return Invoice.objects.select_for_update().get(pk=invoice_id)


@transaction.atomic
def mark_paid(invoice_id: int, amount=None, payment_date=None) -> Invoice:
    """Settle an invoice in full. Without an amount the invoice amount is recorded."""
    invoice = _locked_invoice(invoice_id)
    if invoice.status == Invoice.PAID:
        raise InvoiceStatusError(f"Invoice {invoice.pk} is already paid")
    if invoice.status == Invoice.CANCELLED:
        raise InvoiceStatusError(f"Invoice {invoice.pk} is cancelled")

    paid_amount = invoice.amount if amount is None else q2(nz(amount))
    if paid_amount < invoice.amount:
        raise InvoicingError(f"Payment {paid_amount} is less than the invoice amount {invoice.amount}")

    invoice.status = Invoice.PAID
    invoice.paid = True
    invoice.amount_paid = paid_amount
    invoice.payment_date = payment_date or timezone.now()
    invoice.save()
    logger.info("Invoice %s paid: %s", invoice.pk, paid_amount)
    return invoice


def update_status(invoice_id: int, new_status: str) -> Invoice:
    new_status = (new_status or "").strip().upper()
    if new_status not in ALLOWED_TRANSITIONS:
        raise InvoiceStatusError(f"Unknown invoice status '{new_status}'")
    if new_status == Invoice.PAID:
        return mark_paid(invoice_id)

    with transaction.atomic():
        invoice = _locked_invoice(invoice_id)
        if new_status not in ALLOWED_TRANSITIONS[invoice.status]:
            logger.warning("Rejected invoice %s transition %s -> %s", invoice.pk, invoice.status, new_status)
            raise InvoiceStatusError(
                f"Cannot change status from {invoice.get_status_display()} to "
                f"{dict(Invoice.STATUS)[new_status]}"
            )
        invoice.status = new_status
        invoice.save(update_fields=['status', 'updated_at'])
    logger.info("Invoice %s status=%s", invoice.pk, new_status)
    return invoice


def unpaid_customer_names() -> List[str]:
    names = (
        Invoice.objects.filter(status=Invoice.UNPAID)
        .exclude(customer_name="")
        .order_by('customer_name')
        .values_list('customer_name', flat=True)
        .distinct()
    )
    return list(names)
