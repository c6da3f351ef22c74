"""
Pelleting batch lifecycle.

NOT_STARTED -> IN_PROGRESS -> COMPLETED. A batch may also be completed straight
from NOT_STARTED when the operator only logs the result. Nothing leaves
COMPLETED.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from core.money import ZERO, nz

from ..models import Formulation, PelletingBatch

logger = logging.getLogger(__name__)


class ProductionError(Exception):
    """Base exception for pelleting batch operations"""
    pass


class FormulationNotFinalizedError(ProductionError):
    """Raised when a batch is planned from a draft or archived formulation"""
    pass


class BatchStatusError(ProductionError):
    """Raised on a status transition the lifecycle does not allow"""
    pass


ALLOWED_TRANSITIONS = {
    PelletingBatch.NOT_STARTED: {PelletingBatch.IN_PROGRESS, PelletingBatch.COMPLETED},
    PelletingBatch.IN_PROGRESS: {PelletingBatch.COMPLETED},
    PelletingBatch.COMPLETED: set(),
}


def _locked_batch(batch_id: int) -> PelletingBatch:
    return PelletingBatch.objects.select_for_update().select_related('formulation').get(pk=batch_id)


def _check_transition(batch: PelletingBatch, new_status: str) -> None:
    if new_status not in ALLOWED_TRANSITIONS:
        raise BatchStatusError(f"Unknown batch status '{new_status}'")
    if new_status not in ALLOWED_TRANSITIONS[batch.status]:
        logger.warning("Rejected batch %s transition %s -> %s", batch.pk, batch.status, new_status)
        raise BatchStatusError(f"Cannot change status from {batch.get_status_display()} to "
                               f"{dict(PelletingBatch.STATUS)[new_status]}")


def create_batch(formulation_id: int, target_quantity_kg, machine_used: str = "", operator_name: str = "") -> PelletingBatch:
    formulation = Formulation.objects.get(pk=formulation_id)
    if not formulation.is_finalized:
        raise FormulationNotFinalizedError("Only finalized formulations can be used")
    target = nz(target_quantity_kg)
    if target <= ZERO:
        raise ProductionError("Target quantity must be greater than zero")

    batch = PelletingBatch.objects.create(
        formulation=formulation,
        target_quantity_kg=target,
        machine_used=machine_used or "",
        operator_name=operator_name or "",
        status=PelletingBatch.NOT_STARTED,
    )
    logger.info("Planned pelleting batch %s: %s kg of %s", batch.pk, target, formulation.name)
    return batch


@transaction.atomic
def start_batch(batch_id: int, machine_used: Optional[str] = None, operator_name: Optional[str] = None) -> PelletingBatch:
    batch = _locked_batch(batch_id)
    _check_transition(batch, PelletingBatch.IN_PROGRESS)

    batch.status = PelletingBatch.IN_PROGRESS
    batch.start_time = timezone.now()
    if machine_used:
        batch.machine_used = machine_used
    if operator_name:
        batch.operator_name = operator_name
    batch.save()
    logger.info("Pelleting batch %s started", batch.pk)
    return batch


@transaction.atomic
def complete_batch(
    batch_id: int,
    actual_yield_kg,
    wastage_kg=0,
    comments: str = "",
    leftovers: Optional[Iterable[str]] = None,
) -> PelletingBatch:
    batch = _locked_batch(batch_id)
    _check_transition(batch, PelletingBatch.COMPLETED)

    batch.status = PelletingBatch.COMPLETED
    batch.end_time = timezone.now()
    batch.actual_yield_kg = nz(actual_yield_kg)
    batch.total_wastage_kg = nz(wastage_kg)
    batch.operator_comments = comments or ""
    batch.leftover_raw_materials = list(leftovers or [])
    batch.save()
    logger.info(
        "Pelleting batch %s completed: yield=%s kg wastage=%s kg in %s min",
        batch.pk, batch.actual_yield_kg, batch.total_wastage_kg, batch.time_taken_minutes,
    )
    return batch


def update_status(batch_id: int, new_status: str) -> PelletingBatch:
    """Plain status change. Completing this way records no yield."""
    new_status = (new_status or "").strip().upper().replace(" ", "_")
    if new_status == PelletingBatch.IN_PROGRESS:
        return start_batch(batch_id)
    if new_status == PelletingBatch.COMPLETED:
        return complete_batch(batch_id, actual_yield_kg=0)
    with transaction.atomic():
        batch = _locked_batch(batch_id)
        _check_transition(batch, new_status)
    return batch


def set_archived(batch_id: int, archived: bool) -> PelletingBatch:
    batch = PelletingBatch.objects.get(pk=batch_id)
    batch.archived = archived
    batch.save(update_fields=['archived', 'updated_at'])
    logger.info("Pelleting batch %s archived=%s", batch.pk, archived)
    return batch
