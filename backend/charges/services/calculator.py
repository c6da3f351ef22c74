"""
Charge breakdown calculator.

Computes the pelleting, system and formulation charges for a batch from a fee
configuration. The same function backs the configuration preview and the
invoice pre-fill, so both always agree.

The calculator is deliberately permissive: it never raises, and any missing or
non-numeric input is treated as zero. Validation of a configuration belongs to
the serializer that persists it, not here.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from core.money import HUNDRED, ZERO, money_context, nz

from ..dataclasses import ChargeBreakdown
from ..types import FeeBasis

logger = logging.getLogger(__name__)

# snake_case attribute -> camelCase key sent by the web client
_CAMEL_KEYS = {
    "pelleting_fee_type": "pelletingFeeType",
    "pelleting_fee": "pelletingFee",
    "system_fee_percent": "systemFeePercent",
    "formulation_fee_type": "formulationFeeType",
    "formulation_fee": "formulationFee",
}


def _config_value(config: Any, name: str) -> Any:
    if config is None:
        return None
    if isinstance(config, Mapping):
        if config.get(name) is not None:
            return config[name]
        return config.get(_CAMEL_KEYS[name])
    return getattr(config, name, None)


def _fee_amount(basis: FeeBasis, fee, quantity_kg):
    if basis is FeeBasis.PER_KG:
        return quantity_kg * fee
    return fee


def compute_charge_breakdown(config: Any, quantity_kg=None, unit_price_per_kg=None) -> ChargeBreakdown:
    """
    Compute the unrounded charge breakdown.

    Arithmetic runs in a 50-digit context; any rounding it does sits far below
    the cent.

    Args:
        config: FeeConfiguration instance, mapping or None.
        quantity_kg: batch quantity; coerced with numeric-or-zero.
        unit_price_per_kg: price (or formulation cost) per kg, used only as the
            base of the system fee.

    Returns:
        ChargeBreakdown with unrounded values; call ``.rounded()`` for display.
    """
    qty = nz(quantity_kg)
    price = nz(unit_price_per_kg)

    pelleting_basis = FeeBasis.coerce(_config_value(config, "pelleting_fee_type"))
    formulation_basis = FeeBasis.coerce(_config_value(config, "formulation_fee_type"))

    pelleting_fee = nz(_config_value(config, "pelleting_fee"))
    formulation_fee = nz(_config_value(config, "formulation_fee"))
    percent = nz(_config_value(config, "system_fee_percent"))

    with money_context():
        pelleting = _fee_amount(pelleting_basis, pelleting_fee, qty)
        formulation = _fee_amount(formulation_basis, formulation_fee, qty)

        product_value = qty * price
        system = (percent / HUNDRED) * product_value

        total = pelleting + system + formulation
    logger.debug(
        "Charge breakdown qty=%s price=%s pelleting=%s system=%s formulation=%s total=%s",
        qty, price, pelleting, system, formulation, total,
    )
    return ChargeBreakdown(
        pelleting_charge=pelleting,
        system_charge=system,
        formulation_charge=formulation,
        total=total,
        quantity_kg=qty,
        unit_price_per_kg=price,
        product_value=product_value,
    )


def billable_quantity_kg(batch: Any):
    """Actual yield once recorded, otherwise the batch target."""
    actual = nz(getattr(batch, "actual_yield_kg", None))
    if actual > ZERO:
        return actual
    return nz(getattr(batch, "target_quantity_kg", None))


def formulation_cost_per_kg(batch: Any):
    formulation: Optional[Any] = getattr(batch, "formulation", None)
    cost = nz(getattr(formulation, "cost_per_kg", None))
    return cost if cost > ZERO else ZERO


def breakdown_for_batch(config: Any, batch: Any) -> ChargeBreakdown:
    """Breakdown for a pelleting batch, priced at its formulation's cost per kg."""
    return compute_charge_breakdown(
        config,
        quantity_kg=billable_quantity_kg(batch),
        unit_price_per_kg=formulation_cost_per_kg(batch),
    )
