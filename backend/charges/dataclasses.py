from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict

from core.money import ZERO, q2


@dataclass(frozen=True)
class ChargeBreakdown:
    pelleting_charge: Decimal = ZERO
    system_charge: Decimal = ZERO
    formulation_charge: Decimal = ZERO
    total: Decimal = ZERO
    quantity_kg: Decimal = ZERO
    unit_price_per_kg: Decimal = ZERO
    product_value: Decimal = ZERO

    def rounded(self) -> "ChargeBreakdown":
        """Display copy: money fields quantized to 0.01, half-up."""
        return replace(
            self,
            pelleting_charge=q2(self.pelleting_charge),
            system_charge=q2(self.system_charge),
            formulation_charge=q2(self.formulation_charge),
            total=q2(self.total),
            product_value=q2(self.product_value),
        )

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            "quantity_kg": self.quantity_kg,
            "unit_price_per_kg": self.unit_price_per_kg,
            "product_value": self.product_value,
            "pelleting_charge": self.pelleting_charge,
            "system_charge": self.system_charge,
            "formulation_charge": self.formulation_charge,
            "total": self.total,
        }
