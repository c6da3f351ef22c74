"""
Unit tests for the charge breakdown calculator.

Covers the worked pelleting/system/formulation example, the per-kg vs per-batch
bases, numeric-or-zero coercion and the display rounding rules.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from ..dataclasses import ChargeBreakdown
from ..services.calculator import (
    billable_quantity_kg,
    breakdown_for_batch,
    compute_charge_breakdown,
    formulation_cost_per_kg,
)
from ..types import FeeBasis


def _config(**overrides):
    base = {
        "pelleting_fee_type": "PER_KG",
        "pelleting_fee": Decimal("5"),
        "system_fee_percent": Decimal("2"),
        "formulation_fee_type": "PER_BATCH",
        "formulation_fee": Decimal("1000"),
    }
    base.update(overrides)
    return base


class TestWorkedExamples:
    def test_mixed_bases(self):
        result = compute_charge_breakdown(_config(), quantity_kg=1000, unit_price_per_kg=20)

        assert result.pelleting_charge == Decimal("5000")
        assert result.product_value == Decimal("20000")
        assert result.system_charge == Decimal("400")
        assert result.formulation_charge == Decimal("1000")
        assert result.total == Decimal("6400")

    @pytest.mark.parametrize("qty,price", [(0, 0), (1000, 20), ("12.5", "3.3"), (999999, 1)])
    def test_all_zero_fees_give_zero_total(self, qty, price):
        cfg = _config(pelleting_fee=0, system_fee_percent=0, formulation_fee=0)
        assert compute_charge_breakdown(cfg, qty, price).total == Decimal("0")

    def test_model_like_object_is_accepted(self):
        cfg = SimpleNamespace(**_config())
        assert compute_charge_breakdown(cfg, 1000, 20).total == Decimal("6400")

    def test_camel_case_mapping_is_accepted(self):
        cfg = {
            "pelletingFeeType": "PER_KG",
            "pelletingFee": 5,
            "systemFeePercent": 2,
            "formulationFeeType": "PER_BATCH",
            "formulationFee": 1000,
        }
        assert compute_charge_breakdown(cfg, 1000, 20).total == Decimal("6400")


class TestProperties:
    @pytest.mark.parametrize("qty,price,pel,pct,form", [
        ("1000", "20", "5", "2", "1000"),
        ("0.333", "17.77", "1.1", "33.33", "0.07"),
        ("123456.789", "0.01", "0.0001", "100", "9999"),
        ("7", "0", "0", "0", "0"),
    ])
    def test_total_is_exact_sum(self, qty, price, pel, pct, form):
        cfg = _config(pelleting_fee=pel, system_fee_percent=pct, formulation_fee=form,
                      formulation_fee_type="PER_KG")
        r = compute_charge_breakdown(cfg, qty, price)
        assert r.total == r.pelleting_charge + r.system_charge + r.formulation_charge
        for value in (r.pelleting_charge, r.system_charge, r.formulation_charge, r.total):
            assert value.is_finite() and value >= 0

    def test_per_batch_pelleting_ignores_quantity(self):
        cfg = _config(pelleting_fee_type="PER_BATCH", pelleting_fee="750")
        small = compute_charge_breakdown(cfg, 10, 20)
        large = compute_charge_breakdown(cfg, 10000, 20)
        assert small.pelleting_charge == large.pelleting_charge == Decimal("750")

    @pytest.mark.parametrize("qty,price", [(1, 1), (1000, 20), ("5000.5", "99.99")])
    def test_zero_percent_means_zero_system_charge(self, qty, price):
        r = compute_charge_breakdown(_config(system_fee_percent=0), qty, price)
        assert r.system_charge == 0

    def test_repeated_calls_are_identical(self):
        cfg = _config()
        assert compute_charge_breakdown(cfg, 1000, 20) == compute_charge_breakdown(cfg, 1000, 20)

    def test_missing_inputs_behave_as_zero(self):
        cfg = _config()
        assert compute_charge_breakdown(cfg) == compute_charge_breakdown(cfg, 0, 0)
        assert compute_charge_breakdown(cfg, None, None) == compute_charge_breakdown(cfg, 0, 0)


class TestCoercion:
    @pytest.mark.parametrize("junk", [None, "", "abc", float("nan"), float("inf"), [], {}])
    def test_junk_quantity_is_zero(self, junk):
        r = compute_charge_breakdown(_config(), quantity_kg=junk, unit_price_per_kg=20)
        assert r.quantity_kg == 0
        assert r.pelleting_charge == 0
        assert r.system_charge == 0
        # per-batch formulation fee still applies
        assert r.formulation_charge == Decimal("1000")

    def test_none_config_is_all_zero(self):
        r = compute_charge_breakdown(None, 1000, 20)
        assert r.total == 0
        assert r.product_value == Decimal("20000")

    def test_missing_fee_fields_are_zero(self):
        r = compute_charge_breakdown({}, 1000, 20)
        assert r == compute_charge_breakdown(None, 1000, 20)

    def test_missing_basis_defaults_to_per_kg(self):
        cfg = _config(pelleting_fee_type=None, formulation_fee_type=None, formulation_fee="2")
        r = compute_charge_breakdown(cfg, 100, 0)
        assert r.pelleting_charge == Decimal("500")
        assert r.formulation_charge == Decimal("200")

    @pytest.mark.parametrize("huge", ["1e999999", "-1e999999", "1e12", Decimal("9" * 40)])
    def test_out_of_range_numbers_are_zero(self, huge):
        cfg = _config(pelleting_fee=huge, system_fee_percent=huge)
        r = compute_charge_breakdown(cfg, huge, huge)
        assert r.quantity_kg == 0
        assert r.total == Decimal("1000")
        assert r.rounded().total == Decimal("1000.00")

    def test_largest_accepted_inputs_stay_finite(self):
        top = "999999999999.999"
        cfg = _config(pelleting_fee=top, system_fee_percent=top, formulation_fee_type="PER_KG", formulation_fee=top)
        r = compute_charge_breakdown(cfg, top, top)
        assert r.system_charge > r.pelleting_charge > 0
        shown = r.rounded()
        assert shown.total.is_finite()
        assert shown.total.as_tuple().exponent == -2

    def test_never_raises_on_garbage_config(self):
        cfg = {"pelleting_fee_type": object(), "pelleting_fee": object(), "system_fee_percent": "x"}
        r = compute_charge_breakdown(cfg, "y", "z")
        assert r.total == 0


class TestFeeBasis:
    @pytest.mark.parametrize("raw,expected", [
        (None, FeeBasis.PER_KG),
        ("", FeeBasis.PER_KG),
        ("PER_KG", FeeBasis.PER_KG),
        ("per_kg", FeeBasis.PER_KG),
        (FeeBasis.PER_BATCH, FeeBasis.PER_BATCH),
        ("PER_BATCH", FeeBasis.PER_BATCH),
        ("per_batch", FeeBasis.PER_BATCH),
        ("FLAT", FeeBasis.PER_BATCH),
    ])
    def test_coerce(self, raw, expected):
        assert FeeBasis.coerce(raw) is expected


class TestDisplayRounding:
    def test_rounded_is_half_up_to_two_places(self):
        cfg = _config(pelleting_fee="0.005", system_fee_percent=0, formulation_fee=0)
        r = compute_charge_breakdown(cfg, 1, 0).rounded()
        assert r.pelleting_charge == Decimal("0.01")
        assert str(r.total) == "0.01"

    def test_total_is_rounded_from_unrounded_sum(self):
        cfg = _config(pelleting_fee="0.004", formulation_fee_type="PER_KG",
                      formulation_fee="0.004", system_fee_percent="0.4")
        raw = compute_charge_breakdown(cfg, 1, 1)
        assert raw.total == Decimal("0.012")
        shown = raw.rounded()
        assert shown.pelleting_charge == shown.system_charge == shown.formulation_charge == Decimal("0.00")
        assert shown.total == Decimal("0.01")

    def test_rounding_keeps_inputs(self):
        r = compute_charge_breakdown(_config(), "12.3456", "1.23456").rounded()
        assert r.quantity_kg == Decimal("12.3456")
        assert r.unit_price_per_kg == Decimal("1.23456")

    def test_as_dict_keys(self):
        assert set(ChargeBreakdown().as_dict()) == {
            "quantity_kg", "unit_price_per_kg", "product_value",
            "pelleting_charge", "system_charge", "formulation_charge", "total",
        }


class TestBatchInputs:
    def _batch(self, actual=0, target=500, cost=10):
        formulation = SimpleNamespace(cost_per_kg=cost) if cost is not None else None
        return SimpleNamespace(actual_yield_kg=actual, target_quantity_kg=target, formulation=formulation)

    def test_actual_yield_wins_when_positive(self):
        assert billable_quantity_kg(self._batch(actual=480)) == Decimal("480")

    def test_target_used_before_yield_is_recorded(self):
        assert billable_quantity_kg(self._batch(actual=0)) == Decimal("500")

    def test_missing_formulation_costs_zero(self):
        assert formulation_cost_per_kg(self._batch(cost=None)) == 0

    def test_negative_cost_is_ignored(self):
        assert formulation_cost_per_kg(self._batch(cost=-3)) == 0

    def test_breakdown_for_batch(self):
        r = breakdown_for_batch(_config(), self._batch(actual=1000, cost=20))
        assert r.total == Decimal("6400")
        assert r == compute_charge_breakdown(_config(), 1000, 20)
