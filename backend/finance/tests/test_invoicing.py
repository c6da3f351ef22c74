from datetime import timedelta
from decimal import Decimal

import pytest
from django.test import TestCase
from rest_framework.test import APIClient

from charges.models import FeeConfiguration
from production.models import Formulation, PelletingBatch
from production.services.batches import complete_batch, create_batch, start_batch

from ..models import Customer, Invoice
from ..services.invoicing import (
    BatchNotCompletedError,
    FeeConfigurationUnavailableError,
    InvoiceStatusError,
    InvoicingError,
    create_invoice_from_batch,
    mark_paid,
    prefill_invoice,
    unpaid_customer_names,
    update_status,
)

pytestmark = pytest.mark.django_db


def _config(**overrides):
    data = dict(
        name="Default",
        pelleting_fee_type="PER_KG",
        pelleting_fee=Decimal("5"),
        system_fee_percent=Decimal("2"),
        formulation_fee_type="PER_BATCH",
        formulation_fee=Decimal("1000"),
    )
    data.update(overrides)
    return FeeConfiguration.objects.create(**data)


def _batch(target="1000", actual=None):
    formulation = Formulation.objects.create(name="Layer Mash", cost_per_kg=Decimal("20"), status=Formulation.FINALIZED)
    batch = create_batch(formulation.id, target)
    if actual is not None:
        batch = complete_batch(batch.id, actual_yield_kg=actual)
    return batch


class TestPrefill:
    def test_prefill_matches_worked_example(self):
        cfg = _config()
        batch = _batch(actual="1000")
        prefill = prefill_invoice(cfg.id, batch.id)
        assert prefill.amount == Decimal("6400.00")
        assert prefill.quantity_kg == Decimal("1000")
        assert prefill.unit_rate == Decimal("6.4000")
        assert prefill.breakdown.system_charge == Decimal("400.00")

    def test_prefill_falls_back_to_target(self):
        # not completed yet: pre-fill still works off the target quantity
        prefill = prefill_invoice(_config().id, _batch(target="500").id)
        assert prefill.quantity_kg == Decimal("500")
        assert prefill.amount == Decimal("2500") + Decimal("200") + Decimal("1000")

    def test_prefill_ignores_config_flags(self):
        cfg = _config(active=False, archived=True)
        assert prefill_invoice(cfg.id, _batch(actual="10").id).amount > 0


class TestCreateFromBatch:
    def test_creates_unpaid_invoice(self):
        customer = Customer.objects.create(name="Green Farms")
        batch = _batch(actual="1000")
        invoice = create_invoice_from_batch(batch.id, _config().id, customer_id=customer.id)

        assert invoice.status == Invoice.UNPAID
        assert invoice.paid is False
        assert invoice.amount == Decimal("6400.00")
        assert invoice.tax_rate == 0 and invoice.discount == 0
        assert invoice.customer_name == "Green Farms"
        assert invoice.service_type == "Pelleting+Formulation"
        assert invoice.notes == (
            "Pelleting duration: - min | Pelleting=5000.00 | System=400.00 | Formulation=1000.00"
        )

    def test_notes_carry_duration(self):
        batch = _batch()
        batch = start_batch(batch.id)
        batch = complete_batch(batch.id, actual_yield_kg="1000")
        PelletingBatch.objects.filter(pk=batch.pk).update(end_time=batch.start_time + timedelta(minutes=42))
        invoice = create_invoice_from_batch(batch.id, _config().id)
        assert invoice.notes.startswith("Pelleting duration: 42 min |")
        assert invoice.customer is None

    def test_rejects_unfinished_batch(self):
        with pytest.raises(BatchNotCompletedError):
            create_invoice_from_batch(_batch().id, _config().id)

    @pytest.mark.parametrize("flags", [{"active": False}, {"archived": True}])
    def test_rejects_unusable_configuration(self, flags):
        with pytest.raises(FeeConfigurationUnavailableError):
            create_invoice_from_batch(_batch(actual="10").id, _config(**flags).id)
        assert Invoice.objects.count() == 0


class TestPaymentAndStatus:
    def _invoice(self, amount="150.00", name="Acme"):
        return Invoice.objects.create(customer_name=name, amount=Decimal(amount))

    def test_mark_paid_in_full(self):
        invoice = mark_paid(self._invoice().id)
        assert invoice.status == Invoice.PAID
        assert invoice.paid is True
        assert invoice.amount_paid == Decimal("150.00")
        assert invoice.payment_date is not None

    def test_mark_paid_twice(self):
        invoice = mark_paid(self._invoice().id, amount="160")
        assert invoice.amount_paid == Decimal("160.00")
        with pytest.raises(InvoiceStatusError):
            mark_paid(invoice.id)

    def test_underpayment_is_rejected(self):
        invoice = self._invoice()
        with pytest.raises(InvoicingError, match="less than"):
            mark_paid(invoice.id, amount="149.99")
        invoice.refresh_from_db()
        assert invoice.status == Invoice.UNPAID
        assert invoice.paid is False

    def test_cannot_pay_cancelled(self):
        invoice = update_status(self._invoice().id, "cancelled")
        with pytest.raises(InvoiceStatusError):
            mark_paid(invoice.id)
        # cancelled invoices can be reopened
        assert update_status(invoice.id, "UNPAID").status == Invoice.UNPAID

    def test_paid_is_final(self):
        invoice = update_status(self._invoice().id, "PAID")
        assert invoice.paid is True
        with pytest.raises(InvoiceStatusError):
            update_status(invoice.id, "CANCELLED")

    def test_unknown_status(self):
        with pytest.raises(InvoiceStatusError, match="Unknown"):
            update_status(self._invoice().id, "OVERDUE")

    def test_unpaid_customer_names(self):
        self._invoice(name="Beta")
        self._invoice(name="Alpha")
        self._invoice(name="Alpha")
        self._invoice(name="")
        mark_paid(self._invoice(name="Gamma").id)
        assert unpaid_customer_names() == ["Alpha", "Beta"]


class InvoiceApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.config = _config()
        self.batch = _batch(actual="1000")
        self.customer = Customer.objects.create(name="Green Farms")

    def test_prefill_endpoint(self):
        r = self.client.post("/api/invoices/prefill/",
                             {"fee_configuration": self.config.id, "batch": self.batch.id}, format="json")
        assert r.status_code == 200, r.content
        assert r.data["amount"] == "6400.00"
        assert r.data["quantity_kg"] == "1000.000"
        assert r.data["breakdown"]["pelleting_charge"] == "5000.00"
        assert r.data["time_taken_minutes"] is None

    def test_prefill_unknown_batch(self):
        r = self.client.post("/api/invoices/prefill/",
                             {"fee_configuration": self.config.id, "batch": 987654}, format="json")
        assert r.status_code == 404

    def test_from_batch_endpoint(self):
        r = self.client.post("/api/invoices/from-batch/", {
            "batch": self.batch.id,
            "fee_configuration": self.config.id,
            "customer": self.customer.id,
        }, format="json")
        assert r.status_code == 201, r.content
        assert r.data["amount"] == "6400.00"
        assert r.data["status"] == "UNPAID"
        assert r.data["customer_name"] == "Green Farms"

        r = self.client.get(f"/api/invoices/customer/{self.customer.id}/")
        assert r.status_code == 200
        assert len(r.data) == 1

    def test_from_batch_rejects_archived_config(self):
        self.config.archived = True
        self.config.save()
        r = self.client.post("/api/invoices/from-batch/",
                             {"batch": self.batch.id, "fee_configuration": self.config.id}, format="json")
        assert r.status_code == 400
        assert "inactive or archived" in r.data["detail"]

    def test_manual_invoice_and_payment(self):
        r = self.client.post("/api/invoices/", {
            "customer": self.customer.id,
            "service_type": "Formulation",
            "amount": "250.00",
            "status": "PAID",
        }, format="json")
        assert r.status_code == 201, r.content
        # status is server-controlled
        assert r.data["status"] == "UNPAID"
        assert r.data["customer_name"] == "Green Farms"
        iid = r.data["id"]

        assert self.client.get("/api/invoices/unpaid-customers/").data == ["Green Farms"]

        r = self.client.post(f"/api/invoices/{iid}/pay/", {}, format="json")
        assert r.status_code == 200, r.content
        assert r.data["paid"] is True
        assert r.data["amount_paid"] == "250.00"

        r = self.client.post(f"/api/invoices/{iid}/pay/", {}, format="json")
        assert r.status_code == 400

    def test_status_endpoint(self):
        invoice = Invoice.objects.create(customer_name="Acme", amount=Decimal("10"))
        r = self.client.patch(f"/api/invoices/{invoice.id}/status/?status=CANCELLED")
        assert r.status_code == 200
        assert r.data["status"] == "CANCELLED"
        assert self.client.patch(f"/api/invoices/{invoice.id}/status/").status_code == 400
        assert self.client.get("/api/invoices/?status=cancelled").data[0]["id"] == invoice.id

    def test_status_query_value_does_not_hide_the_invoice(self):
        invoice = Invoice.objects.create(customer_name="Acme", amount=Decimal("10"))
        r = self.client.patch(f"/api/invoices/{invoice.id}/status/?status=PAID")
        assert r.status_code == 200, r.content
        assert r.data["paid"] is True
        assert r.data["amount_paid"] == "10.00"

    def test_partial_payment_endpoint(self):
        invoice = Invoice.objects.create(customer_name="Acme", amount=Decimal("10"))
        r = self.client.post(f"/api/invoices/{invoice.id}/pay/", {"amount": "5.00"}, format="json")
        assert r.status_code == 400
        assert "less than" in r.data["detail"]

    def test_negative_amount_rejected(self):
        r = self.client.post("/api/invoices/", {"customer_name": "X", "amount": "-5"}, format="json")
        assert r.status_code == 400
        assert "amount" in r.data

    def test_delete(self):
        invoice = Invoice.objects.create(customer_name="Acme", amount=Decimal("10"))
        assert self.client.delete(f"/api/invoices/{invoice.id}/").status_code == 204


class CustomerApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_defaults(self):
        r = self.client.post("/api/customers/", {"name": "Hill Poultry"}, format="json")
        assert r.status_code == 201, r.content
        assert r.data["currency"] == "LKR"
        assert r.data["payment_terms_days"] == 30
        assert r.data["status"] == "ACTIVE"

    def test_unique_name(self):
        Customer.objects.create(name="Hill Poultry")
        r = self.client.post("/api/customers/", {"name": "Hill Poultry"}, format="json")
        assert r.status_code == 400
