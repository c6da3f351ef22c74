from django.conf import settings
from django.db import models


def _default_currency():
    return settings.FEEDMILL["CURRENCY"]


class Customer(models.Model):
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'
    STATUS = [(ACTIVE, 'Active'), (INACTIVE, 'Inactive')]

    name = models.CharField(max_length=200, unique=True)
    company_name = models.CharField(max_length=200, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    currency = models.CharField(max_length=10, default=_default_currency)
    payment_terms_days = models.PositiveIntegerField(default=30)
    status = models.CharField(max_length=16, choices=STATUS, default=ACTIVE)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        ordering = ['name']

    def __str__(self):
        return self.name


class Invoice(models.Model):
    UNPAID = 'UNPAID'
    PAID = 'PAID'
    CANCELLED = 'CANCELLED'
    STATUS = [(UNPAID, 'Unpaid'), (PAID, 'Paid'), (CANCELLED, 'Cancelled')]

    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    # Kept as typed on the invoice; survives customer renames and walk-in sales
    customer_name = models.CharField(max_length=200, blank=True, default="")
    batch = models.ForeignKey('production.PelletingBatch', on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    fee_configuration = models.ForeignKey('charges.FeeConfiguration', on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    service_type = models.CharField(max_length=100, blank=True, default="")
    quantity_kg = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    unit_rate = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    notes = models.TextField(blank=True, default="")
    status = models.CharField(max_length=16, choices=STATUS, default=UNPAID)
    date_issued = models.DateTimeField(auto_now_add=True)
    paid = models.BooleanField(default=False)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    payment_date = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'invoices'
        ordering = ['-date_issued', '-id']
        indexes = [
            models.Index(fields=['status'], name='invoice_status_idx'),
        ]

    def __str__(self):
        return f"Invoice {self.pk} ({self.customer_name or '-'})"
