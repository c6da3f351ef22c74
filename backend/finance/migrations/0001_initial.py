import django.db.models.deletion
import finance.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("charges", "0001_initial"),
        ("production", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, unique=True)),
                ("company_name", models.CharField(blank=True, default="", max_length=200)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("currency", models.CharField(default=finance.models._default_currency, max_length=10)),
                ("payment_terms_days", models.PositiveIntegerField(default=30)),
                ("status", models.CharField(choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")], default="ACTIVE", max_length=16)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(blank=True, default="", max_length=200)),
                ("service_type", models.CharField(blank=True, default="", max_length=100)),
                ("quantity_kg", models.DecimalField(decimal_places=3, default=0, max_digits=12)),
                ("unit_rate", models.DecimalField(decimal_places=4, default=0, max_digits=12)),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("tax_rate", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("discount", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("notes", models.TextField(blank=True, default="")),
                ("status", models.CharField(choices=[("UNPAID", "Unpaid"), ("PAID", "Paid"), ("CANCELLED", "Cancelled")], default="UNPAID", max_length=16)),
                ("date_issued", models.DateTimeField(auto_now_add=True)),
                ("paid", models.BooleanField(default=False)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("batch", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="invoices", to="production.pelletingbatch")),
                ("customer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="invoices", to="finance.customer")),
                ("fee_configuration", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="invoices", to="charges.feeconfiguration")),
            ],
            options={
                "db_table": "invoices",
                "ordering": ["-date_issued", "-id"],
                "indexes": [models.Index(fields=["status"], name="invoice_status_idx")],
            },
        ),
    ]
