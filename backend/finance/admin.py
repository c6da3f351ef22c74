from django.contrib import admin

from .models import Customer, Invoice


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "company_name", "currency", "payment_terms_days", "status")
    list_filter = ("status", "currency")
    search_fields = ("name", "company_name", "email")


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "service_type", "batch", "amount", "status", "date_issued", "paid")
    list_filter = ("status", "paid")
    search_fields = ("customer_name", "notes")
    readonly_fields = ("date_issued", "updated_at")
