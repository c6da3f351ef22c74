from django.contrib import admin

from .models import FeeConfiguration


@admin.register(FeeConfiguration)
class FeeConfigurationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "name",
        "pelleting_fee_type",
        "pelleting_fee",
        "system_fee_percent",
        "formulation_fee_type",
        "formulation_fee",
        "active",
        "archived",
        "updated_at",
    )
    list_filter = ("active", "archived", "pelleting_fee_type", "formulation_fee_type")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
