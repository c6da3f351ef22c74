from django.contrib import admin

from .models import Formulation, PelletingBatch


@admin.register(Formulation)
class FormulationAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "cost_per_kg", "batch_size_kg", "updated_at")
    list_filter = ("status",)
    search_fields = ("name",)


@admin.register(PelletingBatch)
class PelletingBatchAdmin(admin.ModelAdmin):
    list_display = ("id", "formulation", "status", "target_quantity_kg", "actual_yield_kg", "machine_used", "start_time", "end_time", "archived")
    list_filter = ("status", "archived", "machine_used")
    search_fields = ("formulation__name", "operator_name")
    readonly_fields = ("start_time", "end_time", "created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        # Completed batches are a record of what happened
        if obj and obj.status == PelletingBatch.COMPLETED:
            return [f.name for f in obj._meta.fields]
        return super().get_readonly_fields(request, obj)
