from django.db import models

from charges.services.calculator import billable_quantity_kg


class Formulation(models.Model):
    DRAFT = 'DRAFT'
    FINALIZED = 'FINALIZED'
    ARCHIVED = 'ARCHIVED'
    STATUS = [(DRAFT, 'Draft'), (FINALIZED, 'Finalized'), (ARCHIVED, 'Archived')]

    name = models.CharField(max_length=255)
    batch_size_kg = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    cost_per_kg = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    status = models.CharField(max_length=16, choices=STATUS, default=DRAFT)
    notes = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'formulations'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_finalized(self) -> bool:
        return self.status == self.FINALIZED


class PelletingBatch(models.Model):
    NOT_STARTED = 'NOT_STARTED'
    IN_PROGRESS = 'IN_PROGRESS'
    COMPLETED = 'COMPLETED'
    STATUS = [(NOT_STARTED, 'Not Started'), (IN_PROGRESS, 'In Progress'), (COMPLETED, 'Completed')]

    formulation = models.ForeignKey(Formulation, on_delete=models.PROTECT, related_name='batches')
    target_quantity_kg = models.DecimalField(max_digits=12, decimal_places=3)
    machine_used = models.CharField(max_length=100, blank=True, default="")
    operator_name = models.CharField(max_length=100, blank=True, default="")
    status = models.CharField(max_length=16, choices=STATUS, default=NOT_STARTED)
    actual_yield_kg = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    total_wastage_kg = models.DecimalField(max_digits=12, decimal_places=3, default=0)
    operator_comments = models.TextField(blank=True, default="")
    leftover_raw_materials = models.JSONField(default=list, blank=True)
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pelleting_batches'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'archived'], name='pellet_batch_status_idx'),
        ]

    def __str__(self):
        return f"Batch {self.pk} ({self.formulation.name})"

    @property
    def time_taken_minutes(self):
        if self.start_time is None or self.end_time is None:
            return None
        return int((self.end_time - self.start_time).total_seconds() // 60)

    @property
    def billable_quantity_kg(self):
        return billable_quantity_kg(self)
