from django.db import models

from .types import BASIS_CHOICES, FeeBasis


class FeeConfiguration(models.Model):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    pelleting_fee_type = models.CharField(max_length=16, choices=BASIS_CHOICES, default=FeeBasis.PER_KG.value)
    pelleting_fee = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    # Percentage of product value (quantity x unit price)
    system_fee_percent = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    formulation_fee_type = models.CharField(max_length=16, choices=BASIS_CHOICES, default=FeeBasis.PER_KG.value)
    formulation_fee = models.DecimalField(max_digits=12, decimal_places=4, default=0)
    # Independent flags: an archived configuration may still be active.
    active = models.BooleanField(default=True)
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'fee_configurations'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['active', 'archived'], name='fee_config_active_archived_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_usable(self) -> bool:
        return self.active and not self.archived
