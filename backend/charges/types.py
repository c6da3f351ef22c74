from enum import Enum


class FeeBasis(str, Enum):
    """How a fee is charged: per kilogram produced, or as a fixed amount per batch."""

    PER_KG = "PER_KG"
    PER_BATCH = "PER_BATCH"

    @classmethod
    def coerce(cls, value) -> "FeeBasis":
        # Missing basis falls back to per-kg; any other non-empty value is a fixed fee.
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.PER_KG
        text = str(value).strip().upper()
        if not text or text == cls.PER_KG.value:
            return cls.PER_KG
        return cls.PER_BATCH


BASIS_CHOICES = [(FeeBasis.PER_KG.value, "Per Kg"), (FeeBasis.PER_BATCH.value, "Per Batch (fixed)")]
