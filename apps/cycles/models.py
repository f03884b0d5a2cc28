from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class CycleStatus(models.TextChoices):
    OPEN = 'open', 'Open'
    LOCKED = 'locked', 'Locked'
    COMPLETED = 'completed', 'Completed'


class Cycle(models.Model):
    """One round of a recurring group order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    status = models.CharField(
        max_length=20,
        choices=CycleStatus.choices,
        default=CycleStatus.OPEN
    )
    shared_password = models.CharField(max_length=128, null=True, blank=True)
    markup_ratio = models.DecimalField(
        max_digits=6,
        decimal_places=3,
        default=Decimal('1.000'),
        validators=[MinValueValidator(Decimal('0.001'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'order_cycles'
        indexes = [
            models.Index(fields=['status'], name='cycles_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.status})"

    @property
    def is_open(self):
        """Only open cycles accept cart changes; locked and completed both block."""
        return self.status == CycleStatus.OPEN
