from django.db import models
from django.utils import timezone
import uuid

NOTE_MAX_LENGTH = 160


class TransactionType(models.TextChoices):
    PAYMENT = 'payment', 'Payment'
    CHARGE = 'charge', 'Charge'
    ADJUSTMENT = 'adjustment', 'Adjustment'


class Transaction(models.Model):
    """
    Ledger entry affecting a friend's balance.

    Positive amounts credit the friend, negative amounts debit them.
    Charges are written by order fulfillment only and never change afterwards.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    friend = models.ForeignKey(
        'friends.Friend',
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )
    type = models.CharField(max_length=20, choices=TransactionType.choices)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    note = models.CharField(max_length=NOTE_MAX_LENGTH, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['friend', 'created_at'], name='tx_friend_created_idx'),
            models.Index(fields=['order'], name='tx_order_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.friend.name}: {self.type} {self.amount}"

    @property
    def is_immutable(self):
        return self.type == TransactionType.CHARGE
