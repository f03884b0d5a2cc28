from django.db import models
import uuid


class Friend(models.Model):
    """
    A participant who orders in cycles.

    Balance is never stored; it is the sum of the friend's ledger entries
    (see apps.ledger.services.balance_of).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    display_name = models.CharField(max_length=100, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'friends'
        indexes = [
            models.Index(fields=['active', 'name'], name='friends_active_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name
