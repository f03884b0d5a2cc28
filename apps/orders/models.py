from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class OrderStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    SUBMITTED = 'submitted', 'Submitted'


class PickupLocation(models.Model):
    """Place where a friend collects a packed order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=300, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'pickup_locations'
        ordering = ['name']

    def __str__(self):
        return self.name


class Order(models.Model):
    """
    A friend's order within one cycle.

    At most one per (friend, cycle). ``total`` is cached from the items at
    the time the cart was last replaced.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    friend = models.ForeignKey(
        'friends.Friend',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    cycle = models.ForeignKey(
        'cycles.Cycle',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.DRAFT
    )
    paid = models.BooleanField(default=False)
    packed = models.BooleanField(default=False)
    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )
    pickup_location = models.ForeignKey(
        PickupLocation,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    submitted_at = models.DateTimeField(null=True, blank=True)
    packed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        constraints = [
            models.UniqueConstraint(fields=['friend', 'cycle'], name='unique_order_per_friend_cycle'),
        ]
        indexes = [
            models.Index(fields=['cycle', 'status'], name='orders_cycle_status_idx'),
        ]
        ordering = ['-submitted_at', '-created_at']

    def __str__(self):
        return f"{self.friend.name} / {self.cycle.name}: {self.total} ({self.status})"

    @property
    def is_submitted(self):
        return self.status == OrderStatus.SUBMITTED


class OrderItem(models.Model):
    """Line item; ``price`` is the unit price snapshotted when the cart was saved."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.RESTRICT,
        related_name='order_items'
    )
    variant = models.CharField(max_length=20)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        ordering = ['product__name', 'variant']

    def __str__(self):
        return f"{self.quantity}x {self.product.name} {self.variant} @ {self.price}"

    @property
    def line_total(self):
        return self.price * self.quantity
