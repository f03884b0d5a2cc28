from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Product(models.Model):
    """Catalog entry scoped to a cycle."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cycle = models.ForeignKey(
        'cycles.Cycle',
        on_delete=models.CASCADE,
        related_name='products'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    flavor_profile = models.TextField(blank=True)
    roast_type = models.CharField(max_length=100, blank=True)
    purpose = models.CharField(max_length=100, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['cycle', 'active'], name='products_cycle_active_idx'),
        ]
        ordering = ['purpose', 'name']

    def __str__(self):
        return self.name

    def price_table(self):
        """Return {label: base price} for this product's variants."""
        return {v.label: v.price for v in self.variants.all()}


class ProductVariant(models.Model):
    """One row of a product's price table, e.g. 250g -> 8.90."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='variants'
    )
    label = models.CharField(max_length=20)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )

    class Meta:
        db_table = 'product_variants'
        constraints = [
            models.UniqueConstraint(fields=['product', 'label'], name='unique_product_variant_label'),
        ]
        ordering = ['price']

    def __str__(self):
        return f"{self.product.name} {self.label}: {self.price}"
