"""
Product management service.

A product's price table is a set of ProductVariant rows; replacing the
prices replaces the whole table.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.catalog.models import Product, ProductVariant
from apps.common.money import ZERO, quantize_money
from apps.cycles.services.lifecycle import get_cycle

from .exceptions import InvalidProductDataError, ProductNotFoundError

logger = logging.getLogger(__name__)

LABEL_MAX_LENGTH = 20


@dataclass(frozen=True)
class ProductPatch:
    """
    Partial update of a product. ``None`` leaves a field unchanged.

    ``prices`` replaces the entire variant table when given.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    flavor_profile: Optional[str] = None
    roast_type: Optional[str] = None
    purpose: Optional[str] = None
    active: Optional[bool] = None
    prices: Optional[Dict[str, object]] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.__dict__.values())


def clean_prices(prices) -> dict:
    """
    Validate a {label: price} mapping.

    Labels are trimmed; prices rounded to cents and must be positive.

    Raises:
        InvalidProductDataError: For a blank or long label, or a bad price
    """
    cleaned = {}
    for label, price in (prices or {}).items():
        label = str(label).strip()
        if not label or len(label) > LABEL_MAX_LENGTH:
            raise InvalidProductDataError(f"Invalid variant label: {label!r}")
        try:
            amount = quantize_money(price)
        except ValueError:
            raise InvalidProductDataError(f"Invalid price for {label}: {price!r}")
        if amount <= ZERO:
            raise InvalidProductDataError(f"Price for {label} must be positive")
        cleaned[label] = amount
    return cleaned


def _replace_variants(product: Product, prices: dict) -> None:
    product.variants.all().delete()
    ProductVariant.objects.bulk_create([
        ProductVariant(product=product, label=label, price=price)
        for label, price in prices.items()
    ])


def get_product(product_id: UUID) -> Product:
    """
    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        return Product.objects.prefetch_related('variants').get(id=product_id)
    except (Product.DoesNotExist, ValidationError):
        raise ProductNotFoundError(f"Product with ID {product_id} not found")


def list_products(*, cycle_id: UUID, include_inactive: bool = False) -> QuerySet:
    """
    Products of a cycle ordered by purpose then name.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id)
    queryset = Product.objects.filter(cycle=cycle)
    if not include_inactive:
        queryset = queryset.filter(active=True)
    return queryset.prefetch_related('variants').order_by('purpose', 'name')


@transaction.atomic
def create_product(
    *,
    cycle_id: UUID,
    name: str,
    prices: Optional[dict] = None,
    description: str = '',
    flavor_profile: str = '',
    roast_type: str = '',
    purpose: str = ''
) -> Product:
    """
    Add a product to a cycle's catalog.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
        InvalidProductDataError: If name is blank or prices are invalid
    """
    cycle = get_cycle(cycle_id)

    name = (name or '').strip()
    if not name:
        raise InvalidProductDataError("Name is required")
    cleaned = clean_prices(prices)

    product = Product.objects.create(
        cycle=cycle,
        name=name,
        description=description or '',
        flavor_profile=flavor_profile or '',
        roast_type=roast_type or '',
        purpose=purpose or '',
    )
    _replace_variants(product, cleaned)
    logger.info("Product %s created in cycle %s with %d variants", product.id, cycle.id, len(cleaned))
    return get_product(product.id)


@transaction.atomic
def update_product(*, product_id: UUID, patch: ProductPatch) -> Product:
    """
    Apply a partial update to a product.

    Order items keep the unit price they were saved with.

    Raises:
        ProductNotFoundError: If product doesn't exist
        InvalidProductDataError: If the patch is empty or invalid
    """
    if patch.is_empty():
        raise InvalidProductDataError("Nothing to update")

    try:
        product = Product.objects.select_for_update().get(id=product_id)
    except (Product.DoesNotExist, ValidationError):
        raise ProductNotFoundError(f"Product with ID {product_id} not found")

    update_fields = ['updated_at']
    if patch.name is not None:
        if not patch.name.strip():
            raise InvalidProductDataError("Name cannot be blank")
        product.name = patch.name.strip()
        update_fields.append('name')
    for field in ('description', 'flavor_profile', 'roast_type', 'purpose', 'active'):
        value = getattr(patch, field)
        if value is not None:
            setattr(product, field, value)
            update_fields.append(field)

    product.save(update_fields=update_fields)

    if patch.prices is not None:
        _replace_variants(product, clean_prices(patch.prices))

    logger.info("Product %s updated", product.id)
    return get_product(product.id)


@transaction.atomic
def deactivate_product(*, product_id: UUID) -> None:
    """
    Hide a product from the catalog. Existing order items are kept.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    updated = Product.objects.filter(id=product_id).update(active=False, updated_at=timezone.now())
    if not updated:
        raise ProductNotFoundError(f"Product with ID {product_id} not found")
    logger.info("Product %s deactivated", product_id)
