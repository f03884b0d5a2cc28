"""Read-only cycle reports for the administrator."""

from uuid import UUID

from django.db.models import DecimalField, ExpressionWrapper, F, Prefetch, Sum

from apps.common.money import ZERO, quantize_money
from apps.orders.models import Order, OrderItem, OrderStatus

from .lifecycle import get_cycle


def get_cycle_summary(cycle_id: UUID) -> dict:
    """
    Quantities per (product, variant) across submitted orders.

    This is the list sent to the supplier.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id)

    line_total = ExpressionWrapper(
        F('quantity') * F('price'),
        output_field=DecimalField(max_digits=12, decimal_places=2),
    )
    rows = (
        OrderItem.objects
        .filter(order__cycle=cycle, order__status=OrderStatus.SUBMITTED)
        .values('product_id', 'product__name', 'variant')
        .annotate(total_quantity=Sum('quantity'), total_price=Sum(line_total))
        .order_by('product__name', 'variant')
    )

    items = [
        {
            'product_id': row['product_id'],
            'name': row['product__name'],
            'variant': row['variant'],
            'total_quantity': row['total_quantity'],
            'total_price': quantize_money(row['total_price']),
        }
        for row in rows
    ]

    return {
        'cycle': cycle,
        'items': items,
        'total_items': sum(item['total_quantity'] for item in items),
        'total_price': quantize_money(sum((item['total_price'] for item in items), ZERO)),
    }


def get_distribution(cycle_id: UUID) -> dict:
    """
    Submitted orders of a cycle, one per friend, with their items.

    Used as the packing list.

    Raises:
        CycleNotFoundError: If cycle doesn't exist
    """
    cycle = get_cycle(cycle_id)

    orders = (
        Order.objects
        .filter(cycle=cycle, status=OrderStatus.SUBMITTED)
        .select_related('friend', 'pickup_location')
        .prefetch_related(
            Prefetch('items', queryset=OrderItem.objects.select_related('product').order_by('product__name'))
        )
        .order_by('friend__name')
    )

    return {'cycle': cycle, 'distribution': list(orders)}
