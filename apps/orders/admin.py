from django.contrib import admin
from django.utils.html import format_html
from .models import Order, OrderItem, OrderStatus, PickupLocation


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['product', 'variant', 'quantity', 'price']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Items are written by the cart service only."""
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Order overview.

    Paid and packed are read-only here: toggling them must go through
    the fulfillment API so the ledger stays in step.
    """

    list_display = ['friend', 'cycle', 'status_badge', 'total', 'paid', 'packed', 'submitted_at']
    list_filter = ['status', 'paid', 'packed', 'cycle']
    search_fields = ['friend__name', 'cycle__name']
    readonly_fields = [
        'friend', 'cycle', 'status', 'paid', 'packed', 'total',
        'submitted_at', 'packed_at', 'created_at', 'updated_at',
    ]
    inlines = [OrderItemInline]

    def status_badge(self, obj):
        bg = '#6B8E5E' if obj.status == OrderStatus.SUBMITTED else '#E5C49A'
        return format_html(
            '<span style="background: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'


@admin.register(PickupLocation)
class PickupLocationAdmin(admin.ModelAdmin):
    list_display = ['name', 'address', 'active']
    list_filter = ['active']
