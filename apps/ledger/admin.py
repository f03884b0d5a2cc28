from django.contrib import admin
from django.utils.html import format_html
from .models import Transaction, TransactionType


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Ledger browser.

    Charges are written by order fulfillment only, so the admin never
    edits or deletes them.
    """

    list_display = ['created_at', 'friend', 'type_badge', 'amount', 'note', 'order']
    list_filter = ['type', 'created_at']
    search_fields = ['friend__name', 'note']
    raw_id_fields = ['friend', 'order']
    readonly_fields = ['updated_at']
    date_hierarchy = 'created_at'

    def type_badge(self, obj):
        colors = {
            TransactionType.PAYMENT: '#6B8E5E',
            TransactionType.CHARGE: '#B85C5C',
            TransactionType.ADJUSTMENT: '#A47449',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.type, '#ccc'), obj.get_type_display()
        )
    type_badge.short_description = 'Type'

    def has_change_permission(self, request, obj=None):
        if obj is not None and obj.type == TransactionType.CHARGE:
            return False
        return super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.type == TransactionType.CHARGE:
            return False
        return super().has_delete_permission(request, obj)
