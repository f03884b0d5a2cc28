from django.contrib import admin
from django.db.models import Sum
from .models import Friend


@admin.register(Friend)
class FriendAdmin(admin.ModelAdmin):
    list_display = ['name', 'display_name', 'active', 'balance', 'created_at']
    list_filter = ['active']
    search_fields = ['name', 'display_name']
    readonly_fields = ['created_at', 'updated_at']

    def balance(self, obj):
        """Sum of the friend's ledger entries."""
        return obj.transactions.aggregate(total=Sum('amount'))['total'] or 0
    balance.short_description = 'Balance'
