from django.contrib import admin
from .models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['label', 'price']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'cycle', 'purpose', 'roast_type', 'active']
    list_filter = ['active', 'cycle', 'purpose']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductVariantInline]

    def has_delete_permission(self, request, obj=None):
        # Ordered products stay; deactivate them instead.
        if obj is not None and obj.order_items.exists():
            return False
        return super().has_delete_permission(request, obj)
