from rest_framework import serializers

from apps.cycles.serializers import CyclePublicSerializer

from .models import Order, OrderItem, PickupLocation
from .services.cart import MAX_LINE_QUANTITY


# =============================================================================
# Input Serializers
# =============================================================================

class CartLineSerializer(serializers.Serializer):
    """One cart line. Quantities of 0 or less are dropped."""

    product_id = serializers.UUIDField()
    variant = serializers.CharField(max_length=20)
    quantity = serializers.IntegerField(max_value=MAX_LINE_QUANTITY)


class CartReplaceSerializer(serializers.Serializer):
    """The complete cart; it replaces whatever was saved before."""

    items = CartLineSerializer(many=True, allow_empty=True)


class SubmitOrderSerializer(serializers.Serializer):
    pickup_location_id = serializers.UUIDField(required=False, allow_null=True, default=None)


class SetPaidSerializer(serializers.Serializer):
    paid = serializers.BooleanField()


class PickupLocationCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True, default='')


class PickupLocationUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PickupLocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = PickupLocation
        fields = ['id', 'name', 'address', 'active', 'created_at']
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product_id', 'product_name', 'variant', 'quantity', 'price', 'line_total']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    friend_id = serializers.UUIDField(read_only=True)
    friend_name = serializers.CharField(source='friend.name', read_only=True)
    cycle_id = serializers.UUIDField(read_only=True)
    pickup_location = PickupLocationSerializer(read_only=True, allow_null=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'friend_id',
            'friend_name',
            'cycle_id',
            'status',
            'paid',
            'packed',
            'total',
            'pickup_location',
            'submitted_at',
            'packed_at',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CartSerializer(serializers.Serializer):
    """A friend's cart; ``order`` is null when nothing is ordered."""

    order = OrderSerializer(allow_null=True)


class DistributionSerializer(serializers.Serializer):
    """Packing list of a cycle."""

    cycle = CyclePublicSerializer()
    distribution = OrderSerializer(many=True)
