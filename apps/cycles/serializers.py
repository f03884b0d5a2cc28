from decimal import Decimal
from rest_framework import serializers

from apps.friends.serializers import FriendPublicSerializer

from .models import Cycle, CycleStatus


class CycleSerializer(serializers.ModelSerializer):
    """Administrator view of a cycle."""

    has_password = serializers.SerializerMethodField()
    orders_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = Cycle
        fields = [
            'id',
            'name',
            'status',
            'has_password',
            'shared_password',
            'markup_ratio',
            'orders_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_has_password(self, obj) -> bool:
        return bool(obj.shared_password)


class CyclePublicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Cycle
        fields = ['id', 'name', 'status']
        read_only_fields = fields


class CycleCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    shared_password = serializers.CharField(max_length=128, required=False, allow_blank=True, allow_null=True)
    markup_ratio = serializers.DecimalField(
        max_digits=6,
        decimal_places=3,
        required=False,
        default=Decimal('1.000')
    )


class CycleUpdateSerializer(serializers.Serializer):
    """
    All fields optional; omitted fields stay unchanged.

    An empty ``shared_password`` removes the password.
    """

    name = serializers.CharField(max_length=200, required=False)
    status = serializers.ChoiceField(choices=CycleStatus.choices, required=False)
    shared_password = serializers.CharField(max_length=128, required=False, allow_blank=True)
    markup_ratio = serializers.DecimalField(max_digits=6, decimal_places=3, required=False)


class FriendAuthSerializer(serializers.Serializer):
    password = serializers.CharField(style={'input_type': 'password'})
    friend_id = serializers.UUIDField()


class PublicCycleSerializer(serializers.Serializer):
    cycle = CyclePublicSerializer()
    friends = FriendPublicSerializer(many=True)


class FriendAuthResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    friend = FriendPublicSerializer()


class SummaryItemSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    name = serializers.CharField()
    variant = serializers.CharField()
    total_quantity = serializers.IntegerField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)


class CycleSummarySerializer(serializers.Serializer):
    """Totals per product and variant, for the supplier order."""

    cycle = CyclePublicSerializer()
    items = SummaryItemSerializer(many=True)
    total_items = serializers.IntegerField()
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)
