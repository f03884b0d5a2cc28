from rest_framework import serializers
from .models import Friend


class FriendSerializer(serializers.ModelSerializer):
    """Roster entry with the balance computed from the ledger."""

    balance = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Friend
        fields = [
            'id',
            'name',
            'display_name',
            'active',
            'balance',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class FriendPublicSerializer(serializers.ModelSerializer):
    """What a friend sees of the roster when choosing who they are."""

    class Meta:
        model = Friend
        fields = ['id', 'name']
        read_only_fields = fields


class FriendCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)


class FriendUpdateSerializer(serializers.Serializer):
    """All fields optional; omitted fields stay unchanged."""

    name = serializers.CharField(max_length=100, required=False)
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)


class FriendListFilterSerializer(serializers.Serializer):
    active = serializers.BooleanField(required=False, default=False)
