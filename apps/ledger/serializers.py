from rest_framework import serializers
from .models import NOTE_MAX_LENGTH, Transaction

NOTE_HELP = f"Truncated to {NOTE_MAX_LENGTH} characters."


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentInputSerializer(serializers.Serializer):
    """
    Money received from a friend.

    Fields:
        friend_id (UUID): Paying friend
        amount (decimal): Positive amount
        note (str): Optional, truncated to 160 characters
        date (datetime): Optional backdate, defaults to now
    """

    friend_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    note = serializers.CharField(required=False, allow_blank=True, default='', help_text=NOTE_HELP)
    date = serializers.DateTimeField(required=False, allow_null=True, default=None)


class AdjustmentInputSerializer(serializers.Serializer):
    """
    Manual credit or debit with a mandatory reason.

    Fields:
        friend_id (UUID): Affected friend
        amount (decimal): Non-zero; negative debits the friend
        note (str): Reason
        order_id (UUID): Optional order of the same friend
    """

    friend_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    note = serializers.CharField(allow_blank=True)
    order_id = serializers.UUIDField(required=False, allow_null=True, default=None)


class TransactionUpdateSerializer(serializers.Serializer):
    """All fields optional; omitted fields stay unchanged."""

    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateTimeField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class TransactionSerializer(serializers.ModelSerializer):
    friend_id = serializers.UUIDField(read_only=True)
    order_id = serializers.UUIDField(read_only=True, allow_null=True)
    cycle_name = serializers.SerializerMethodField()

    class Meta:
        model = Transaction
        fields = [
            'id',
            'friend_id',
            'order_id',
            'cycle_name',
            'type',
            'amount',
            'note',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_cycle_name(self, obj):
        if obj.order_id is None:
            return None
        return obj.order.cycle.name


class BalanceSerializer(serializers.Serializer):
    friend_id = serializers.UUIDField()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class TransactionResultSerializer(serializers.Serializer):
    """Every ledger mutation answers with the entry and the new balance."""

    transaction = TransactionSerializer(allow_null=True)
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)

