from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdmin

from .serializers import (
    PaymentInputSerializer,
    AdjustmentInputSerializer,
    TransactionUpdateSerializer,
    TransactionSerializer,
    TransactionResultSerializer,
)
from .services import (
    TransactionPatch,
    balance_of,
    record_payment,
    record_adjustment,
    update_entry,
    delete_entry,
)


def _result(entry, friend_id, status_code=status.HTTP_200_OK):
    return Response({
        'transaction': TransactionSerializer(entry).data if entry is not None else None,
        'balance': str(balance_of(friend_id)),
    }, status=status_code)


@extend_schema(
    request=PaymentInputSerializer,
    responses={201: TransactionResultSerializer},
    description="Record money received from a friend.",
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
def create_payment(request):
    serializer = PaymentInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    entry = record_payment(
        friend_id=data['friend_id'],
        amount=data['amount'],
        note=data['note'],
        created_at=data['date'],
    )
    return _result(entry, entry.friend_id, status.HTTP_201_CREATED)


@extend_schema(
    request=AdjustmentInputSerializer,
    responses={201: TransactionResultSerializer},
    description="Record a manual credit or debit with a reason.",
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
def create_adjustment(request):
    serializer = AdjustmentInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    entry = record_adjustment(**serializer.validated_data)
    return _result(entry, entry.friend_id, status.HTTP_201_CREATED)


@extend_schema(
    methods=['PATCH'],
    request=TransactionUpdateSerializer,
    responses={200: TransactionResultSerializer},
    description="Edit a payment or adjustment. Charges cannot be edited.",
    tags=['ledger'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: TransactionResultSerializer},
    description="Delete a payment or adjustment. Charges cannot be deleted.",
    tags=['ledger'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAdmin])
def transaction_detail(request, transaction_id):
    if request.method == 'DELETE':
        friend_id = delete_entry(transaction_id=transaction_id)
        return _result(None, friend_id)

    serializer = TransactionUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    patch = TransactionPatch(
        amount=data.get('amount'),
        note=data.get('note'),
        created_at=data.get('date'),
    )
    entry = update_entry(transaction_id=transaction_id, patch=patch)
    return _result(entry, entry.friend_id)
