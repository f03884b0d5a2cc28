from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdmin
from apps.common.urls import UUID_PATTERN
from apps.ledger.serializers import TransactionSerializer, BalanceSerializer
from apps.ledger.services import balance_of, list_entries

from .serializers import (
    FriendSerializer,
    FriendCreateSerializer,
    FriendUpdateSerializer,
    FriendListFilterSerializer,
)
from .services import (
    FriendPatch,
    get_friend,
    list_friends,
    create_friend,
    update_friend,
    delete_friend,
)


class FriendViewSet(viewsets.ViewSet):
    """
    Friend roster (administrator only).

    list: All friends with balances (``?active=true`` for active only)
    create: Add a friend
    retrieve: One friend with balance
    partial_update: Rename or (de)activate
    destroy: Delete a settled friend
    """

    permission_classes = [IsAdmin]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(
        parameters=[OpenApiParameter('active', bool, description='Only active friends')],
        responses={200: FriendSerializer(many=True)},
        tags=['friends'],
    )
    def list(self, request):
        params = FriendListFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        friends = list_friends(active_only=params.validated_data['active'])
        return Response(FriendSerializer(friends, many=True).data)

    @extend_schema(request=FriendCreateSerializer, responses={201: FriendSerializer}, tags=['friends'])
    def create(self, request):
        serializer = FriendCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friend = create_friend(**serializer.validated_data)
        return Response(
            FriendSerializer(get_friend(friend.id)).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: FriendSerializer}, tags=['friends'])
    def retrieve(self, request, pk=None):
        return Response(FriendSerializer(get_friend(pk)).data)

    @extend_schema(request=FriendUpdateSerializer, responses={200: FriendSerializer}, tags=['friends'])
    def partial_update(self, request, pk=None):
        serializer = FriendUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friend = update_friend(friend_id=pk, patch=FriendPatch(**serializer.validated_data))
        return Response(FriendSerializer(friend).data)

    @extend_schema(responses={204: None}, tags=['friends'])
    def destroy(self, request, pk=None):
        delete_friend(friend_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: BalanceSerializer}, tags=['friends'])
    @action(detail=True, methods=['get'])
    def balance(self, request, pk=None):
        """Current balance: sum of all ledger entries."""
        return Response({'friend_id': pk, 'balance': str(balance_of(pk))})

    @extend_schema(responses={200: TransactionSerializer(many=True)}, tags=['friends'])
    @action(detail=True, methods=['get'])
    def transactions(self, request, pk=None):
        """Ledger of one friend, most recent first."""
        entries = list_entries(pk)
        return Response(TransactionSerializer(entries, many=True).data)
