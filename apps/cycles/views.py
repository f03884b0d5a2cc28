from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdmin
from apps.common.urls import UUID_PATTERN
from apps.friends.serializers import FriendPublicSerializer
from apps.orders.models import OrderStatus
from apps.orders.serializers import OrderSerializer, DistributionSerializer
from apps.orders.services import list_cycle_orders

from .serializers import (
    CycleSerializer,
    CycleCreateSerializer,
    CycleUpdateSerializer,
    CycleSummarySerializer,
    FriendAuthSerializer,
    FriendAuthResultSerializer,
    PublicCycleSerializer,
)
from .services import (
    CyclePatch,
    get_cycle,
    list_cycles,
    create_cycle,
    update_cycle,
    delete_cycle,
    get_cycle_summary,
    get_distribution,
    get_public_cycle,
    authenticate_friend,
)


class CycleViewSet(viewsets.ViewSet):
    """
    Order cycles.

    CRUD and reports are for the administrator; ``public`` and ``auth``
    are the friend's entry point and need no login.
    """

    permission_classes = [IsAdmin]
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        if self.action in ['public', 'auth']:
            return [AllowAny()]
        return [IsAdmin()]

    @extend_schema(responses={200: CycleSerializer(many=True)}, tags=['cycles'])
    def list(self, request):
        return Response(CycleSerializer(list_cycles(), many=True).data)

    @extend_schema(request=CycleCreateSerializer, responses={201: CycleSerializer}, tags=['cycles'])
    def create(self, request):
        serializer = CycleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cycle = create_cycle(**serializer.validated_data)
        return Response(CycleSerializer(cycle).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CycleSerializer}, tags=['cycles'])
    def retrieve(self, request, pk=None):
        return Response(CycleSerializer(get_cycle(pk)).data)

    @extend_schema(request=CycleUpdateSerializer, responses={200: CycleSerializer}, tags=['cycles'])
    def partial_update(self, request, pk=None):
        """Rename, change status (open / locked / completed), password or markup."""
        serializer = CycleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cycle = update_cycle(cycle_id=pk, patch=CyclePatch(**serializer.validated_data))
        return Response(CycleSerializer(cycle).data)

    @extend_schema(responses={204: None}, tags=['cycles'])
    def destroy(self, request, pk=None):
        delete_cycle(cycle_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: CycleSummarySerializer}, tags=['cycles'])
    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Quantities per product and variant across submitted orders."""
        return Response(CycleSummarySerializer(get_cycle_summary(pk)).data)

    @extend_schema(responses={200: DistributionSerializer}, tags=['cycles'])
    @action(detail=True, methods=['get'])
    def distribution(self, request, pk=None):
        """Packing list: submitted orders per friend."""
        return Response(DistributionSerializer(get_distribution(pk)).data)

    @extend_schema(
        parameters=[OpenApiParameter('status', str, enum=OrderStatus.values)],
        responses={200: OrderSerializer(many=True)},
        tags=['cycles'],
    )
    @action(detail=True, methods=['get'])
    def orders(self, request, pk=None):
        """All orders of the cycle with fulfillment flags."""
        orders = list_cycle_orders(cycle_id=pk, status=request.query_params.get('status'))
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(responses={200: PublicCycleSerializer}, tags=['cycles'])
    @action(detail=True, methods=['get'])
    def public(self, request, pk=None):
        """Cycle name, status and active friends for the login screen."""
        return Response(PublicCycleSerializer(get_public_cycle(pk)).data)

    @extend_schema(request=FriendAuthSerializer, responses={200: FriendAuthResultSerializer}, tags=['cycles'])
    @action(detail=True, methods=['post'])
    def auth(self, request, pk=None):
        """Check the cycle password and the chosen friend."""
        serializer = FriendAuthSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friend = authenticate_friend(cycle_id=pk, **serializer.validated_data)
        return Response({'success': True, 'friend': FriendPublicSerializer(friend).data})
