from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import HasCycleAccess, IsAdmin
from apps.common.urls import UUID_PATTERN

from .serializers import (
    CartReplaceSerializer,
    CartSerializer,
    SubmitOrderSerializer,
    SetPaidSerializer,
    OrderSerializer,
    PickupLocationSerializer,
    PickupLocationCreateSerializer,
    PickupLocationUpdateSerializer,
)
from .services import (
    get_cart,
    replace_cart,
    submit,
    set_paid,
    toggle_packed,
    list_pickup_locations,
    create_pickup_location,
    update_pickup_location,
    delete_pickup_location,
)


# =============================================================================
# Cart (friend, cycle password)
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: CartSerializer},
    description="The friend's order in this cycle, or null.",
    tags=['orders'],
)
@extend_schema(
    methods=['PUT'],
    request=CartReplaceSerializer,
    responses={200: CartSerializer},
    description="Replace the whole cart. An empty cart removes the order.",
    tags=['orders'],
)
@api_view(['GET', 'PUT'])
@permission_classes([HasCycleAccess])
def cart(request, cycle_id, friend_id):
    if request.method == 'GET':
        order = get_cart(friend_id=friend_id, cycle_id=cycle_id)
        return Response(CartSerializer({'order': order}).data)

    serializer = CartReplaceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = replace_cart(
        friend_id=friend_id,
        cycle_id=cycle_id,
        items=serializer.validated_data['items'],
    )
    return Response(CartSerializer({'order': order}).data)


@extend_schema(
    request=SubmitOrderSerializer,
    responses={200: OrderSerializer},
    description="Submit the friend's order, optionally choosing a pickup location.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([HasCycleAccess])
def submit_order(request, cycle_id, friend_id):
    serializer = SubmitOrderSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = submit(
        friend_id=friend_id,
        cycle_id=cycle_id,
        pickup_location_id=serializer.validated_data['pickup_location_id'],
    )
    return Response(OrderSerializer(order).data)


# =============================================================================
# Fulfillment (administrator)
# =============================================================================

@extend_schema(
    request=SetPaidSerializer,
    responses={200: OrderSerializer},
    description="Mark a submitted order paid or unpaid; records the payment.",
    tags=['orders'],
)
@api_view(['PATCH'])
@permission_classes([IsAdmin])
def order_paid(request, order_id):
    serializer = SetPaidSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    order = set_paid(order_id=order_id, paid=serializer.validated_data['paid'])
    return Response(OrderSerializer(order).data)


@extend_schema(
    request=None,
    responses={200: OrderSerializer},
    description="Toggle packed on a submitted order; charges or refunds the total.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
def order_packed(request, order_id):
    order = toggle_packed(order_id=order_id)
    return Response(OrderSerializer(order).data)


# =============================================================================
# Pickup locations
# =============================================================================

class PickupLocationViewSet(viewsets.ViewSet):
    """
    list: Active locations (public, for the order form)
    all: Every location including inactive (administrator)
    create / partial_update: Administrator
    destroy: Deletes, or deactivates when orders reference it (administrator)
    """

    permission_classes = [IsAdmin]
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        if self.action == 'list':
            return [AllowAny()]
        return [IsAdmin()]

    @extend_schema(responses={200: PickupLocationSerializer(many=True)}, tags=['pickup-locations'])
    def list(self, request):
        return Response(PickupLocationSerializer(list_pickup_locations(), many=True).data)

    @extend_schema(responses={200: PickupLocationSerializer(many=True)}, tags=['pickup-locations'])
    @action(detail=False, methods=['get'], url_path='all')
    def all_locations(self, request):
        locations = list_pickup_locations(include_inactive=True)
        return Response(PickupLocationSerializer(locations, many=True).data)

    @extend_schema(request=PickupLocationCreateSerializer, responses={201: PickupLocationSerializer}, tags=['pickup-locations'])
    def create(self, request):
        serializer = PickupLocationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        location = create_pickup_location(**serializer.validated_data)
        return Response(PickupLocationSerializer(location).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PickupLocationUpdateSerializer, responses={200: PickupLocationSerializer}, tags=['pickup-locations'])
    def partial_update(self, request, pk=None):
        serializer = PickupLocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        location = update_pickup_location(location_id=pk, **serializer.validated_data)
        return Response(PickupLocationSerializer(location).data)

    @extend_schema(responses={204: None}, tags=['pickup-locations'])
    def destroy(self, request, pk=None):
        delete_pickup_location(location_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
