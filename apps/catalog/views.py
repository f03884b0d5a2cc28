from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.auth_gate import is_authorized_admin
from apps.accounts.permissions import HasCycleAccess, IsAdmin
from apps.common.urls import UUID_PATTERN

from .serializers import (
    ProductSerializer,
    ProductCreateSerializer,
    ProductUpdateSerializer,
    ProductFilterSerializer,
    ImportInputSerializer,
    ImportResultSerializer,
)
from .services import (
    ProductPatch,
    get_product,
    list_products,
    create_product,
    update_product,
    deactivate_product,
    import_products_csv,
    import_products_multirow,
)


class ProductViewSet(viewsets.ViewSet):
    """
    Products of a cycle's catalog.

    list: Products of ``?cycle=<id>`` (administrator or cycle password)
    create / partial_update: Administrator
    destroy: Deactivates the product (administrator)
    """

    permission_classes = [IsAdmin]
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        if self.action == 'list':
            return [HasCycleAccess()]
        return [IsAdmin()]

    @extend_schema(parameters=[ProductFilterSerializer], responses={200: ProductSerializer(many=True)}, tags=['catalog'])
    def list(self, request):
        params = ProductFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        include_inactive = (
            params.validated_data['include_inactive']
            and is_authorized_admin(request.user)
        )
        products = list_products(
            cycle_id=params.validated_data['cycle'],
            include_inactive=include_inactive,
        ).select_related('cycle')
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(request=ProductCreateSerializer, responses={201: ProductSerializer}, tags=['catalog'])
    def create(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(**serializer.validated_data)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ProductSerializer}, tags=['catalog'])
    def retrieve(self, request, pk=None):
        return Response(ProductSerializer(get_product(pk)).data)

    @extend_schema(request=ProductUpdateSerializer, responses={200: ProductSerializer}, tags=['catalog'])
    def partial_update(self, request, pk=None):
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = update_product(product_id=pk, patch=ProductPatch(**serializer.validated_data))
        return Response(ProductSerializer(product).data)

    @extend_schema(responses={204: None}, tags=['catalog'])
    def destroy(self, request, pk=None):
        deactivate_product(product_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=ImportInputSerializer,
    responses={201: ImportResultSerializer},
    description="Import a one-row-per-product CSV into a cycle.",
    tags=['catalog'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def import_csv(request, cycle_id):
    serializer = ImportInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = import_products_csv(cycle_id=cycle_id, content=serializer.get_content())
    return Response(ImportResultSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ImportInputSerializer,
    responses={201: ImportResultSerializer},
    description="Import the supplier's sheet (three rows per product) into a cycle.",
    tags=['catalog'],
)
@api_view(['POST'])
@permission_classes([IsAdmin])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def import_multirow(request, cycle_id):
    serializer = ImportInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = import_products_multirow(cycle_id=cycle_id, content=serializer.get_content())
    return Response(ImportResultSerializer(result).data, status=status.HTTP_201_CREATED)
