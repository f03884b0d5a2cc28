from rest_framework import serializers

from .models import Product
from .services import price_for


class ProductSerializer(serializers.ModelSerializer):
    """
    Catalog product.

    ``prices`` are the base variant prices; ``unit_prices`` include the
    cycle markup and are what friends are charged.
    """

    cycle_id = serializers.UUIDField(read_only=True)
    prices = serializers.SerializerMethodField()
    unit_prices = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id',
            'cycle_id',
            'name',
            'description',
            'flavor_profile',
            'roast_type',
            'purpose',
            'active',
            'prices',
            'unit_prices',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_prices(self, obj) -> dict:
        return {label: str(price) for label, price in obj.price_table().items()}

    def get_unit_prices(self, obj) -> dict:
        result = {}
        for label in obj.price_table():
            price = price_for(obj, label, obj.cycle)
            if price is not None:
                result[label] = str(price)
        return result


class PriceTableField(serializers.DictField):
    """{variant label: price} mapping."""

    child = serializers.DecimalField(max_digits=10, decimal_places=2)


class ProductCreateSerializer(serializers.Serializer):
    cycle_id = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    prices = PriceTableField(required=False, default=dict)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    flavor_profile = serializers.CharField(required=False, allow_blank=True, default='')
    roast_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    purpose = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


class ProductUpdateSerializer(serializers.Serializer):
    """All fields optional; ``prices`` replaces the whole price table."""

    name = serializers.CharField(max_length=200, required=False)
    prices = PriceTableField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    flavor_profile = serializers.CharField(required=False, allow_blank=True)
    roast_type = serializers.CharField(max_length=100, required=False, allow_blank=True)
    purpose = serializers.CharField(max_length=100, required=False, allow_blank=True)
    active = serializers.BooleanField(required=False)


class ProductFilterSerializer(serializers.Serializer):
    """
    Query parameters for listing products.

    Query Parameters:
        cycle (UUID): Cycle whose catalog to list
        include_inactive (bool): Also list deactivated products (admin)
    """

    cycle = serializers.UUIDField()
    include_inactive = serializers.BooleanField(required=False, default=False)


class ImportInputSerializer(serializers.Serializer):
    """Either an uploaded CSV ``file`` or its text as ``content``."""

    file = serializers.FileField(required=False)
    content = serializers.CharField(required=False, trim_whitespace=False)

    def validate(self, attrs):
        if not attrs.get('file') and not attrs.get('content'):
            raise serializers.ValidationError({'file': 'Upload a file or send its content'})
        return attrs

    def get_content(self):
        upload = self.validated_data.get('file')
        if upload is not None:
            return upload.read()
        return self.validated_data['content']


class ImportResultSerializer(serializers.Serializer):
    inserted = ProductSerializer(many=True)
    warnings = serializers.ListField(child=serializers.CharField())
