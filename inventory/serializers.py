from rest_framework import serializers
from .models import Product, StockIntake


class ProductSerializer(serializers.ModelSerializer):
    """Full serializer for product details"""

    is_low_stock = serializers.BooleanField(read_only=True)
    intake_count = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'sku',
            'code',
            'price',
            'quantity',
            'stock_quantity',
            'stock_weight',
            'location',
            'weight',
            'min_stock_level',
            'is_low_stock',
            'intake_count',
            'created_at',
            'updated_at',
        ]
        # Stock counters only move through stock intakes
        read_only_fields = [
            'id',
            'stock_quantity',
            'stock_weight',
            'created_at',
            'updated_at',
        ]
        extra_kwargs = {
            'sku': {'required': False, 'allow_null': True, 'allow_blank': True},
        }

    def get_intake_count(self, obj):
        """Count stock intakes for this product"""
        return obj.intakes.count()

    def validate_sku(self, value):
        return (value or '').strip() or None

    def validate_weight(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Unit weight cannot be negative')
        return value


class LowStockProductSerializer(serializers.ModelSerializer):
    """Lightweight serializer for low stock listings"""

    shortfall = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'sku',
            'code',
            'quantity',
            'min_stock_level',
            'shortfall',
            'location',
        ]
        read_only_fields = fields

    def get_shortfall(self, obj):
        return float(obj.min_stock_level - obj.quantity)


class StockIntakeSerializer(serializers.ModelSerializer):
    """
    Read serializer for stock intakes.
    `weight` mirrors `total_weight` for clients that post `weight`.
    """

    product = ProductSerializer(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    weight = serializers.DecimalField(
        source='total_weight',
        max_digits=14,
        decimal_places=3,
        read_only=True,
    )

    class Meta:
        model = StockIntake
        fields = [
            'id',
            'product',
            'product_id',
            'quantity',
            'weight',
            'total_weight',
            'single_weight',
            'received_by',
            'received_at',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
