from decimal import Decimal
from rest_framework import serializers
from .models import Promo, ServiceRate


class PromoSerializer(serializers.ModelSerializer):
    """Promo serializer for admin management and the public banner."""

    is_running = serializers.SerializerMethodField()

    class Meta:
        model = Promo
        fields = [
            'id',
            'start_date',
            'end_date',
            'price_per_load',
            'display_date',
            'is_active',
            'is_running',
            'created_by',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'is_running', 'created_by', 'created_at', 'updated_at']

    def get_is_running(self, obj):
        return obj.is_running()

    def validate(self, attrs):
        """Validate the promo period."""
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end <= start:
            raise serializers.ValidationError({'end_date': 'End date must be after start date'})
        return attrs


class ServiceRateSerializer(serializers.ModelSerializer):

    class Meta:
        model = ServiceRate
        fields = ['id', 'name', 'price', 'type', 'is_active']
        read_only_fields = ['id']


class ServiceRatePriceSerializer(serializers.Serializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))
