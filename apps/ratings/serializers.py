from rest_framework import serializers
from .models import Rating


class RatingSerializer(serializers.ModelSerializer):
    """Public rating; the customer appears by display name only."""

    customer_name = serializers.SerializerMethodField()
    service_package = serializers.CharField(source='order.service_package', read_only=True)

    class Meta:
        model = Rating
        fields = [
            'id',
            'order',
            'customer_name',
            'service_package',
            'overall_rating',
            'feedback_message',
            'created_at',
        ]
        read_only_fields = fields

    def get_customer_name(self, obj):
        return obj.customer.get_display_name()


class RatingCreateSerializer(serializers.Serializer):
    """Serializer for rating an order."""

    order_id = serializers.CharField(max_length=32)
    overall_rating = serializers.IntegerField(min_value=1, max_value=5)
    feedback_message = serializers.CharField(required=False, allow_blank=True, default='')


class RatingStatisticsSerializer(serializers.Serializer):
    total_ratings = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
    five_star_percentage = serializers.FloatField()
    this_month = serializers.IntegerField()
