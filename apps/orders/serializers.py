from decimal import Decimal
from rest_framework import serializers
from .constants import ServicePackage, OrderStatus, OrderType
from .models import Order, OrderStatusHistory
from apps.accounts.models import User
from apps.accounts.serializers import UserMinimalSerializer


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    """Serializer for status history entries."""

    class Meta:
        model = OrderStatusHistory
        fields = ['id', 'status', 'note', 'created_at']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Main order serializer for staff and customer views."""

    customer = UserMinimalSerializer(read_only=True)
    assigned_employees = UserMinimalSerializer(many=True, read_only=True)
    status_history = OrderStatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'customer',
            'customer_name',
            'contact_number',
            'service_package',
            'weight',
            'loads',
            'load_pieces',
            'distance',
            'delivery_option',
            'status',
            'order_type',
            'total',
            'is_paid',
            'balance',
            'assigned_employees',
            'canceled_by',
            'canceled_at',
            'cancel_reason',
            'status_history',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    """Public order tracking; no contact or payment details."""

    status_history = OrderStatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'customer_name',
            'service_package',
            'loads',
            'status',
            'status_history',
            'created_at',
        ]
        read_only_fields = fields


class OrderCreateSerializer(serializers.Serializer):
    """Staff order entry (walk-in, phone, internal)."""

    customer_name = serializers.CharField(max_length=200)
    contact_number = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    service_package = serializers.ChoiceField(choices=ServicePackage.choices)
    weight = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=Decimal('0'))
    distance = serializers.DecimalField(
        max_digits=7, decimal_places=2, min_value=Decimal('0'), required=False, default=Decimal('0')
    )
    delivery_option = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False, default=OrderStatus.ORDER_PLACED)
    is_paid = serializers.BooleanField(required=False, default=False)
    order_type = serializers.ChoiceField(choices=OrderType.choices, required=False, default=OrderType.CUSTOMER)
    total = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True, default=None
    )
    load_pieces = serializers.ListField(child=serializers.IntegerField(min_value=0), required=False, allow_null=True)
    assigned_employee_ids = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.employees(),
        many=True,
        required=False,
    )
    created_at = serializers.DateTimeField(required=False, allow_null=True)


class CustomerOrderCreateSerializer(serializers.Serializer):
    """Order submission by a signed-in customer."""

    customer_name = serializers.CharField(max_length=200)
    contact_number = serializers.CharField(max_length=20)
    service_package = serializers.ChoiceField(choices=ServicePackage.choices)
    weight = serializers.DecimalField(
        max_digits=7, decimal_places=2, min_value=Decimal('0'), required=False, allow_null=True
    )
    distance = serializers.DecimalField(
        max_digits=7, decimal_places=2, min_value=Decimal('0'), required=False, default=Decimal('0')
    )
    delivery_option = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')


class OrderUpdateSerializer(serializers.Serializer):
    """Partial staff edit of an order."""

    customer_name = serializers.CharField(max_length=200, required=False)
    contact_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    service_package = serializers.ChoiceField(choices=ServicePackage.choices, required=False)
    weight = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=Decimal('0'), required=False)
    distance = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=Decimal('0'), required=False)
    delivery_option = serializers.CharField(max_length=50, required=False, allow_blank=True)
    load_pieces = serializers.ListField(child=serializers.IntegerField(min_value=0), required=False, allow_null=True)
    is_paid = serializers.BooleanField(required=False)
    total = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'), required=False)
    order_type = serializers.ChoiceField(choices=OrderType.choices, required=False)
    assigned_employee_ids = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.employees(),
        many=True,
        required=False,
    )


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)
    note = serializers.CharField(max_length=500, required=False, allow_blank=True)


class PaymentRequestSerializer(serializers.Serializer):
    amount_paid = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))


class PaymentResultSerializer(serializers.Serializer):
    order = OrderSerializer()
    amount_due = serializers.DecimalField(max_digits=10, decimal_places=2)
    amount_paid = serializers.DecimalField(max_digits=10, decimal_places=2)
    balance = serializers.DecimalField(max_digits=10, decimal_places=2)
    change = serializers.DecimalField(max_digits=10, decimal_places=2)


class QuoteRequestSerializer(serializers.Serializer):
    service_package = serializers.ChoiceField(choices=ServicePackage.choices)
    weight = serializers.DecimalField(
        max_digits=7, decimal_places=2, required=False, allow_null=True,
        help_text="Weight in kg; omit for a guidance quote"
    )
    distance = serializers.DecimalField(
        max_digits=7, decimal_places=2, required=False, default=Decimal('0'),
        help_text="One-way distance in km"
    )


class QuoteResponseSerializer(serializers.Serializer):
    computed_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    loads = serializers.IntegerField()
    base_cost = serializers.DecimalField(max_digits=10, decimal_places=2)
    transport_fee = serializers.DecimalField(max_digits=10, decimal_places=2)
    billable_distance = serializers.DecimalField(max_digits=7, decimal_places=2)
    suggested_services = serializers.ListField(child=serializers.CharField())


class OrderStatisticsSerializer(serializers.Serializer):
    """Serializer for order dashboard statistics."""

    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    paid_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    completed_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    canceled_orders = serializers.IntegerField()
    paid_orders = serializers.IntegerField()
    unpaid_orders = serializers.IntegerField()
    today_orders = serializers.IntegerField()
    today_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    yesterday_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    week_orders = serializers.IntegerField()
    week_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_loads = serializers.IntegerField()
    today_loads = serializers.IntegerField()


class CustomerTransactionSerializer(serializers.Serializer):
    order_id = serializers.CharField()
    date = serializers.DateTimeField()
    loads = serializers.IntegerField()
    weight = serializers.DecimalField(max_digits=7, decimal_places=2)
    amount_paid = serializers.DecimalField(max_digits=10, decimal_places=2)


class CustomerDirectoryEntrySerializer(serializers.Serializer):
    name = serializers.CharField()
    contact_number = serializers.CharField()
    visits = serializers.IntegerField()
    total_loads = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_amount_paid = serializers.DecimalField(max_digits=12, decimal_places=2)
    transactions = CustomerTransactionSerializer(many=True)


class CustomerDirectoryQuerySerializer(serializers.Serializer):
    sort = serializers.ChoiceField(choices=['name', 'visits', 'loads', 'amount'], default='name')
    search = serializers.CharField(required=False, allow_blank=True)
