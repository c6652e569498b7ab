import logging

from rest_framework import status, mixins, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.db.models import Q
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdmin, IsStaffMember
from .models import Order
from .serializers import (
    OrderSerializer,
    OrderTrackingSerializer,
    OrderCreateSerializer,
    CustomerOrderCreateSerializer,
    OrderUpdateSerializer,
    OrderStatusUpdateSerializer,
    PaymentRequestSerializer,
    PaymentResultSerializer,
    QuoteRequestSerializer,
    QuoteResponseSerializer,
    OrderStatisticsSerializer,
    CustomerDirectoryEntrySerializer,
    CustomerDirectoryQuerySerializer,
)
from .services import (
    quote_price,
    create_order,
    create_customer_order,
    update_order_status,
    update_order_fields,
    record_payment,
    cancel_order_by_customer,
    get_customer_orders,
    find_order_for_customer,
    calculate_order_statistics,
    get_customer_directory,
    OrderNotFoundError,
    OrderIdentifierConflictError,
    DailyOrderLimitError,
    OrderNotCancelableError,
    InvalidStatusTransitionError,
    InvalidPaymentError,
)

logger = logging.getLogger(__name__)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


def _error(message, status_code):
    return Response({'error': str(message)}, status=status_code)


class OrderPagination(PageNumberPagination):
    """Custom pagination for the order dashboard."""
    page_size = 25
    page_size_query_param = 'page_size'
    max_page_size = 200


class OrderViewSet(mixins.ListModelMixin,
                   mixins.RetrieveModelMixin,
                   viewsets.GenericViewSet):
    """
    ViewSet for staff order management.

    list: Get all orders (with filters)
    create: Enter an order at the counter (permanent ID)
    retrieve: Get a specific order
    partial_update: Edit order details (re-prices on weight/package/distance)
    status: Move an order to a new status
    pay: Record a full or partial payment
    statistics: Dashboard totals for the filtered orders
    """

    queryset = Order.objects.select_related('customer').prefetch_related(
        'assigned_employees',
        'status_history',
    )
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]
    pagination_class = OrderPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_queryset(self):
        """
        Filter orders based on query parameters.

        Filters:
        - status: Exact status
        - is_paid: true/false
        - order_type: customer/internal
        - employee: UUID of an assigned employee
        - date_from / date_to: Creation date range (inclusive)
        - search: Order ID, customer name or contact number
        """
        queryset = super().get_queryset()
        params = self.request.query_params

        order_status = params.get('status')
        if order_status:
            queryset = queryset.filter(status=order_status)

        is_paid = params.get('is_paid')
        if is_paid is not None and is_paid != '':
            queryset = queryset.filter(is_paid=is_paid.lower() == 'true')

        order_type = params.get('order_type')
        if order_type:
            queryset = queryset.filter(order_type=order_type)

        employee_id = params.get('employee')
        if employee_id:
            queryset = queryset.filter(assigned_employees__id=employee_id)

        date_from = params.get('date_from')
        if date_from:
            queryset = queryset.filter(created_at__date__gte=date_from)

        date_to = params.get('date_to')
        if date_to:
            queryset = queryset.filter(created_at__date__lte=date_to)

        search = params.get('search')
        if search:
            queryset = queryset.filter(
                Q(id__icontains=search) |
                Q(customer_name__icontains=search) |
                Q(contact_number__icontains=search)
            )

        return queryset.distinct()

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderSerializer, 400: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        tags=['orders'],
    )
    def create(self, request):
        """Create an order using service layer."""
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        employees = data.pop('assigned_employee_ids', [])

        try:
            order = create_order(
                assigned_employee_ids=[employee.id for employee in employees],
                **data
            )
        except OrderIdentifierConflictError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=OrderUpdateSerializer,
        responses={200: OrderSerializer, 404: ErrorResponseSerializer},
        tags=['orders'],
    )
    def partial_update(self, request, pk=None):
        """Edit order fields using service layer."""
        serializer = OrderUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        patch = dict(serializer.validated_data)
        if 'assigned_employee_ids' in patch:
            patch['assigned_employee_ids'] = [employee.id for employee in patch['assigned_employee_ids']]

        try:
            order = update_order_fields(pk, **patch)
        except OrderNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)

        return Response(OrderSerializer(order).data)

    @extend_schema(
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Change order status. Placing a customer order assigns its permanent ID.",
        tags=['orders'],
    )
    @action(detail=True, methods=['post'])
    def status(self, request, pk=None):
        """Update order status using service layer."""
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_order_status(
                pk,
                serializer.validated_data['status'],
                note=serializer.validated_data.get('note'),
            )
        except OrderNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except InvalidStatusTransitionError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)
        except OrderIdentifierConflictError as e:
            return _error(e, status.HTTP_409_CONFLICT)

        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderSerializer(order).data)

    @extend_schema(
        request=PaymentRequestSerializer,
        responses={
            200: PaymentResultSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        description="Record money received. Underpayment leaves a balance; overpayment returns change.",
        tags=['orders'],
    )
    @action(detail=True, methods=['post'])
    def pay(self, request, pk=None):
        """Record a payment using service layer."""
        serializer = PaymentRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = record_payment(pk, serializer.validated_data['amount_paid'])
        except OrderNotFoundError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        except InvalidPaymentError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        result['order'] = self.get_queryset().get(pk=result['order'].pk)
        return Response(PaymentResultSerializer(result).data)

    @extend_schema(responses={200: OrderStatisticsSerializer}, tags=['orders'])
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Get dashboard statistics for the filtered orders."""
        data = calculate_order_statistics(self.get_queryset())
        serializer = OrderStatisticsSerializer(data)
        return Response(serializer.data)


@extend_schema(
    request=QuoteRequestSerializer,
    responses={200: QuoteResponseSerializer, 400: ErrorResponseSerializer},
    description="Price an order. Public; used by the laundry calculator.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def quote(request):
    """Compute a price quote using service layer."""
    serializer = QuoteRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = quote_price(
        service_package=serializer.validated_data['service_package'],
        weight=serializer.validated_data.get('weight'),
        distance=serializer.validated_data.get('distance'),
    )

    return Response(QuoteResponseSerializer(result).data)


@extend_schema(
    responses={200: OrderSerializer(many=True)},
    description="Get the current customer's orders, newest first.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_orders(request):
    """Get current customer's orders using service layer."""
    orders = get_customer_orders(request.user)
    serializer = OrderSerializer(orders, many=True)
    return Response(serializer.data)


@extend_schema(
    request=CustomerOrderCreateSerializer,
    responses={
        201: OrderSerializer,
        400: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
        429: ErrorResponseSerializer,
    },
    description="Submit an order. It waits for staff approval under a pending ID.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit_order(request):
    """Submit a customer order using service layer."""
    serializer = CustomerOrderCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        order = create_customer_order(customer=request.user, **serializer.validated_data)
    except DailyOrderLimitError as e:
        return _error(e, status.HTTP_429_TOO_MANY_REQUESTS)
    except OrderIdentifierConflictError as e:
        return _error(e, status.HTTP_409_CONFLICT)

    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={
        200: OrderSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Cancel your own order before it is placed.",
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel_order(request, order_id):
    """Cancel a customer's order using service layer."""
    try:
        order = cancel_order_by_customer(order_id, request.user)
    except OrderNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except OrderNotCancelableError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    return Response(OrderSerializer(order).data)


@extend_schema(
    parameters=[
        OpenApiParameter('order_id', OpenApiTypes.STR, description='Order ID, e.g. RKR012', required=True),
        OpenApiParameter('name', OpenApiTypes.STR, description='Customer name (partial match)', required=True),
    ],
    responses={200: OrderTrackingSerializer, 404: ErrorResponseSerializer},
    description="Track an order by its ID and the customer's name.",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def track_order(request):
    """Look up an order for public tracking."""
    order = find_order_for_customer(
        request.query_params.get('order_id', ''),
        request.query_params.get('name', ''),
    )
    if order is None:
        return _error('No order found with that ID and name', status.HTTP_404_NOT_FOUND)

    return Response(OrderTrackingSerializer(order).data)


@extend_schema(
    parameters=[CustomerDirectoryQuerySerializer],
    responses={200: CustomerDirectoryEntrySerializer(many=True)},
    description="Customers grouped by name with visits, loads and amount paid (admins only).",
    tags=['orders'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def customer_directory(request):
    query = CustomerDirectoryQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    directory = get_customer_directory(
        sort=query.validated_data['sort'],
        search=query.validated_data.get('search'),
    )
    return Response(CustomerDirectoryEntrySerializer(directory, many=True).data)
