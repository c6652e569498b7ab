import pytest
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.orders.constants import OrderStatus, OrderType
from apps.orders.models import Order, OrderStatusHistory


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def customer(db):
    """Create and return a customer."""
    return User.objects.create_user(
        email='juan@example.com',
        password='TestPass123!',
        first_name='Juan',
        last_name='Dela Cruz',
        contact_number='09171234567',
    )


@pytest.fixture
def other_customer(db):
    """Create and return another customer."""
    return User.objects.create_user(
        email='maria@example.com',
        password='TestPass123!',
        first_name='Maria',
        last_name='Santos',
    )


@pytest.fixture
def employee(db):
    """Create and return an employee."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        first_name='Myra',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def customer_client(customer):
    """Return API client authenticated as the customer."""
    return _client_for(customer)


@pytest.fixture
def other_customer_client(other_customer):
    """Return API client authenticated as the other customer."""
    return _client_for(other_customer)


@pytest.fixture
def staff_client(employee):
    """Return API client authenticated as the employee."""
    return _client_for(employee)


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        first_name='Karaya',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


def make_order(order_id, **fields):
    """Insert an order row directly, bypassing identifier allocation."""
    defaults = {
        'customer_name': 'Walk-in Customer',
        'service_package': 'package1',
        'weight': Decimal('7.50'),
        'loads': 1,
        'status': OrderStatus.ORDER_PLACED,
        'total': Decimal('1350.00'),
        'balance': Decimal('1350.00'),
        'identifier_assigned_at': timezone.now(),
    }
    defaults.update(fields)
    order = Order.objects.create(id=order_id, **defaults)
    OrderStatusHistory.objects.create(order=order, status=order.status, note='Order created')
    return order


@pytest.fixture
def placed_order(db):
    """Create and return a placed walk-in order."""
    return make_order('RKR001', customer_name='Ana Reyes')


@pytest.fixture
def pending_order(db, customer):
    """Create and return a customer submission awaiting approval."""
    return make_order(
        'RKR-Pending-001',
        customer=customer,
        customer_name='Juan Dela Cruz',
        status=OrderStatus.ORDER_CREATED,
    )


@pytest.fixture
def internal_order(db, employee):
    """Create and return an internal (shop) order."""
    order = make_order(
        'RKR002',
        customer_name='Shop Linens',
        order_type=OrderType.INTERNAL,
        total=Decimal('0.00'),
        balance=Decimal('0.00'),
        loads=2,
    )
    order.assigned_employees.add(employee)
    return order
