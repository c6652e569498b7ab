import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
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
    return User.objects.create_user(
        email='juan@example.com',
        password='TestPass123!',
        first_name='Juan',
        last_name='Dela Cruz',
        contact_number='09171234567',
    )


@pytest.fixture
def deactivated_customer(db):
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def employee(db):
    return User.objects.create_user(
        email='myra@example.com',
        password='TestPass123!',
        first_name='Myra',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def customer_client(customer):
    """Return API client authenticated as the customer."""
    return _client_for(customer)


@pytest.fixture
def employee_client(employee):
    return _client_for(employee)


@pytest.fixture
def customer_order(customer):
    """An online order with its history row."""
    order = Order.objects.create(
        id='RKR-Pending-001',
        customer=customer,
        customer_name='Juan Dela Cruz',
        weight=Decimal('7.50'),
        total=Decimal('1350.00'),
    )
    OrderStatusHistory.objects.create(order=order, status=order.status)
    return order


@pytest.fixture
def walk_in_order(db):
    return Order.objects.create(
        id='RKR001',
        customer_name='Juan Dela Cruz',
        weight=Decimal('7.50'),
        total=Decimal('1350.00'),
    )
