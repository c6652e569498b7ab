import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.orders.constants import OrderStatus
from apps.orders.models import Order


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
def rating_customer(db):
    return User.objects.create_user(
        email='ana@example.com',
        password='TestPass123!',
        first_name='Ana',
        last_name='Reyes',
    )


@pytest.fixture
def stranger(db):
    return User.objects.create_user(email='stranger@example.com', password='TestPass123!')


@pytest.fixture
def rating_client(rating_customer):
    """Return API client authenticated as the rating customer."""
    return _client_for(rating_customer)


@pytest.fixture
def stranger_client(stranger):
    return _client_for(stranger)


def _order(order_id, customer, status):
    return Order.objects.create(
        id=order_id,
        customer=customer,
        customer_name=customer.get_display_name(),
        service_package='package1',
        weight=Decimal('7.50'),
        status=status,
        total=Decimal('1350.00'),
    )


@pytest.fixture
def delivered_order(rating_customer):
    return _order('RKR101', rating_customer, OrderStatus.DELIVERED)


@pytest.fixture
def washing_order(rating_customer):
    return _order('RKR102', rating_customer, OrderStatus.WASHING)


@pytest.fixture
def completed_orders(rating_customer):
    """Five successful orders for statistics."""
    return [
        _order(f'RKR2{index:02d}', rating_customer, OrderStatus.SUCCESS)
        for index in range(1, 6)
    ]
