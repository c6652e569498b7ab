import pytest
from datetime import datetime
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.orders.constants import OrderStatus, OrderType
from apps.orders.models import Order


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def local_datetime(year, month, day, hour=12):
    """Noon in the shop's time zone."""
    return timezone.make_aware(datetime(year, month, day, hour))


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def shop_admin(db):
    return User.objects.create_user(
        email='karaya@example.com',
        password='TestPass123!',
        first_name='Karaya',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def myra(db):
    """Create and return the first employee."""
    return User.objects.create_user(
        email='myra@example.com',
        password='TestPass123!',
        first_name='Myra',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def jun(db):
    """Create and return the second employee."""
    return User.objects.create_user(
        email='jun@example.com',
        password='TestPass123!',
        first_name='Jun',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def finance_customer(db):
    return User.objects.create_user(email='finance_customer@example.com', password='TestPass123!')


@pytest.fixture
def admin_client(shop_admin):
    """Return API client authenticated as the shop owner."""
    return _client_for(shop_admin)


@pytest.fixture
def employee_client(myra):
    return _client_for(myra)


@pytest.fixture
def customer_client(finance_customer):
    return _client_for(finance_customer)


@pytest.fixture
def order_factory(db):
    """
    Build orders with explicit loads, status, payment and creation time.

    Usage:
        order_factory(loads=2, employees=[myra], created_at=local_datetime(2026, 10, 5))
    """
    counter = {'value': 0}

    def create(loads=1, status=OrderStatus.SUCCESS, employees=(), internal=False,
               total=Decimal('1350.00'), is_paid=True, weight=Decimal('7.50'), created_at=None):
        counter['value'] += 1
        order = Order.objects.create(
            id=f"RKR{counter['value']:03d}",
            customer_name='Customer',
            service_package='package1',
            weight=weight,
            loads=loads,
            status=status,
            order_type=OrderType.INTERNAL if internal else OrderType.CUSTOMER,
            total=total,
            is_paid=is_paid,
            balance=Decimal('0.00') if is_paid else total,
            identifier_assigned_at=timezone.now(),
        )
        if employees:
            order.assigned_employees.set(employees)
        if created_at is not None:
            Order.objects.filter(pk=order.pk).update(created_at=created_at)
            order.created_at = created_at
        return order

    return create
