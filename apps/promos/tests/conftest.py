import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.promos.models import Promo, ServiceRate


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def shop_admin(db):
    """Create and return a shop owner account."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        first_name='Karaya',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def promo_employee(db):
    return User.objects.create_user(
        email='promo_staff@example.com',
        password='TestPass123!',
        role=UserRole.EMPLOYEE,
    )


@pytest.fixture
def admin_client(shop_admin):
    """Return API client authenticated as the shop owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(shop_admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def employee_client(promo_employee):
    client = APIClient()
    refresh = RefreshToken.for_user(promo_employee)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def running_promo(db):
    """Create and return an active promo running now."""
    now = timezone.now()
    return Promo.objects.create(
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
        price_per_load=Decimal('1200.00'),
        display_date='Oct 17 - Oct 19',
        is_active=True,
    )


@pytest.fixture
def upcoming_promo(db):
    """Create and return an inactive promo starting next week."""
    now = timezone.now()
    return Promo.objects.create(
        start_date=now + timedelta(days=7),
        end_date=now + timedelta(days=9),
        price_per_load=Decimal('1100.00'),
        display_date='Oct 25 - Oct 27',
        is_active=False,
    )


@pytest.fixture
def wash_rate(db):
    return ServiceRate.objects.create(name='Wash, Dry, Fold', price=Decimal('180.00'), type='service')


@pytest.fixture
def delivery_rate(db):
    return ServiceRate.objects.create(name='Delivery per km', price=Decimal('10.00'), type='delivery')
