import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4
from django.utils import timezone

from apps.promos.models import Promo, ServiceRate
from apps.promos.services import (
    get_active_promo,
    get_running_promo,
    create_promo,
    update_promo,
    activate_promo,
    delete_promo,
    get_service_rates,
    update_service_rate,
)
from apps.promos.services.exceptions import (
    PromoNotFoundError,
    InvalidPromoPeriodError,
    ServiceRateNotFoundError,
)


@pytest.mark.django_db
class TestActivePromo:
    """Test which promo is announced and which one prices orders."""

    def test_none(self):
        assert get_active_promo() is None
        assert get_running_promo() is None

    def test_running(self, running_promo):
        assert get_active_promo() == running_promo
        assert get_running_promo() == running_promo

    def test_upcoming_is_announced_but_not_applied(self, upcoming_promo):
        activate_promo(upcoming_promo.id)

        assert get_active_promo() == upcoming_promo
        assert get_running_promo() is None

    def test_ended_promo_ignored(self, running_promo):
        later = running_promo.end_date + timedelta(minutes=1)

        assert get_active_promo(now=later) is None
        assert get_running_promo(now=later) is None

    def test_inactive_ignored(self, upcoming_promo):
        assert get_active_promo() is None


@pytest.mark.django_db
class TestPromoManagement:
    """Test scheduling and activation."""

    def test_create_inactive(self, shop_admin):
        now = timezone.now()
        promo = create_promo(
            start_date=now,
            end_date=now + timedelta(days=2),
            price_per_load=Decimal('1000'),
            display_date='This weekend',
            created_by=shop_admin,
        )

        assert promo.is_active is False
        assert promo.created_by == shop_admin

    def test_create_active_deactivates_others(self, running_promo):
        now = timezone.now()
        promo = create_promo(
            start_date=now,
            end_date=now + timedelta(days=2),
            price_per_load=Decimal('1000'),
            display_date='This weekend',
            is_active=True,
        )

        running_promo.refresh_from_db()
        assert promo.is_active is True
        assert running_promo.is_active is False

    def test_invalid_period(self):
        now = timezone.now()
        with pytest.raises(InvalidPromoPeriodError):
            create_promo(
                start_date=now,
                end_date=now - timedelta(days=1),
                price_per_load=Decimal('1000'),
                display_date='Never',
            )

    def test_activate_keeps_single_active(self, running_promo, upcoming_promo):
        activate_promo(upcoming_promo.id)

        assert list(Promo.objects.filter(is_active=True)) == [upcoming_promo]

    def test_activate_missing(self):
        with pytest.raises(PromoNotFoundError):
            activate_promo(uuid4())

    def test_update_price(self, running_promo):
        promo = update_promo(running_promo.id, price_per_load=Decimal('999.00'))

        assert promo.price_per_load == Decimal('999.00')
        assert promo.is_active is True

    def test_update_activates(self, running_promo, upcoming_promo):
        update_promo(upcoming_promo.id, is_active=True)

        running_promo.refresh_from_db()
        assert running_promo.is_active is False

    def test_update_deactivates(self, running_promo):
        promo = update_promo(running_promo.id, is_active=False)

        assert promo.is_active is False

    def test_delete(self, running_promo):
        delete_promo(running_promo.id)

        assert not Promo.objects.exists()
        with pytest.raises(PromoNotFoundError):
            delete_promo(running_promo.id)


@pytest.mark.django_db
class TestServiceRates:

    def test_list_active_rates(self, wash_rate, delivery_rate):
        delivery_rate.is_active = False
        delivery_rate.save()

        assert list(get_service_rates()) == [wash_rate]

    def test_services_before_delivery(self, wash_rate, delivery_rate):
        assert list(get_service_rates()) == [wash_rate, delivery_rate]

    def test_sorted_by_name_within_type(self, wash_rate, delivery_rate):
        ironing = ServiceRate.objects.create(name='Ironing', price=Decimal('25.00'), type='service')
        pickup = ServiceRate.objects.create(name='Additional pick up', price=Decimal('50.00'), type='delivery')

        assert list(get_service_rates()) == [ironing, wash_rate, pickup, delivery_rate]

    def test_update_price(self, wash_rate):
        rate = update_service_rate(wash_rate.id, Decimal('190.00'))

        wash_rate.refresh_from_db()
        assert rate.price == Decimal('190.00')
        assert wash_rate.price == Decimal('190.00')

    def test_update_missing(self):
        with pytest.raises(ServiceRateNotFoundError):
            update_service_rate(uuid4(), Decimal('1'))
