import pytest
from datetime import timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.promos.models import Promo


@pytest.mark.django_db
class TestActivePromoEndpoint:
    """Tests for GET /api/promos/active/"""

    def test_running_promo(self, api_client, running_promo):
        response = api_client.get(reverse('promos:active-promo'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(running_promo.id)
        assert response.data['is_running'] is True

    def test_no_promo(self, api_client):
        response = api_client.get(reverse('promos:active-promo'))

        assert response.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.django_db
class TestPromoManagementEndpoints:
    """Tests for /api/promos/manage/"""

    def test_requires_admin(self, employee_client):
        response = employee_client.get(reverse('promos:promo-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_promo(self, admin_client, shop_admin):
        now = timezone.now()
        data = {
            'start_date': now.isoformat(),
            'end_date': (now + timedelta(days=2)).isoformat(),
            'price_per_load': '1000.00',
            'display_date': 'This weekend',
            'is_active': True,
        }

        response = admin_client.post(reverse('promos:promo-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        promo = Promo.objects.get()
        assert promo.is_active is True
        assert promo.created_by == shop_admin

    def test_create_invalid_period(self, admin_client):
        now = timezone.now()
        data = {
            'start_date': now.isoformat(),
            'end_date': (now - timedelta(days=2)).isoformat(),
            'price_per_load': '1000.00',
            'display_date': 'Backwards',
        }

        response = admin_client.post(reverse('promos:promo-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'end_date' in response.data

    def test_activate(self, admin_client, running_promo, upcoming_promo):
        url = reverse('promos:promo-activate', kwargs={'pk': upcoming_promo.id})

        response = admin_client.post(url)

        running_promo.refresh_from_db()
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_active'] is True
        assert running_promo.is_active is False


@pytest.mark.django_db
class TestServiceRateEndpoints:

    def test_list_rates(self, api_client, wash_rate, delivery_rate):
        response = api_client.get(reverse('promos:service-rates'))

        assert response.status_code == status.HTTP_200_OK
        assert [rate['name'] for rate in response.data] == [wash_rate.name, delivery_rate.name]

    def test_update_rate(self, admin_client, wash_rate):
        url = reverse('promos:update-rate', kwargs={'rate_id': wash_rate.id})

        response = admin_client.patch(url, {'price': '200.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        wash_rate.refresh_from_db()
        assert str(wash_rate.price) == '200.00'

    def test_update_rate_requires_admin(self, employee_client, wash_rate):
        url = reverse('promos:update-rate', kwargs={'rate_id': wash_rate.id})

        response = employee_client.patch(url, {'price': '1.00'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
