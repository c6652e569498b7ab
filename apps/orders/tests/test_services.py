"""
Service layer tests for orders app.

Tests all service functions for:
- Pricing with promo rates
- Order creation and identifier allocation (including collision retry)
- Customer submissions and the daily limit
- Status changes and placing pending orders
- Cancellation, tracking and dashboard statistics
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch
from django.db import IntegrityError
from django.test import override_settings
from django.utils import timezone

from apps.orders.constants import OrderStatus, OrderType, CanceledBy
from apps.orders.models import Order, OrderStatusHistory
from apps.orders.services import (
    quote_price,
    create_order,
    create_customer_order,
    update_order_status,
    update_order_fields,
    record_payment,
    cancel_order_by_customer,
    count_customer_orders_today,
    find_order_for_customer,
    calculate_order_statistics,
)
from apps.orders.services.exceptions import (
    OrderNotFoundError,
    OrderIdentifierConflictError,
    DailyOrderLimitError,
    OrderNotCancelableError,
    InvalidStatusTransitionError,
    InvalidPaymentError,
)
from apps.orders.services.order_management import _assign_permanent_identifier
from apps.promos.models import Promo
from .conftest import make_order

FETCH_LATEST = 'apps.orders.services.order_management.fetch_latest_order_id'


def _promo(start, end, price_per_load='1200', is_active=True):
    return Promo.objects.create(
        start_date=start,
        end_date=end,
        price_per_load=Decimal(price_per_load),
        display_date='Weekend Sale',
        is_active=is_active,
    )


# ============================================================================
# PRICING TESTS
# ============================================================================

@pytest.mark.django_db
class TestQuotePrice:
    """Test pricing with the shop's current rate."""

    def test_standard_rate(self):
        result = quote_price(service_package='package2', weight=10, distance=5)

        assert result.computed_price == Decimal('1840.00')

    def test_running_promo_overrides_rate(self):
        now = timezone.now()
        _promo(now - timedelta(days=1), now + timedelta(days=1))

        result = quote_price(service_package='package1', weight=5)

        assert result.computed_price == Decimal('1200.00')

    def test_promo_keeps_transport_fee(self):
        now = timezone.now()
        _promo(now - timedelta(days=1), now + timedelta(days=1))

        result = quote_price(service_package='package3', weight=5, distance=3)

        assert result.computed_price == Decimal('1240.00')

    def test_upcoming_promo_not_applied(self):
        now = timezone.now()
        _promo(now + timedelta(days=2), now + timedelta(days=3))

        result = quote_price(service_package='package1', weight=5)

        assert result.computed_price == Decimal('1350.00')

    def test_inactive_promo_not_applied(self):
        now = timezone.now()
        _promo(now - timedelta(days=1), now + timedelta(days=1), is_active=False)

        result = quote_price(service_package='package1', weight=5)

        assert result.computed_price == Decimal('1350.00')


# ============================================================================
# ORDER CREATION TESTS
# ============================================================================

@pytest.mark.django_db
class TestCreateOrder:
    """Test staff order entry."""

    def test_first_order(self):
        """Empty shop starts at RKR001."""
        order = create_order(
            customer_name='Ana Reyes',
            service_package='package2',
            weight=Decimal('10'),
            distance=Decimal('5'),
        )

        assert order.id == 'RKR001'
        assert order.status == OrderStatus.ORDER_PLACED
        assert order.total == Decimal('1840.00')
        assert order.balance == Decimal('1840.00')
        assert order.loads == 2
        assert order.identifier_assigned_at is not None
        history = list(order.status_history.all())
        assert len(history) == 1
        assert history[0].note == 'Order created'

    def test_follows_latest_identifier(self, placed_order):
        order = create_order(customer_name='Ben', service_package='package1', weight=5)

        assert order.id == 'RKR002'

    def test_paid_order_has_no_balance(self):
        order = create_order(customer_name='Ben', service_package='package1', weight=5, is_paid=True)

        assert order.is_paid is True
        assert order.balance == Decimal('0.00')

    def test_internal_order_is_free(self):
        order = create_order(
            customer_name='Shop Linens',
            service_package='package1',
            weight=12,
            order_type=OrderType.INTERNAL,
        )

        assert order.total == Decimal('0.00')
        assert order.loads == 2

    def test_explicit_total(self):
        order = create_order(
            customer_name='Ben',
            service_package='package1',
            weight=5,
            total=Decimal('1000.00'),
        )

        assert order.total == Decimal('1000.00')

    def test_backdated_order(self):
        past = timezone.now() - timedelta(days=3)
        order = create_order(
            customer_name='Ben',
            service_package='package1',
            weight=5,
            created_at=past,
        )

        order.refresh_from_db()
        assert order.created_at == past

    def test_assigns_employees(self, employee):
        order = create_order(
            customer_name='Ben',
            service_package='package1',
            weight=5,
            assigned_employee_ids=[employee.id],
        )

        assert list(order.assigned_employees.all()) == [employee]

    def test_collision_retries_with_fresh_latest(self):
        """
        Two requests read RKR010 and both pick RKR011. The loser re-reads
        RKR011 and takes RKR012.
        """
        make_order('RKR010')
        make_order('RKR011')

        with patch(FETCH_LATEST, side_effect=['RKR010', 'RKR011']) as mock_fetch:
            order = create_order(customer_name='Ben', service_package='package1', weight=5)

        assert order.id == 'RKR012'
        assert mock_fetch.call_count == 2
        assert Order.objects.filter(pk='RKR012').exists()

    def test_second_collision_fails(self):
        make_order('RKR011')

        with patch(FETCH_LATEST, return_value='RKR010') as mock_fetch:
            with pytest.raises(OrderIdentifierConflictError) as exc:
                create_order(customer_name='Ben', service_package='package1', weight=5)

        assert mock_fetch.call_count == 2
        assert 'try again' in str(exc.value)
        assert Order.objects.count() == 1

    @override_settings(ORDER_ID_MAX_RETRIES=0)
    def test_retry_count_from_settings(self):
        make_order('RKR011')

        with patch(FETCH_LATEST, return_value='RKR010') as mock_fetch:
            with pytest.raises(OrderIdentifierConflictError):
                create_order(customer_name='Ben', service_package='package1', weight=5)

        assert mock_fetch.call_count == 1

    def test_other_database_errors_not_retried(self):
        failure = IntegrityError('NOT NULL constraint failed: orders.customer_name')

        with patch(FETCH_LATEST, return_value=None) as mock_fetch, \
                patch.object(Order.objects, 'create', side_effect=failure):
            with pytest.raises(IntegrityError):
                create_order(customer_name='Ben', service_package='package1', weight=5)

        assert mock_fetch.call_count == 1


@pytest.mark.django_db
class TestCreateCustomerOrder:
    """Test customer submissions."""

    def test_pending_identifier(self, customer):
        order = create_customer_order(
            customer=customer,
            customer_name='Juan Dela Cruz',
            contact_number='09171234567',
            service_package='package3',
            weight=Decimal('8'),
            distance=Decimal('2'),
        )

        assert order.id == 'RKR-Pending-001'
        assert order.status == OrderStatus.ORDER_CREATED
        assert order.customer == customer
        assert order.total == Decimal('1460.00')

    def test_pending_series_continues(self, customer, pending_order):
        order = create_customer_order(
            customer=customer,
            customer_name='Juan',
            service_package='package1',
        )

        assert order.id == 'RKR-Pending-002'

    def test_without_weight_quotes_minimum(self, customer):
        order = create_customer_order(customer=customer, customer_name='Juan', service_package='package1')

        assert order.total == Decimal('1350.00')
        assert order.weight == Decimal('0.00')

    def test_daily_limit(self, customer):
        for _ in range(3):
            create_customer_order(customer=customer, customer_name='Juan', service_package='package1')

        with pytest.raises(DailyOrderLimitError) as exc:
            create_customer_order(customer=customer, customer_name='Juan', service_package='package1')

        assert '3 orders per day' in str(exc.value)

    def test_canceled_orders_count_towards_limit(self, customer):
        for _ in range(3):
            order = create_customer_order(customer=customer, customer_name='Juan', service_package='package1')
            cancel_order_by_customer(order.id, customer)

        with pytest.raises(DailyOrderLimitError):
            create_customer_order(customer=customer, customer_name='Juan', service_package='package1')

    def test_limit_is_per_customer(self, customer, other_customer):
        for _ in range(3):
            create_customer_order(customer=customer, customer_name='Juan', service_package='package1')

        order = create_customer_order(customer=other_customer, customer_name='Maria', service_package='package1')

        assert order.customer == other_customer

    def test_yesterdays_orders_not_counted(self, customer):
        order = make_order('RKR-Pending-001', customer=customer, status=OrderStatus.ORDER_CREATED)
        Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(days=1))

        assert count_customer_orders_today(customer) == 0


# ============================================================================
# STATUS TESTS
# ============================================================================

@pytest.mark.django_db
class TestUpdateOrderStatus:
    """Test status changes."""

    def test_progress_appends_history(self, placed_order):
        order = update_order_status(placed_order.id, OrderStatus.WASHING)

        assert order.status == OrderStatus.WASHING
        statuses = list(order.status_history.values_list('status', flat=True))
        assert statuses == [OrderStatus.ORDER_PLACED, OrderStatus.WASHING]

    def test_placing_pending_order_assigns_permanent_id(self, placed_order, pending_order, employee):
        pending_order.assigned_employees.add(employee)
        created_at = Order.objects.get(pk=pending_order.pk).created_at

        order = update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        assert order.id == 'RKR002'
        assert not Order.objects.filter(pk='RKR-Pending-001').exists()
        stored = Order.objects.get(pk='RKR002')
        assert stored.status == OrderStatus.ORDER_PLACED
        assert stored.created_at == created_at
        assert list(stored.assigned_employees.all()) == [employee]
        history = list(stored.status_history.all())
        assert [entry.status for entry in history] == [OrderStatus.ORDER_CREATED, OrderStatus.ORDER_PLACED]
        assert history[-1].note == 'Order approved and ID assigned'

    def test_placing_already_placed_order_keeps_id(self, placed_order):
        order = update_order_status(placed_order.id, OrderStatus.ORDER_PLACED, note='Re-opened')

        assert order.id == 'RKR001'

    def test_placing_retries_on_collision(self, placed_order, pending_order):
        with patch(FETCH_LATEST, side_effect=[None, 'RKR001']):
            order = update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        assert order.id == 'RKR002'

    def test_placing_fails_after_second_collision(self, placed_order, pending_order):
        with patch(FETCH_LATEST, return_value=None):
            with pytest.raises(OrderIdentifierConflictError):
                update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        assert Order.objects.filter(pk='RKR-Pending-001').exists()

    def test_staff_cancel(self, placed_order):
        order = update_order_status(placed_order.id, OrderStatus.CANCELED, note='Customer no-show')

        assert order.canceled_by == CanceledBy.STAFF
        assert order.canceled_at is not None
        assert order.cancel_reason == 'Customer no-show'

    def test_canceled_order_is_final(self, placed_order):
        update_order_status(placed_order.id, OrderStatus.CANCELED)

        with pytest.raises(InvalidStatusTransitionError):
            update_order_status(placed_order.id, OrderStatus.WASHING)

    def test_missing_order(self):
        with pytest.raises(OrderNotFoundError):
            update_order_status('RKR404', OrderStatus.WASHING)

    def test_stale_copy_of_placed_order_is_not_duplicated(self, placed_order, pending_order):
        stale = Order.objects.get(pk=pending_order.pk)
        update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        with pytest.raises(OrderNotFoundError):
            _assign_permanent_identifier(stale)

        assert Order.objects.filter(customer_name='Juan Dela Cruz').count() == 1

    def test_placing_twice(self, placed_order, pending_order):
        update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        with pytest.raises(OrderNotFoundError):
            update_order_status(pending_order.id, OrderStatus.ORDER_PLACED)

        assert list(Order.objects.values_list('id', flat=True).order_by('id')) == ['RKR001', 'RKR002']


@pytest.mark.django_db
class TestUpdateOrderFields:
    """Test staff edits."""

    def test_weight_change_reprices(self, placed_order):
        order = update_order_fields(placed_order.id, weight=Decimal('10'))

        assert order.total == Decimal('1800.00')
        assert order.balance == Decimal('1800.00')
        assert order.loads == 2

    def test_package_change_adds_transport(self, placed_order):
        order = update_order_fields(placed_order.id, service_package='package3', distance=Decimal('3'))

        assert order.total == Decimal('1390.00')

    def test_explicit_total_wins(self, placed_order):
        order = update_order_fields(placed_order.id, weight=Decimal('10'), total=Decimal('1500.00'))

        assert order.total == Decimal('1500.00')

    def test_mark_paid_clears_balance(self, placed_order):
        order = update_order_fields(placed_order.id, is_paid=True)

        assert order.balance == Decimal('0.00')

    def test_internal_order_stays_free(self, internal_order):
        order = update_order_fields(internal_order.id, weight=Decimal('20'))

        assert order.total == Decimal('0.00')
        assert order.loads == 3

    def test_replaces_employees(self, placed_order, employee):
        order = update_order_fields(placed_order.id, assigned_employee_ids=[employee.id])

        assert list(order.assigned_employees.all()) == [employee]

    def test_unknown_field(self, placed_order):
        with pytest.raises(ValueError):
            update_order_fields(placed_order.id, id='RKR999')

    def test_reprice_keeps_partial_payment(self, placed_order):
        record_payment(placed_order.id, Decimal('1000.00'))

        order = update_order_fields(placed_order.id, weight=Decimal('10'))

        assert order.total == Decimal('1800.00')
        assert order.balance == Decimal('800.00')


@pytest.mark.django_db
class TestRecordPayment:
    """Test counter payments."""

    def test_underpayment_leaves_balance(self, placed_order):
        result = record_payment(placed_order.id, Decimal('1000.00'))

        assert result['amount_due'] == Decimal('1350.00')
        assert result['balance'] == Decimal('350.00')
        assert result['change'] == Decimal('0.00')
        stored = Order.objects.get(pk=placed_order.pk)
        assert stored.balance == Decimal('350.00')
        assert stored.is_paid is False

    def test_second_payment_settles_balance(self, placed_order):
        record_payment(placed_order.id, Decimal('1000.00'))

        result = record_payment(placed_order.id, Decimal('350.00'))

        assert result['amount_due'] == Decimal('350.00')
        assert result['order'].is_paid is True
        assert result['order'].balance == Decimal('0.00')

    def test_exact_payment(self, placed_order):
        result = record_payment(placed_order.id, Decimal('1350.00'))

        assert result['order'].is_paid is True
        assert result['change'] == Decimal('0.00')

    def test_overpayment_gives_change(self, placed_order):
        result = record_payment(placed_order.id, Decimal('2000.00'))

        assert result['order'].is_paid is True
        assert result['balance'] == Decimal('0.00')
        assert result['change'] == Decimal('650.00')

    def test_zero_balance_unpaid_order_is_due_in_full(self):
        order = make_order('RKR007', balance=Decimal('0.00'))

        result = record_payment(order.id, Decimal('500.00'))

        assert result['amount_due'] == Decimal('1350.00')
        assert result['balance'] == Decimal('850.00')

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-10')])
    def test_amount_must_be_positive(self, placed_order, amount):
        with pytest.raises(InvalidPaymentError):
            record_payment(placed_order.id, amount)

    def test_paid_order_rejected(self, placed_order):
        record_payment(placed_order.id, Decimal('1350.00'))

        with pytest.raises(InvalidPaymentError):
            record_payment(placed_order.id, Decimal('1.00'))

    def test_canceled_order_rejected(self, placed_order):
        update_order_status(placed_order.id, OrderStatus.CANCELED)

        with pytest.raises(InvalidPaymentError):
            record_payment(placed_order.id, Decimal('100.00'))

    def test_missing_order(self):
        with pytest.raises(OrderNotFoundError):
            record_payment('RKR404', Decimal('100.00'))


# ============================================================================
# CANCELLATION AND LOOKUP TESTS
# ============================================================================

@pytest.mark.django_db
class TestCancelOrderByCustomer:

    def test_cancel_pending_order(self, customer, pending_order):
        order = cancel_order_by_customer(pending_order.id, customer)

        assert order.status == OrderStatus.CANCELED
        assert order.canceled_by == CanceledBy.CUSTOMER
        assert order.status_history.last().note == 'Order canceled by customer'

    def test_cannot_cancel_others_order(self, other_customer, pending_order):
        with pytest.raises(OrderNotFoundError):
            cancel_order_by_customer(pending_order.id, other_customer)

    def test_cannot_cancel_placed_order(self, customer):
        order = make_order('RKR005', customer=customer)

        with pytest.raises(OrderNotCancelableError):
            cancel_order_by_customer(order.id, customer)


@pytest.mark.django_db
class TestFindOrderForCustomer:

    def test_match(self, placed_order):
        assert find_order_for_customer('rkr001', 'reyes') == placed_order

    def test_name_mismatch(self, placed_order):
        assert find_order_for_customer('RKR001', 'Santos') is None

    @pytest.mark.parametrize('order_id,name', [('', 'Ana'), ('RKR001', ''), ('  ', '  ')])
    def test_blank_input(self, placed_order, order_id, name):
        assert find_order_for_customer(order_id, name) is None


# ============================================================================
# STATISTICS TESTS
# ============================================================================

@pytest.mark.django_db
class TestCalculateOrderStatistics:

    def test_dashboard_totals(self, placed_order, internal_order):
        make_order(
            'RKR003',
            status=OrderStatus.SUCCESS,
            is_paid=True,
            total=Decimal('1840.00'),
            balance=Decimal('0.00'),
            loads=2,
        )
        make_order('RKR004', status=OrderStatus.CANCELED)

        stats = calculate_order_statistics(Order.objects.all())

        assert stats['total_orders'] == 3
        assert stats['paid_revenue'] == Decimal('1840.00')
        assert stats['pending_revenue'] == Decimal('2700.00')
        assert stats['total_revenue'] == Decimal('4540.00')
        assert stats['completed_orders'] == 1
        assert stats['canceled_orders'] == 1
        assert stats['pending_orders'] == 1
        assert stats['paid_orders'] == 1
        assert stats['unpaid_orders'] == 2
        assert stats['today_orders'] == 3
        assert stats['today_revenue'] == Decimal('1840.00')
        assert stats['total_loads'] == 6
        assert stats['today_loads'] == 6

    def test_yesterday_and_week(self):
        order = make_order('RKR001', is_paid=True, balance=Decimal('0.00'))
        Order.objects.filter(pk=order.pk).update(created_at=timezone.now() - timedelta(days=1))
        old = make_order('RKR002', is_paid=True, balance=Decimal('0.00'))
        Order.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=30))

        stats = calculate_order_statistics(Order.objects.all())

        assert stats['yesterday_revenue'] == Decimal('1350.00')
        assert stats['today_orders'] == 0
        assert stats['week_orders'] == 1
        assert stats['week_revenue'] == Decimal('1350.00')

    def test_no_orders(self):
        stats = calculate_order_statistics([])

        assert stats['total_orders'] == 0
        assert stats['total_revenue'] == Decimal('0.00')
