"""Order management service - creation, status changes and cancellation."""

import logging
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from typing import Callable, Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.orders.constants import OrderStatus, OrderType, CanceledBy
from apps.orders.models import Order, OrderStatusHistory
from apps.promos.services import get_running_promo
from .exceptions import (
    OrderNotFoundError,
    OrderIdentifierConflictError,
    DailyOrderLimitError,
    OrderNotCancelableError,
    InvalidStatusTransitionError,
    InvalidPaymentError,
)
from .identifiers import (
    next_identifier,
    next_temporary_identifier,
    is_permanent_identifier,
    fetch_latest_order_id,
    fetch_latest_pending_id,
    is_duplicate_key_error,
)
from .pricing import (
    PricingInput,
    PricingResult,
    compute_price,
    LOAD_CAPACITY_KG,
    BASE_RATE_PER_KG,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

PRICED_FIELDS = ('service_package', 'weight', 'distance')
EDITABLE_FIELDS = (
    'customer_name',
    'contact_number',
    'service_package',
    'weight',
    'distance',
    'delivery_option',
    'load_pieces',
    'is_paid',
    'total',
    'order_type',
)


# =============================================================================
# Pricing
# =============================================================================

def quote_price(*, service_package, weight=None, distance=0, now=None) -> PricingResult:
    """
    Price an order at today's rate.

    A running promo replaces the standard rate: its price per load is
    spread over the 7.5 kg load capacity.
    """
    rate = BASE_RATE_PER_KG
    promo = get_running_promo(now=now)
    if promo is not None:
        rate = promo.price_per_load / LOAD_CAPACITY_KG

    return compute_price(PricingInput(
        service_package=service_package,
        weight=weight,
        distance=distance,
        rate_per_kg=rate,
    ))


# =============================================================================
# Identifier allocation with bounded retry
# =============================================================================

def _insert_with_sequential_id(
    insert: Callable[[str], Order],
    *,
    fetch_latest: Callable[[], Optional[str]],
    allocate: Callable[[Optional[str]], str],
    max_retries: Optional[int] = None,
) -> Order:
    """
    Allocate an identifier and insert, retrying on collisions.

    Each attempt re-reads the latest identifier and runs ``insert`` inside a
    savepoint. Only uniqueness violations are retried; any other database
    error propagates on the first occurrence.

    Raises:
        OrderIdentifierConflictError: If every attempt collided
    """
    if max_retries is None:
        max_retries = settings.ORDER_ID_MAX_RETRIES
    attempts = max(0, max_retries) + 1

    for attempt in range(1, attempts + 1):
        candidate = allocate(fetch_latest())
        try:
            with transaction.atomic():
                return insert(candidate)
        except IntegrityError as exc:
            if not is_duplicate_key_error(exc):
                raise
            logger.warning(
                "Order ID %s already taken (attempt %d of %d)",
                candidate, attempt, attempts
            )

    raise OrderIdentifierConflictError(
        "Could not generate a new order ID. Please try again."
    )


def _record_status(order: Order, status: str, note: str = '') -> OrderStatusHistory:
    return OrderStatusHistory.objects.create(order=order, status=status, note=note or '')


def _assign_permanent_identifier(order: Order) -> Order:
    """
    Swap a placeholder identifier for the next ``RKR###``.

    The row is re-inserted under the new key, history and assignments are
    moved over, then the placeholder row is deleted. The placeholder row is
    locked first; a caller holding a stale copy of an order that was placed
    meanwhile gets OrderNotFoundError instead of a second copy.
    """
    order = _lock_order(order.pk)
    if is_permanent_identifier(order.pk):
        return order

    old_id = order.pk
    created_at = order.created_at
    employee_ids = list(order.assigned_employees.values_list('id', flat=True))

    def move_to(candidate):
        order.pk = candidate
        order.identifier_assigned_at = timezone.now()
        order.save(force_insert=True)
        # auto_now_add stamps the insert; keep the original submission time
        Order.objects.filter(pk=candidate).update(created_at=created_at)
        order.created_at = created_at
        OrderStatusHistory.objects.filter(order_id=old_id).update(order_id=candidate)
        order.assigned_employees.set(employee_ids)
        Order.objects.filter(pk=old_id).delete()
        return order

    try:
        order = _insert_with_sequential_id(
            move_to,
            fetch_latest=fetch_latest_order_id,
            allocate=next_identifier,
        )
    except OrderIdentifierConflictError:
        order.pk = old_id
        raise

    logger.info("Order %s placed as %s", old_id, order.pk)
    return order


# =============================================================================
# Creation
# =============================================================================

def _balance_for(total: Decimal, is_paid: bool) -> Decimal:
    return ZERO if is_paid else total


@transaction.atomic
def create_order(
    *,
    customer_name: str,
    contact_number: str = '',
    service_package: str,
    weight,
    distance=0,
    delivery_option: str = '',
    status: str = OrderStatus.ORDER_PLACED,
    is_paid: bool = False,
    order_type: str = OrderType.CUSTOMER,
    customer: Optional[User] = None,
    assigned_employee_ids: Optional[list] = None,
    load_pieces: Optional[list] = None,
    total: Optional[Decimal] = None,
    created_at: Optional[datetime] = None,
) -> Order:
    """
    Create a staff-entered order with a permanent ``RKR###`` identifier.

    This operation:
    1. Prices the order (unless a total is given; internal orders are free)
    2. Allocates the next identifier, retrying once on a collision
    3. Inserts the order with its first status history entry
    4. Assigns employees

    Args:
        customer_name: Name on the order (walk-in customers have no account)
        service_package: package1, package2 or package3
        weight: Laundry weight in kg
        distance: One-way distance in km
        status: Initial status, 'Order Placed' by default
        total: Overrides the computed price
        created_at: Backdate the order (manual entry of past orders)

    Returns:
        The created Order; its ``id`` is the identifier actually persisted

    Raises:
        OrderIdentifierConflictError: If the retry collided as well
    """
    pricing = quote_price(service_package=service_package, weight=weight, distance=distance)

    if total is None:
        total = Decimal('0.00') if order_type == OrderType.INTERNAL else pricing.computed_price

    def insert(candidate):
        order = Order.objects.create(
            id=candidate,
            customer=customer,
            customer_name=customer_name,
            contact_number=contact_number,
            service_package=service_package,
            weight=weight,
            loads=pricing.loads,
            load_pieces=load_pieces,
            distance=distance,
            delivery_option=delivery_option,
            status=status,
            order_type=order_type,
            total=total,
            is_paid=is_paid,
            balance=_balance_for(total, is_paid),
            identifier_assigned_at=timezone.now(),
        )
        if created_at is not None:
            Order.objects.filter(pk=order.pk).update(created_at=created_at)
            order.created_at = created_at
        _record_status(order, status, 'Order created')
        if assigned_employee_ids:
            order.assigned_employees.set(assigned_employee_ids)
        return order

    order = _insert_with_sequential_id(
        insert,
        fetch_latest=fetch_latest_order_id,
        allocate=next_identifier,
    )
    logger.info("Created order %s for %s (total %s)", order.pk, customer_name, order.total)
    return order


def count_customer_orders_today(customer: User, now: Optional[datetime] = None) -> int:
    """Orders the customer created during the current UTC day, canceled included."""
    now = now or timezone.now()
    now_utc = now.astimezone(dt_timezone.utc)
    start = now_utc.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return Order.objects.filter(
        customer=customer,
        created_at__gte=start,
        created_at__lt=end,
    ).count()


@transaction.atomic
def create_customer_order(
    *,
    customer: User,
    customer_name: str,
    contact_number: str = '',
    service_package: str,
    weight=None,
    distance=0,
    delivery_option: str = '',
) -> Order:
    """
    Submit an order on behalf of a customer.

    The order gets a ``RKR-Pending-###`` placeholder and waits in
    'Order Created' until staff place it, which assigns the permanent
    identifier.

    Raises:
        DailyOrderLimitError: If the customer hit the daily limit
        OrderIdentifierConflictError: If the placeholder retry collided
    """
    limit = settings.MAX_CUSTOMER_ORDERS_PER_DAY
    if count_customer_orders_today(customer) >= limit:
        raise DailyOrderLimitError(
            f"You can only submit {limit} orders per day. Please try again tomorrow."
        )

    pricing = quote_price(service_package=service_package, weight=weight, distance=distance)

    def insert(candidate):
        order = Order.objects.create(
            id=candidate,
            customer=customer,
            customer_name=customer_name,
            contact_number=contact_number,
            service_package=service_package,
            weight=weight if weight is not None else Decimal('0.00'),
            loads=pricing.loads,
            distance=distance,
            delivery_option=delivery_option,
            status=OrderStatus.ORDER_CREATED,
            order_type=OrderType.CUSTOMER,
            total=pricing.computed_price,
            balance=pricing.computed_price,
            identifier_assigned_at=timezone.now(),
        )
        _record_status(order, OrderStatus.ORDER_CREATED, 'Order submitted by customer')
        return order

    order = _insert_with_sequential_id(
        insert,
        fetch_latest=fetch_latest_pending_id,
        allocate=next_temporary_identifier,
    )
    logger.info("Customer %s submitted order %s", customer.id, order.pk)
    return order


# =============================================================================
# Updates
# =============================================================================

def get_order(order_id: str) -> Order:
    try:
        return Order.objects.get(pk=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")


def _lock_order(order_id: str) -> Order:
    try:
        return Order.objects.select_for_update().get(pk=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")


@transaction.atomic
def update_order_status(order_id: str, status: str, note: Optional[str] = None) -> Order:
    """
    Move an order to a new status and record it in the history.

    Placing an order ('Order Placed') that still has a placeholder
    identifier allocates its permanent ``RKR###`` identifier first. Callers
    must continue with the returned order's ``id``.

    Raises:
        OrderNotFoundError: If the order does not exist
        InvalidStatusTransitionError: If the order is already canceled
        OrderIdentifierConflictError: If the permanent ID retry collided
    """
    order = _lock_order(order_id)

    if order.is_canceled and status != OrderStatus.CANCELED:
        raise InvalidStatusTransitionError("Canceled orders cannot change status")

    if status == OrderStatus.ORDER_PLACED and not is_permanent_identifier(order.pk):
        order = _assign_permanent_identifier(order)
        if not note:
            note = 'Order approved and ID assigned'

    order.status = status
    update_fields = ['status', 'updated_at']
    if status == OrderStatus.CANCELED and not order.canceled_at:
        order.canceled_by = CanceledBy.STAFF
        order.canceled_at = timezone.now()
        order.cancel_reason = note or ''
        update_fields += ['canceled_by', 'canceled_at', 'cancel_reason']
    order.save(update_fields=update_fields)

    _record_status(order, status, note)
    return order


@transaction.atomic
def update_order_fields(order_id: str, **patch) -> Order:
    """
    Apply staff edits to an order.

    Changing the package, weight or distance re-prices the order unless a
    total is supplied explicitly. ``assigned_employee_ids`` replaces the
    assignment list.
    """
    order = _lock_order(order_id)
    assigned_employee_ids = patch.pop('assigned_employee_ids', None)
    paid_so_far = ZERO if order.is_paid else max(ZERO, order.total - order.balance)

    unknown = set(patch) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    for name, value in patch.items():
        setattr(order, name, value)

    if any(name in patch for name in PRICED_FIELDS):
        pricing = quote_price(
            service_package=order.service_package,
            weight=order.weight,
            distance=order.distance or 0,
        )
        order.loads = pricing.loads
        if 'total' not in patch and not order.is_internal:
            order.total = pricing.computed_price

    # a re-priced order keeps what was already paid towards it
    order.balance = ZERO if order.is_paid else max(ZERO, order.total - paid_so_far)
    order.save()

    if assigned_employee_ids is not None:
        order.assigned_employees.set(assigned_employee_ids)

    return order


@transaction.atomic
def record_payment(order_id: str, amount_paid: Decimal) -> dict:
    """
    Record money received at the counter for an order.

    The amount due is the outstanding balance, or the full total when no
    balance is left on an unpaid order. Paying less leaves the rest as the
    new balance; paying the amount due or more settles the order and the
    excess is returned as change.

    Returns:
        Dictionary with the updated order, amount_due, amount_paid, balance
        and change

    Raises:
        OrderNotFoundError: If the order does not exist
        InvalidPaymentError: If the amount is not positive, or the order is
            already paid or canceled
    """
    amount_paid = Decimal(amount_paid)
    if amount_paid <= ZERO:
        raise InvalidPaymentError("Payment amount must be greater than zero")

    order = _lock_order(order_id)
    if order.is_canceled:
        raise InvalidPaymentError("Canceled orders cannot take payments")
    if order.is_paid:
        raise InvalidPaymentError(f"Order {order.pk} is already paid")

    amount_due = order.balance if order.balance > ZERO else order.total
    balance = max(ZERO, amount_due - amount_paid)
    change = max(ZERO, amount_paid - amount_due)

    order.balance = balance
    order.is_paid = balance == ZERO
    order.save(update_fields=['balance', 'is_paid', 'updated_at'])

    logger.info(
        "Recorded payment of %s for order %s (balance %s)",
        amount_paid, order.pk, balance
    )
    return {
        'order': order,
        'amount_due': amount_due,
        'amount_paid': amount_paid,
        'balance': balance,
        'change': change,
    }


@transaction.atomic
def cancel_order_by_customer(order_id: str, customer: User) -> Order:
    """
    Cancel a customer's own order while it still awaits approval.

    Raises:
        OrderNotFoundError: If the order doesn't exist or isn't theirs
        OrderNotCancelableError: If the order is past 'Order Created'
    """
    try:
        order = Order.objects.select_for_update().get(pk=order_id, customer=customer)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order {order_id} not found")

    if order.status != OrderStatus.ORDER_CREATED:
        raise OrderNotCancelableError(
            "Only orders that have not been placed yet can be canceled"
        )

    order.status = OrderStatus.CANCELED
    order.canceled_by = CanceledBy.CUSTOMER
    order.canceled_at = timezone.now()
    order.save(update_fields=['status', 'canceled_by', 'canceled_at', 'updated_at'])

    _record_status(order, OrderStatus.CANCELED, 'Order canceled by customer')
    logger.info("Customer %s canceled order %s", customer.id, order.pk)
    return order


# =============================================================================
# Lookups
# =============================================================================

def get_customer_orders(customer: User):
    return (
        Order.objects
        .filter(customer=customer)
        .prefetch_related('status_history')
        .order_by('-created_at')
    )


def find_order_for_customer(order_id: str, name: str) -> Optional[Order]:
    """
    Public order tracking by identifier and customer name.

    The identifier must match exactly (case-insensitive); the name only
    needs to be contained in the customer name. Blank input finds nothing.
    """
    order_id = (order_id or '').strip()
    name = (name or '').strip()
    if not order_id or not name:
        return None

    return (
        Order.objects
        .filter(id__iexact=order_id, customer_name__icontains=name)
        .prefetch_related('status_history')
        .first()
    )
