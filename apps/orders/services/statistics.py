"""Statistics service - Order dashboard totals."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from django.utils import timezone

from apps.orders.constants import OrderStatus, COMPLETED_STATUSES
from apps.orders.models import Order


def _order_day(order: Order) -> date:
    return timezone.localdate(order.created_at)


def _sum_totals(orders) -> Decimal:
    return sum((order.total or Decimal('0.00') for order in orders), Decimal('0.00'))


def calculate_order_statistics(orders: Iterable[Order], today: Optional[date] = None) -> dict:
    """
    Calculate the order dashboard totals.

    Counts and revenue only consider customer orders; internal orders
    (shop linens and the like) are free and would skew them. Loads include
    every order since internal orders still occupy the machines.

    This operation:
    1. Splits customer orders into paid and unpaid
    2. Sums paid revenue and the outstanding balance of unpaid orders
    3. Counts orders by completion state
    4. Computes today, yesterday and last-7-days figures

    Args:
        orders: Orders to summarize (usually the filtered admin list)
        today: Reference day in the shop's time zone, defaults to today

    Returns:
        Dictionary with statistics:
        - total_orders, completed_orders, pending_orders, canceled_orders
        - paid_orders, unpaid_orders
        - total_revenue, paid_revenue, pending_revenue: Decimal
        - today_orders, today_revenue, yesterday_revenue
        - week_orders, week_revenue
        - total_loads, today_loads

    Example:
        >>> stats = calculate_order_statistics(Order.objects.all())
        >>> stats['paid_revenue']
        Decimal('4050.00')
    """
    today = today or timezone.localdate()
    yesterday = today - timedelta(days=1)
    week_start = today - timedelta(days=7)

    all_orders = list(orders)
    customer_orders = [order for order in all_orders if not order.is_internal]

    paid = [order for order in customer_orders if order.is_paid]
    unpaid = [order for order in customer_orders if not order.is_paid]

    paid_revenue = _sum_totals(paid)
    pending_revenue = sum(
        (order.outstanding_balance() for order in unpaid),
        Decimal('0.00')
    )

    completed = [o for o in customer_orders if o.status in COMPLETED_STATUSES]
    canceled = [o for o in customer_orders if o.status == OrderStatus.CANCELED]

    today_orders = [o for o in customer_orders if _order_day(o) == today]
    yesterday_orders = [o for o in customer_orders if _order_day(o) == yesterday]
    week_orders = [o for o in customer_orders if _order_day(o) >= week_start]

    return {
        'total_orders': len(customer_orders),
        'total_revenue': paid_revenue + pending_revenue,
        'paid_revenue': paid_revenue,
        'pending_revenue': pending_revenue,
        'completed_orders': len(completed),
        'pending_orders': len(customer_orders) - len(completed) - len(canceled),
        'canceled_orders': len(canceled),
        'paid_orders': len(paid),
        'unpaid_orders': len(unpaid),
        'today_orders': len(today_orders),
        'today_revenue': _sum_totals(o for o in today_orders if o.is_paid),
        'yesterday_revenue': _sum_totals(o for o in yesterday_orders if o.is_paid),
        'week_orders': len(week_orders),
        'week_revenue': _sum_totals(week_orders),
        'total_loads': sum(order.loads or 0 for order in all_orders),
        'today_loads': sum(order.loads or 0 for order in all_orders if _order_day(order) == today),
    }
