"""Reports service - Financial totals and net income distribution."""

import calendar
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from django.conf import settings
from django.utils import timezone

from apps.finance.models import Expense, SalaryPayment, ReimbursementStatus, PeriodType
from apps.orders.models import Order
from .exceptions import InvalidDistributionPeriodError

TWOPLACES = Decimal('0.01')
ZERO = Decimal('0.00')

DISTRIBUTION_PERIODS = ('monthly', 'yearly', 'all')

# Claims and bank deposits for "all" are stored under the custom period type
PERIOD_TYPES = {
    'monthly': PeriodType.MONTHLY,
    'yearly': PeriodType.YEARLY,
    'all': PeriodType.CUSTOM,
}


def _money(value) -> Decimal:
    return Decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _sum(values) -> Decimal:
    return sum((value or ZERO for value in values), ZERO)


def calculate_financial_totals(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    salary_payments: Iterable[SalaryPayment],
) -> dict:
    """
    Revenue from paid orders against all expenses and salaries.

    Returns:
        Dictionary with total_revenue, regular_expenses, employee_salaries,
        total_expenses, net_income and paid_orders_count.
    """
    paid_orders = [order for order in orders if order.is_paid]
    total_revenue = _sum(order.total for order in paid_orders)
    regular_expenses = _sum(expense.amount for expense in expenses)
    employee_salaries = _sum(payment.amount for payment in salary_payments)
    total_expenses = regular_expenses + employee_salaries

    return {
        'total_revenue': total_revenue,
        'regular_expenses': regular_expenses,
        'employee_salaries': employee_salaries,
        'total_expenses': total_expenses,
        'net_income': total_revenue - total_expenses,
        'paid_orders_count': len(paid_orders),
    }


def calculate_business_metrics(
    orders: Iterable[Order],
    business_start_date: Optional[date],
    today: Optional[date] = None,
) -> dict:
    """Loads, weight and order counts, plus days since opening (inclusive)."""
    today = today or timezone.localdate()
    orders = list(orders)

    days = 0
    if business_start_date:
        days = (today - business_start_date).days + 1

    return {
        'total_loads': sum(order.loads or 0 for order in orders),
        'total_weight': _sum(order.weight for order in orders),
        'total_orders': len(orders),
        'total_days_of_operation': days,
    }


def period_bounds(period: str, today: date):
    if period == 'monthly':
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day), today.strftime('%B %Y')
    if period == 'yearly':
        return date(today.year, 1, 1), date(today.year, 12, 31), str(today.year)
    return None, None, 'All Time'


def _order_day(order: Order) -> date:
    return timezone.localdate(order.created_at)


def calculate_distribution(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    salary_payments: Iterable[SalaryPayment],
    period: str = 'monthly',
    owners: Optional[list] = None,
    selected_owners: Optional[Iterable[str]] = None,
    bank_savings: Decimal = ZERO,
    claims: Optional[Iterable] = None,
    today: Optional[date] = None,
) -> dict:
    """
    Split net income equally between the selected owners.

    Only business expenses count against net income: expenses paid by the
    shop (``RKR``) and reimbursed personal expenses. Pending personal
    expenses are reported per owner and deducted from that owner's share.
    Disabled owners never receive a share.

    Args:
        orders: Orders to draw revenue from (only paid ones count)
        period: 'monthly' (current month), 'yearly' (current year) or 'all'
        owners: Owner names, defaults to ``settings.BUSINESS_OWNERS``
        selected_owners: Owners sharing this distribution, defaults to all
            enabled owners
        bank_savings: Amount kept in the bank before distribution
        claims: Stored IncomeDistribution rows for this period; each owner's
            entry reports whether their share was claimed

    Returns:
        Dictionary with revenue, expenses, net income, personal expenses,
        the amount available after savings, the per-owner distribution and
        the period label and bounds.

    Raises:
        InvalidDistributionPeriodError: If period is unknown
    """
    if period not in DISTRIBUTION_PERIODS:
        raise InvalidDistributionPeriodError(
            f"Unknown period '{period}'. Use one of: {', '.join(DISTRIBUTION_PERIODS)}"
        )

    today = today or timezone.localdate()
    owners = list(owners if owners is not None else settings.BUSINESS_OWNERS)
    disabled = set(settings.DISABLED_OWNERS)
    enabled = [owner for owner in owners if owner not in disabled]
    if selected_owners is None:
        selected = enabled
    else:
        selected = [owner for owner in enabled if owner in set(selected_owners)]

    orders = list(orders)
    expenses = list(expenses)
    salary_payments = list(salary_payments)

    start, end, label = period_bounds(period, today)
    if start is not None:
        orders = [order for order in orders if start <= _order_day(order) <= end]
        expenses = [expense for expense in expenses if start <= expense.incurred_on <= end]
        salary_payments = [payment for payment in salary_payments if start <= payment.date <= end]
    else:
        start = min((_order_day(order) for order in orders), default=today)
        end = today

    total_revenue = _sum(order.total for order in orders if order.is_paid)
    business_expenses = _sum(expense.amount for expense in expenses if expense.is_business_expense)
    employee_salaries = _sum(payment.amount for payment in salary_payments)
    total_expenses = business_expenses + employee_salaries
    net_income = total_revenue - total_expenses

    personal_expenses = {owner: ZERO for owner in owners}
    for expense in expenses:
        if (expense.reimbursement_status == ReimbursementStatus.PENDING
                and expense.expense_for in personal_expenses):
            personal_expenses[expense.expense_for] += expense.amount

    selected_count = len(selected) or 1
    share = _money(net_income / selected_count)
    percentage = _money(Decimal(100) / selected_count)

    claims_by_owner = {claim.owner_name: claim for claim in (claims or ())}

    distribution = []
    for owner in owners:
        is_selected = owner in selected
        claim = claims_by_owner.get(owner)
        distribution.append({
            'name': owner,
            'share': share if is_selected else ZERO,
            'percentage': percentage if is_selected else ZERO,
            'personal_expenses': personal_expenses[owner],
            'net_share': share - personal_expenses[owner] if is_selected else ZERO,
            'is_selected': is_selected,
            'is_disabled': owner in disabled,
            'is_claimed': bool(claim and claim.is_claimed),
            'claimed_at': claim.claimed_at if claim else None,
            'distribution_id': claim.id if claim else None,
        })

    return {
        'total_revenue': total_revenue,
        'total_expenses': total_expenses,
        'net_income': net_income,
        'total_personal_expenses': _sum(personal_expenses.values()),
        'available_for_distribution': net_income - _money(bank_savings),
        'distribution': distribution,
        'period': label,
        'start_date': start,
        'end_date': end,
    }


def business_start_date() -> Optional[date]:
    value = settings.BUSINESS_START_DATE
    if not value:
        return None
    return datetime.strptime(value, '%Y-%m-%d').date()


def get_finance_overview(date_from: Optional[date] = None, date_to: Optional[date] = None) -> dict:
    """
    Finance dashboard totals and business metrics for a date range.

    Open ends of the range are unbounded.
    """
    orders = Order.objects.all()
    expenses = Expense.objects.all()
    salary_payments = SalaryPayment.objects.all()

    if date_from:
        orders = orders.filter(created_at__date__gte=date_from)
        expenses = expenses.filter(incurred_on__gte=date_from)
        salary_payments = salary_payments.filter(date__gte=date_from)
    if date_to:
        orders = orders.filter(created_at__date__lte=date_to)
        expenses = expenses.filter(incurred_on__lte=date_to)
        salary_payments = salary_payments.filter(date__lte=date_to)

    orders = list(orders)
    overview = calculate_financial_totals(orders, expenses, salary_payments)
    overview.update(calculate_business_metrics(orders, business_start_date()))
    return overview
