"""Distribution management service - Bank savings deposits and owner claims."""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.finance.models import (
    BankSavingsDeposit,
    IncomeDistribution,
    Expense,
    SalaryPayment,
    PeriodType,
)
from apps.orders.models import Order
from .exceptions import (
    InvalidDistributionPeriodError,
    DistributionNotAvailableError,
    DistributionAlreadyClaimedError,
)
from .reports import (
    DISTRIBUTION_PERIODS,
    PERIOD_TYPES,
    ZERO,
    calculate_distribution,
    period_bounds,
)

logger = logging.getLogger(__name__)

# All-time deposits and claims are dated from here
ALL_TIME_START = date(2000, 1, 1)


def _check_period(period: str):
    if period not in DISTRIBUTION_PERIODS:
        raise InvalidDistributionPeriodError(
            f"Unknown period '{period}'. Use one of: {', '.join(DISTRIBUTION_PERIODS)}"
        )


def _stored_bounds(period: str, today: date):
    """Period type and dates under which deposits and claims are stored."""
    start, end, _ = period_bounds(period, today)
    if start is None:
        return PeriodType.CUSTOM, ALL_TIME_START, today
    return PERIOD_TYPES[period], start, end


# =============================================================================
# Bank savings
# =============================================================================

def record_bank_savings_deposit(
    *,
    amount: Decimal,
    period: str = 'all',
    created_by: Optional[User] = None,
    today: Optional[date] = None,
) -> BankSavingsDeposit:
    """
    Put money aside in the bank.

    Each deposit is a new row; nothing is overwritten. Deposits made from the
    all-time view are stored as custom-period deposits.

    Raises:
        ValueError: If the amount is not positive
        InvalidDistributionPeriodError: If period is unknown
    """
    _check_period(period)
    amount = Decimal(amount)
    if amount <= ZERO:
        raise ValueError("Deposit amount must be greater than zero")

    today = today or timezone.localdate()
    period_type, start, end = _stored_bounds(period, today)

    deposit = BankSavingsDeposit.objects.create(
        amount=amount,
        period_type=period_type,
        period_start=start,
        period_end=end,
        created_by=created_by,
    )
    logger.info("Bank savings deposit of %s (%s)", amount, period_type)
    return deposit


def get_bank_savings_total(period: str = 'all', today: Optional[date] = None) -> Decimal:
    """
    Savings held back from a period's distribution.

    The all-time total is every deposit ever made. A month or year only
    counts deposits made for exactly that month or year.
    """
    _check_period(period)
    deposits = BankSavingsDeposit.objects.all()
    if period != 'all':
        period_type, start, end = _stored_bounds(period, today or timezone.localdate())
        deposits = deposits.filter(period_type=period_type, period_start=start, period_end=end)

    return deposits.aggregate(total=Sum('amount'))['total'] or ZERO


def get_bank_savings_history(period_type: Optional[str] = None):
    deposits = BankSavingsDeposit.objects.select_related('created_by')
    if period_type:
        deposits = deposits.filter(period_type=period_type)
    return deposits


# =============================================================================
# Owner distributions
# =============================================================================

def get_distribution_records(period: str, today: Optional[date] = None):
    """Stored owner distributions for the current month, year or all time."""
    _check_period(period)
    period_type, start, _ = _stored_bounds(period, today or timezone.localdate())
    records = IncomeDistribution.objects.filter(period_type=period_type)
    if period_type != PeriodType.CUSTOM:
        records = records.filter(period_start=start)
    return records


def summarize_claims(records: Iterable[IncomeDistribution]) -> dict:
    """Claimed and unclaimed counts and net share totals."""
    records = list(records)
    claimed = [record for record in records if record.is_claimed]
    unclaimed = [record for record in records if not record.is_claimed]
    return {
        'total_claimed': len(claimed),
        'total_unclaimed': len(unclaimed),
        'total_claimed_amount': sum((record.net_share for record in claimed), ZERO),
        'total_unclaimed_amount': sum((record.net_share for record in unclaimed), ZERO),
    }


def build_distribution(
    period: str = 'monthly',
    selected_owners: Optional[Iterable[str]] = None,
    today: Optional[date] = None,
) -> dict:
    """
    Distribution for a period from stored orders, expenses and savings.

    Adds the stored bank savings, each owner's claim state and a claims
    summary to ``calculate_distribution``'s result.
    """
    _check_period(period)
    today = today or timezone.localdate()
    records = list(get_distribution_records(period, today))
    bank_savings = get_bank_savings_total(period, today)

    data = calculate_distribution(
        Order.objects.filter(is_paid=True),
        Expense.objects.all(),
        SalaryPayment.objects.all(),
        period=period,
        selected_owners=selected_owners,
        bank_savings=bank_savings,
        claims=records,
        today=today,
    )
    data['bank_savings'] = bank_savings
    data['claims_summary'] = summarize_claims(records)
    return data


@transaction.atomic
def claim_distribution(
    *,
    owner: str,
    period: str = 'monthly',
    claimed_by: Optional[User] = None,
    selected_owners: Optional[Iterable[str]] = None,
    today: Optional[date] = None,
) -> IncomeDistribution:
    """
    Record that an owner took their share for the period.

    The share is computed the same way the distribution view shows it and
    stored with the period's revenue, expenses and net income.

    Raises:
        InvalidDistributionPeriodError: If period is unknown
        DistributionNotAvailableError: If the owner is unknown, disabled, not
            selected, or their share is not positive
        DistributionAlreadyClaimedError: If the share was already claimed
    """
    _check_period(period)
    today = today or timezone.localdate()

    if owner not in settings.BUSINESS_OWNERS:
        raise DistributionNotAvailableError(f"{owner} is not an owner")

    data = build_distribution(period, selected_owners=selected_owners, today=today)
    entry = next(item for item in data['distribution'] if item['name'] == owner)
    if entry['is_claimed']:
        raise DistributionAlreadyClaimedError(f"{owner} already claimed the {data['period']} distribution")
    if entry['share'] <= ZERO:
        raise DistributionNotAvailableError(f"No distribution available for {owner}")

    period_type, start, end = _stored_bounds(period, today)
    record = get_distribution_records(period, today).select_for_update().filter(owner_name=owner).first()
    if record is None:
        record = IncomeDistribution(owner_name=owner, period_type=period_type, period_start=start)

    record.period_end = end
    record.total_revenue = data['total_revenue']
    record.total_expenses = data['total_expenses']
    record.net_income = data['net_income']
    record.share_amount = entry['share']
    record.personal_expenses = entry['personal_expenses']
    record.net_share = entry['net_share']
    record.is_claimed = True
    record.claimed_at = timezone.now()
    record.claimed_by = claimed_by
    record.save()

    logger.info("%s claimed %s for %s", owner, record.net_share, data['period'])
    return record
