"""Expense management service - Recording expenses and reimbursements."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db import transaction

from apps.accounts.models import User
from apps.finance.models import Expense, ReimbursementStatus, BUSINESS_ACCOUNT
from .exceptions import ExpenseNotFoundError

logger = logging.getLogger(__name__)


def create_expense(
    *,
    title: str,
    amount: Decimal,
    category: str = '',
    incurred_on: Optional[date] = None,
    expense_for: str = BUSINESS_ACCOUNT,
    created_by: Optional[User] = None,
) -> Expense:
    """
    Record an expense.

    Expenses paid by an owner start as pending reimbursement; expenses paid
    from the business account need none.

    Raises:
        ValueError: If ``expense_for`` is neither the business nor an owner
    """
    if expense_for != BUSINESS_ACCOUNT and expense_for not in settings.BUSINESS_OWNERS:
        raise ValueError(f"Expense must be for {BUSINESS_ACCOUNT} or one of the owners")

    fields = {
        'title': title,
        'amount': amount,
        'category': category,
        'expense_for': expense_for,
        'reimbursement_status': (
            ReimbursementStatus.NONE if expense_for == BUSINESS_ACCOUNT
            else ReimbursementStatus.PENDING
        ),
        'created_by': created_by,
    }
    if incurred_on is not None:
        fields['incurred_on'] = incurred_on

    return Expense.objects.create(**fields)


@transaction.atomic
def mark_expense_reimbursed(expense_id) -> Expense:
    """
    Settle an owner's out-of-pocket expense.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        ValueError: If the expense was not awaiting reimbursement
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense {expense_id} not found")

    if expense.reimbursement_status != ReimbursementStatus.PENDING:
        raise ValueError("Only pending expenses can be reimbursed")

    expense.reimbursement_status = ReimbursementStatus.REIMBURSED
    expense.save(update_fields=['reimbursement_status'])
    logger.info("Reimbursed %s to %s for expense %s", expense.amount, expense.expense_for, expense.id)
    return expense


def get_pending_reimbursements() -> dict:
    """Outstanding out-of-pocket totals per owner."""
    totals = {owner: Decimal('0.00') for owner in settings.BUSINESS_OWNERS}
    pending = Expense.objects.filter(reimbursement_status=ReimbursementStatus.PENDING)
    for expense in pending:
        if expense.expense_for in totals:
            totals[expense.expense_for] += expense.amount
    return totals
