"""
Salary service - Employee pay from handled loads.

Employees earn a fixed amount per load of customer laundry they handled
plus a flat bonus per internal order. A load shared by several employees
is split evenly between them. Only orders whose washing is done count.
"""

import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.finance.models import SalaryPayment
from apps.orders.constants import SALARY_ELIGIBLE_STATUSES
from apps.orders.models import Order
from .exceptions import SalaryPaymentNotFoundError, NotAnEmployeeError

logger = logging.getLogger(__name__)

TWOPLACES = Decimal('0.01')


def _assigned_ids(order: Order) -> list:
    # Uses the prefetch cache when the caller prefetched assigned_employees
    return [employee.id for employee in order.assigned_employees.all()]


def calculate_employee_loads(orders: Iterable[Order], employee: User, employees: list) -> Decimal:
    """
    Customer loads credited to an employee, rounded to 2 decimals.

    Orders without any assigned employee are credited to the only employee
    when the shop has exactly one.
    """
    sole_employee = len(employees) == 1 and employees[0].id == employee.id
    loads = Decimal('0')

    for order in orders:
        if order.status not in SALARY_ELIGIBLE_STATUSES or order.is_internal:
            continue

        assigned = _assigned_ids(order)
        if assigned:
            if employee.id in assigned:
                loads += Decimal(order.loads) / len(assigned)
        elif sole_employee:
            loads += Decimal(order.loads)

    return loads.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def calculate_employee_salary(orders: Iterable[Order], employee: User, employees: list) -> Decimal:
    """Loads times the per-load rate, plus the bonus for each internal order."""
    orders = list(orders)
    loads = calculate_employee_loads(orders, employee, employees)

    internal_orders = [
        order for order in orders
        if order.is_internal and employee.id in _assigned_ids(order)
    ]

    salary = loads * settings.SALARY_PER_LOAD + len(internal_orders) * settings.INTERNAL_ORDER_BONUS
    return salary.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def calculate_actual_total_salary(
    day: date,
    orders: Iterable[Order],
    employees: list,
    payments: Iterable[SalaryPayment],
) -> Decimal:
    """
    Salary cost of one day.

    A recorded payment replaces the computed salary of that employee.
    """
    orders = list(orders)
    recorded = {
        payment.employee_id: payment.amount
        for payment in payments
        if payment.date == day
    }

    total = Decimal('0.00')
    for employee in employees:
        if employee.id in recorded:
            total += recorded[employee.id]
        else:
            total += calculate_employee_salary(orders, employee, employees)
    return total


def group_orders_by_date(orders: Iterable[Order]) -> "OrderedDict[date, list]":
    """Salary-eligible orders keyed by the local calendar day they were created, newest first."""
    grouped = {}
    for order in orders:
        if order.status not in SALARY_ELIGIBLE_STATUSES:
            continue
        day = timezone.localdate(order.created_at)
        grouped.setdefault(day, []).append(order)

    return OrderedDict(sorted(grouped.items(), key=lambda item: item[0], reverse=True))


def get_salary_summary(start: date, end: date, employees: Optional[list] = None) -> list:
    """
    Per-day salary breakdown for the salary page.

    Returns:
        List of days (newest first), each with:
        - date, total_loads, total_salary (recorded payments applied)
        - employees: list of {employee, loads, salary, payment}
    """
    if employees is None:
        employees = list(User.objects.employees())

    orders = (
        Order.objects
        .filter(
            created_at__date__gte=start,
            created_at__date__lte=end,
            status__in=SALARY_ELIGIBLE_STATUSES,
        )
        .prefetch_related('assigned_employees')
    )
    payments = list(SalaryPayment.objects.filter(date__gte=start, date__lte=end))

    summary = []
    for day, day_orders in group_orders_by_date(orders).items():
        day_payments = [payment for payment in payments if payment.date == day]
        by_employee = {payment.employee_id: payment for payment in day_payments}

        rows = []
        for employee in employees:
            rows.append({
                'employee': employee,
                'loads': calculate_employee_loads(day_orders, employee, employees),
                'salary': calculate_employee_salary(day_orders, employee, employees),
                'payment': by_employee.get(employee.id),
            })

        summary.append({
            'date': day,
            'total_loads': sum(order.loads for order in day_orders if not order.is_internal),
            'total_salary': calculate_actual_total_salary(day, day_orders, employees, day_payments),
            'employees': rows,
        })

    return summary


@transaction.atomic
def record_salary_payment(*, employee: User, day: date, amount: Decimal, is_paid: bool = False) -> SalaryPayment:
    """
    Record (or correct) the salary of an employee for a day.

    Raises:
        NotAnEmployeeError: If the user is not an employee
    """
    if employee.role != UserRole.EMPLOYEE:
        raise NotAnEmployeeError(f"{employee.get_display_name()} is not an employee")

    payment, created = SalaryPayment.objects.update_or_create(
        employee=employee,
        date=day,
        defaults={'amount': amount, 'is_paid': is_paid},
    )
    logger.info(
        "%s salary of %s for %s on %s",
        'Recorded' if created else 'Updated', amount, employee.id, day
    )
    return payment


def mark_salary_paid(payment_id, is_paid: bool = True) -> SalaryPayment:
    """
    Raises:
        SalaryPaymentNotFoundError: If payment doesn't exist
    """
    try:
        payment = SalaryPayment.objects.get(id=payment_id)
    except SalaryPayment.DoesNotExist:
        raise SalaryPaymentNotFoundError(f"Salary payment {payment_id} not found")

    payment.is_paid = is_paid
    payment.save(update_fields=['is_paid', 'updated_at'])
    return payment
