from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid

# Expenses paid from the shop's own funds
BUSINESS_ACCOUNT = 'RKR'


class ReimbursementStatus(models.TextChoices):
    NONE = 'none', 'Not applicable'
    PENDING = 'pending', 'Pending'
    REIMBURSED = 'reimbursed', 'Reimbursed'


class Expense(models.Model):
    """
    Shop expense.

    ``expense_for`` is either the business account (``RKR``) or the name of
    the owner who paid out of pocket and awaits reimbursement.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    category = models.CharField(max_length=100, blank=True)
    incurred_on = models.DateField(default=timezone.localdate)
    expense_for = models.CharField(max_length=100, default=BUSINESS_ACCOUNT)
    reimbursement_status = models.CharField(
        max_length=20,
        choices=ReimbursementStatus.choices,
        default=ReimbursementStatus.NONE
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_expenses'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'expenses'
        ordering = ['-incurred_on', '-created_at']
        indexes = [
            models.Index(fields=['incurred_on'], name='expenses_incurre_3f1a2b_idx'),
            models.Index(fields=['expense_for', 'reimbursement_status'], name='expenses_expense_9d4c7e_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.amount}) - {self.expense_for}"

    @property
    def is_business_expense(self):
        """Counted against net income: paid by the shop or already reimbursed."""
        return (
            self.expense_for == BUSINESS_ACCOUNT
            or self.reimbursement_status == ReimbursementStatus.REIMBURSED
        )


class SalaryPayment(models.Model):
    """Recorded salary for one employee and day; overrides the computed salary."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_payments'
    )
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_paid = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'salary_payments'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'date'], name='unique_salary_per_employee_day'),
        ]

    def __str__(self):
        return f"{self.employee} {self.date}: {self.amount}"


class PeriodType(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    YEARLY = 'yearly', 'Yearly'
    CUSTOM = 'custom', 'All time'


class BankSavingsDeposit(models.Model):
    """
    Money set aside in the bank before net income is distributed.

    Every deposit is its own row so the history stays intact; the savings
    for a period are the sum of its deposits.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    period_type = models.CharField(max_length=20, choices=PeriodType.choices, default=PeriodType.CUSTOM)
    period_start = models.DateField()
    period_end = models.DateField()
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bank_savings_deposits'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bank_savings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['period_type', 'period_start'], name='bank_savin_period__5b8e21_idx'),
        ]

    def __str__(self):
        return f"{self.amount} ({self.get_period_type_display()} from {self.period_start})"


class IncomeDistribution(models.Model):
    """
    An owner's share of net income for one period, frozen when claimed.

    The figures are copied from the distribution at claim time so later
    orders or expenses do not change what the owner took.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_name = models.CharField(max_length=100)
    period_type = models.CharField(max_length=20, choices=PeriodType.choices)
    period_start = models.DateField()
    period_end = models.DateField()

    total_revenue = models.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = models.DecimalField(max_digits=14, decimal_places=2)
    net_income = models.DecimalField(max_digits=14, decimal_places=2)
    share_amount = models.DecimalField(max_digits=14, decimal_places=2)
    personal_expenses = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    net_share = models.DecimalField(max_digits=14, decimal_places=2)

    is_claimed = models.BooleanField(default=False)
    claimed_at = models.DateTimeField(null=True, blank=True)
    claimed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='claimed_distributions'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'income_distributions'
        ordering = ['-period_start', 'owner_name']
        constraints = [
            models.UniqueConstraint(
                fields=['owner_name', 'period_type', 'period_start'],
                name='unique_distribution_per_owner_period'
            ),
        ]

    def __str__(self):
        state = 'claimed' if self.is_claimed else 'unclaimed'
        return f"{self.owner_name} {self.period_type} {self.period_start}: {self.net_share} ({state})"


class ElectricityReading(models.Model):
    """Cumulative kWh on the shop's meter on a given day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    reading = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    reading_date = models.DateField(default=timezone.localdate)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='electricity_readings'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'electricity_readings'
        ordering = ['-reading_date', '-created_at']

    def __str__(self):
        return f"{self.reading} kWh on {self.reading_date}"
