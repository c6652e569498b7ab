"""
Finance services - Business logic layer.

This package contains all business operations for the finance app:
- Expense recording and owner reimbursements
- Employee salary from handled loads
- Financial totals, business metrics and net income distribution
- Bank savings deposits and owner distribution claims
- Electricity meter readings and the power bill
"""

# Expense Management
from .expense_management import (
    create_expense,
    mark_expense_reimbursed,
    get_pending_reimbursements,
)

# Salary
from .salary import (
    calculate_employee_loads,
    calculate_employee_salary,
    calculate_actual_total_salary,
    group_orders_by_date,
    get_salary_summary,
    record_salary_payment,
    mark_salary_paid,
)

# Reports
from .reports import (
    calculate_financial_totals,
    calculate_business_metrics,
    calculate_distribution,
    get_finance_overview,
)

# Distribution Management
from .distribution_management import (
    record_bank_savings_deposit,
    get_bank_savings_total,
    get_bank_savings_history,
    get_distribution_records,
    summarize_claims,
    build_distribution,
    claim_distribution,
)

# Electricity
from .electricity import (
    record_reading,
    delete_reading,
    calculate_electricity_usage,
    get_electricity_usage,
)

# Domain Exceptions
from .exceptions import (
    FinanceServiceError,
    ExpenseNotFoundError,
    SalaryPaymentNotFoundError,
    InvalidDistributionPeriodError,
    NotAnEmployeeError,
    DistributionNotAvailableError,
    DistributionAlreadyClaimedError,
    ElectricityReadingNotFoundError,
)

__all__ = [
    # Expense Management
    'create_expense',
    'mark_expense_reimbursed',
    'get_pending_reimbursements',
    # Salary
    'calculate_employee_loads',
    'calculate_employee_salary',
    'calculate_actual_total_salary',
    'group_orders_by_date',
    'get_salary_summary',
    'record_salary_payment',
    'mark_salary_paid',
    # Reports
    'calculate_financial_totals',
    'calculate_business_metrics',
    'calculate_distribution',
    'get_finance_overview',
    # Distribution Management
    'record_bank_savings_deposit',
    'get_bank_savings_total',
    'get_bank_savings_history',
    'get_distribution_records',
    'summarize_claims',
    'build_distribution',
    'claim_distribution',
    # Electricity
    'record_reading',
    'delete_reading',
    'calculate_electricity_usage',
    'get_electricity_usage',
    # Exceptions
    'FinanceServiceError',
    'ExpenseNotFoundError',
    'SalaryPaymentNotFoundError',
    'InvalidDistributionPeriodError',
    'NotAnEmployeeError',
    'DistributionNotAvailableError',
    'DistributionAlreadyClaimedError',
    'ElectricityReadingNotFoundError',
]
