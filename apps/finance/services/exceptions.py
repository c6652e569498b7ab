"""Domain exceptions for finance app."""


class FinanceServiceError(Exception):
    """Base exception for all finance service errors."""
    pass


class ExpenseNotFoundError(FinanceServiceError):
    """Expense does not exist."""
    pass


class SalaryPaymentNotFoundError(FinanceServiceError):
    """Salary payment does not exist."""
    pass


class InvalidDistributionPeriodError(FinanceServiceError):
    """Distribution period must be monthly, yearly or all."""
    pass


class NotAnEmployeeError(FinanceServiceError):
    """Salary can only be recorded for employees."""
    pass


class DistributionNotAvailableError(FinanceServiceError):
    """Owner is unknown, not selected, or has no positive share to claim."""
    pass


class DistributionAlreadyClaimedError(FinanceServiceError):
    """Owner already claimed their share for this period."""
    pass


class ElectricityReadingNotFoundError(FinanceServiceError):
    """Electricity reading does not exist."""
    pass
