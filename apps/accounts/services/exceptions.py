"""Domain exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError):
    """Another account already uses this email."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Email or password is wrong."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Account was deactivated by the shop."""
    pass


class StaffAccountDeletionError(AccountsServiceError):
    """Employee and admin accounts are removed by the owners, not by themselves."""
    pass
