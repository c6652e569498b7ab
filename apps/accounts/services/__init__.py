"""
Accounts services.

- Customer self-registration and account deletion
- Email/password login for customers and shop staff
"""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    StaffAccountDeletionError,
)
from .customer_accounts import (
    register_customer,
    authenticate_user,
    delete_customer_account,
)

__all__ = [
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'StaffAccountDeletionError',
    'register_customer',
    'authenticate_user',
    'delete_customer_account',
]
