"""Customer account lifecycle: sign-up, login and self-service deletion."""

import logging

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User, UserRole
from .exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
    StaffAccountDeletionError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def register_customer(
    *,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    contact_number: str = "",
) -> User:
    """
    Open a customer account.

    Employees and admins are set up by the owners in the Django admin, so
    sign-up always yields the customer role.

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyRegisteredError("An account with this email already exists")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            contact_number=contact_number,
            role=UserRole.CUSTOMER,
        )
    except IntegrityError as e:
        # Lost a race with a concurrent sign-up for the same address
        raise EmailAlreadyRegisteredError("An account with this email already exists") from e

    logger.info("Registered customer %s", user.id)
    return user


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check email and password and stamp ``last_login``.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password wrong
        InactiveAccountError: If the account was deactivated
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email)
        .first()
    )
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user


@transaction.atomic
def delete_customer_account(user: User, password: str) -> int:
    """
    Delete a customer together with the orders they submitted online.

    Orders keep no meaning without their customer; status history goes with
    them. Walk-in orders entered by staff have no customer and are untouched.

    Returns:
        Number of orders deleted

    Raises:
        InvalidCredentialsError: If the password does not match
        StaffAccountDeletionError: If the account belongs to shop staff
    """
    if user.is_shop_staff:
        raise StaffAccountDeletionError("Staff accounts are removed by the shop owners")

    if not user.check_password(password):
        raise InvalidCredentialsError("Password is incorrect")

    orders = user.orders.all()
    order_count = orders.count()
    orders.delete()
    user_id = user.id
    user.delete()

    logger.info("Customer %s deleted their account", user_id)
    return order_count
