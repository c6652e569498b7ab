"""Promo management service - Scheduling and activating promos."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.promos.models import Promo
from .exceptions import PromoNotFoundError, InvalidPromoPeriodError

logger = logging.getLogger(__name__)


def get_active_promo(now: Optional[datetime] = None) -> Optional[Promo]:
    """
    Promo to announce: active and not yet ended.

    Upcoming promos count, so the banner can go up before the promo starts.
    When several qualify, the one starting latest wins.
    """
    now = now or timezone.now()
    return (
        Promo.objects
        .filter(is_active=True, end_date__gte=now)
        .order_by('-start_date')
        .first()
    )


def get_running_promo(now: Optional[datetime] = None) -> Optional[Promo]:
    """Active promo whose period includes ``now``; its price applies to orders."""
    now = now or timezone.now()
    return (
        Promo.objects
        .filter(is_active=True, start_date__lte=now, end_date__gte=now)
        .order_by('-start_date')
        .first()
    )


def _validate_period(start_date, end_date):
    if end_date <= start_date:
        raise InvalidPromoPeriodError("Promo end date must be after its start date")


@transaction.atomic
def create_promo(
    *,
    start_date: datetime,
    end_date: datetime,
    price_per_load: Decimal,
    display_date: str,
    is_active: bool = False,
    created_by: Optional[User] = None,
) -> Promo:
    """
    Schedule a promo.

    Creating a promo as active deactivates every other promo.

    Raises:
        InvalidPromoPeriodError: If the promo ends before it starts
    """
    _validate_period(start_date, end_date)

    promo = Promo.objects.create(
        start_date=start_date,
        end_date=end_date,
        price_per_load=price_per_load,
        display_date=display_date,
        is_active=False,
        created_by=created_by,
    )
    if is_active:
        promo = activate_promo(promo.id)
    return promo


@transaction.atomic
def update_promo(promo_id: UUID, **changes) -> Promo:
    """
    Update promo fields.

    Setting ``is_active`` to True goes through ``activate_promo`` so the
    single-active-promo rule holds.
    """
    try:
        promo = Promo.objects.select_for_update().get(id=promo_id)
    except Promo.DoesNotExist:
        raise PromoNotFoundError(f"Promo {promo_id} not found")

    activate = changes.pop('is_active', None)
    for name, value in changes.items():
        setattr(promo, name, value)
    _validate_period(promo.start_date, promo.end_date)

    if activate is False:
        promo.is_active = False
    promo.save()

    if activate:
        promo = activate_promo(promo.id)
    return promo


@transaction.atomic
def activate_promo(promo_id: UUID) -> Promo:
    """
    Make a promo the only active one.

    Raises:
        PromoNotFoundError: If promo doesn't exist
    """
    try:
        promo = Promo.objects.select_for_update().get(id=promo_id)
    except Promo.DoesNotExist:
        raise PromoNotFoundError(f"Promo {promo_id} not found")

    deactivated = Promo.objects.exclude(id=promo_id).filter(is_active=True).update(is_active=False)
    promo.is_active = True
    promo.save(update_fields=['is_active', 'updated_at'])

    logger.info("Activated promo %s (%d other promo(s) deactivated)", promo_id, deactivated)
    return promo


def delete_promo(promo_id: UUID) -> None:
    deleted, _ = Promo.objects.filter(id=promo_id).delete()
    if not deleted:
        raise PromoNotFoundError(f"Promo {promo_id} not found")
