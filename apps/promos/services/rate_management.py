"""Service rate management - The published price list."""

from decimal import Decimal
from uuid import UUID

from django.db.models import Case, IntegerField, Value, When

from apps.promos.models import ServiceRate, RateType
from .exceptions import ServiceRateNotFoundError


def get_service_rates():
    """Active rates, services before delivery fees."""
    return (
        ServiceRate.objects
        .filter(is_active=True)
        .annotate(type_rank=Case(
            When(type=RateType.SERVICE, then=Value(0)),
            default=Value(1),
            output_field=IntegerField(),
        ))
        .order_by('type_rank', 'name')
    )


def update_service_rate(rate_id: UUID, price: Decimal) -> ServiceRate:
    """
    Change a published price.

    Raises:
        ServiceRateNotFoundError: If rate doesn't exist
    """
    try:
        rate = ServiceRate.objects.get(id=rate_id)
    except ServiceRate.DoesNotExist:
        raise ServiceRateNotFoundError(f"Service rate {rate_id} not found")

    rate.price = price
    rate.save(update_fields=['price', 'updated_at'])
    return rate
