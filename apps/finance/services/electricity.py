"""Electricity tracker - meter readings and the running power bill."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from django.conf import settings

from apps.accounts.models import User
from apps.finance.models import ElectricityReading
from .exceptions import ElectricityReadingNotFoundError
from .reports import business_start_date

ZERO = Decimal('0.00')


def record_reading(*, reading: Decimal, reading_date: Optional[date] = None,
                   created_by: Optional[User] = None) -> ElectricityReading:
    fields = {'reading': reading, 'created_by': created_by}
    if reading_date is not None:
        fields['reading_date'] = reading_date
    return ElectricityReading.objects.create(**fields)


def delete_reading(reading_id) -> None:
    deleted, _ = ElectricityReading.objects.filter(id=reading_id).delete()
    if not deleted:
        raise ElectricityReadingNotFoundError(f"Electricity reading {reading_id} not found")


def calculate_electricity_usage(
    readings: Iterable[ElectricityReading],
    price_per_kwh: Decimal,
    opened_on: Optional[date] = None,
) -> dict:
    """
    Consumption and cost since the shop opened.

    The meter is cumulative, so consumption is the latest reading. Days are
    counted from the opening date (or the first reading when no opening
    date is configured) to the latest reading.
    """
    readings = sorted(readings, key=lambda r: (r.reading_date, r.created_at))
    price_per_kwh = Decimal(price_per_kwh)
    if not readings:
        return {
            'total_days': 0,
            'consumption': ZERO,
            'price_per_kwh': price_per_kwh,
            'total_cost': ZERO,
            'latest_reading_date': None,
        }

    latest = readings[-1]
    start = opened_on or readings[0].reading_date
    consumption = latest.reading

    return {
        'total_days': max(0, (latest.reading_date - start).days),
        'consumption': consumption,
        'price_per_kwh': price_per_kwh,
        'total_cost': (consumption * price_per_kwh).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP),
        'latest_reading_date': latest.reading_date,
    }


def get_electricity_usage(price_per_kwh: Optional[Decimal] = None) -> dict:
    if price_per_kwh is None:
        price_per_kwh = settings.ELECTRICITY_PRICE_PER_KWH
    return calculate_electricity_usage(
        ElectricityReading.objects.all(),
        price_per_kwh,
        business_start_date(),
    )
