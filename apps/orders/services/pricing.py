"""
Pricing Engine
==============

Pure price and load calculations for laundry orders. Nothing here touches
the database, so the functions are safe to call from serializers, views
and services alike.

Pricing structure:
    - Base rate: 180 per kg-equivalent with a 7.5 kg floor, so every order
      is billed for at least one full load (7.5 * 180 = 1350).
    - Weight above 7.5 kg is billed proportionally, not rounded up to a
      whole extra load.
    - Transport: 10 per km, first km free.
      Package 1 has no transport, Package 2 is one-way, Package 3 is both
      pick up and delivery (billed twice).

Example::

    from apps.orders.services.pricing import PricingInput, compute_price

    result = compute_price(PricingInput('package2', weight=10, distance=5))
    result.computed_price   # Decimal('1840.00')
    result.loads            # 2
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Tuple

from apps.orders.constants import ServicePackage

LOAD_CAPACITY_KG = Decimal('7.5')
BASE_RATE_PER_KG = Decimal('180')
TRANSPORT_RATE_PER_KM = Decimal('10')
FREE_DISTANCE_KM = Decimal('1')

# Weight assumed when a quote is requested before the laundry is weighed
GUIDANCE_WEIGHT_KG = Decimal('1')

ZERO = Decimal('0')
TWOPLACES = Decimal('0.01')


def to_decimal(value, default=ZERO) -> Decimal:
    """Coerce numbers and numeric strings; anything unusable becomes ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            return default
    if not number.is_finite():
        return default
    return number


def _non_negative(value) -> Decimal:
    return max(ZERO, to_decimal(value))


@dataclass(frozen=True)
class PricingInput:
    """Package, weight (kg) and one-way distance (km) for a quote."""

    service_package: ServicePackage
    weight: Optional[Decimal] = None
    distance: Decimal = ZERO
    rate_per_kg: Decimal = BASE_RATE_PER_KG

    def __post_init__(self):
        # Raises ValueError for an unknown package
        object.__setattr__(self, 'service_package', ServicePackage(self.service_package))
        if self.weight is not None:
            object.__setattr__(self, 'weight', _non_negative(self.weight))
        object.__setattr__(self, 'distance', _non_negative(self.distance))
        object.__setattr__(self, 'rate_per_kg', to_decimal(self.rate_per_kg, BASE_RATE_PER_KG))


@dataclass(frozen=True)
class PricingResult:
    computed_price: Decimal
    loads: int
    base_cost: Decimal
    transport_fee: Decimal
    billable_distance: Decimal
    suggested_services: Tuple[str, ...] = ()


def compute_loads(weight) -> int:
    """
    Number of 7.5 kg loads for a weight, never less than one.

    Missing, zero and negative weights all bill as a single load.
    """
    weight = _non_negative(weight)
    return max(1, math.ceil(weight / LOAD_CAPACITY_KG))


def billable_distance(distance) -> Decimal:
    """Distance left after the free first kilometre."""
    return max(ZERO, _non_negative(distance) - FREE_DISTANCE_KM)


def transport_fee(service_package, distance) -> Decimal:
    package = ServicePackage(service_package)
    billable = billable_distance(distance)
    if package == ServicePackage.PACKAGE2:
        return billable * TRANSPORT_RATE_PER_KM
    if package == ServicePackage.PACKAGE3:
        return billable * TRANSPORT_RATE_PER_KM * 2
    return ZERO


def suggest_services(service_package, distance=ZERO) -> Tuple[str, ...]:
    """Advisory upsell text. Has no effect on the computed price."""
    package = ServicePackage(service_package)
    if package == ServicePackage.PACKAGE2:
        return (
            'Package 3 (All-In) covers both pick up and delivery for a hassle-free experience.',
        )
    if package == ServicePackage.PACKAGE1 and _non_negative(distance) > ZERO:
        return (
            'Package 1 has no transport. Choose Package 2 or Package 3 to have your laundry delivered.',
        )
    return ()


def compute_price(pricing_input: PricingInput) -> PricingResult:
    """
    Price an order.

    ``total = max(7.5, weight) * rate + transport``. An absent weight is a
    guidance-only quote and is treated as 1 kg, which the floor lifts to a
    full load anyway.
    """
    weight = pricing_input.weight
    if weight is None:
        weight = GUIDANCE_WEIGHT_KG

    base_cost = max(LOAD_CAPACITY_KG, weight) * pricing_input.rate_per_kg
    fee = transport_fee(pricing_input.service_package, pricing_input.distance)
    total = base_cost + fee

    return PricingResult(
        computed_price=total.quantize(TWOPLACES, rounding=ROUND_HALF_UP),
        loads=compute_loads(weight),
        base_cost=base_cost.quantize(TWOPLACES, rounding=ROUND_HALF_UP),
        transport_fee=fee.quantize(TWOPLACES, rounding=ROUND_HALF_UP),
        billable_distance=billable_distance(pricing_input.distance),
        suggested_services=suggest_services(
            pricing_input.service_package,
            pricing_input.distance,
        ),
    )


def split_into_loads(weight) -> list:
    """
    Distribute a weight over 7.5 kg loads, the last one holding the rest.

    >>> split_into_loads(Decimal('16'))
    [{'load': 1, 'weight': Decimal('7.5')}, {'load': 2, 'weight': Decimal('7.5')},
     {'load': 3, 'weight': Decimal('1.0')}]
    """
    remaining = _non_negative(weight)
    if remaining == ZERO:
        return []

    loads = []
    for number in range(1, math.ceil(remaining / LOAD_CAPACITY_KG) + 1):
        load_weight = min(remaining, LOAD_CAPACITY_KG)
        loads.append({'load': number, 'weight': load_weight})
        remaining -= load_weight
    return loads
