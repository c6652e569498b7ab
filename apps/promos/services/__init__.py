"""
Promos services - Business logic layer.

- Promo scheduling and activation (one active promo at a time)
- Service rate price list
"""

from .promo_management import (
    get_active_promo,
    get_running_promo,
    create_promo,
    update_promo,
    activate_promo,
    delete_promo,
)

from .rate_management import (
    get_service_rates,
    update_service_rate,
)

from .exceptions import (
    PromosServiceError,
    PromoNotFoundError,
    InvalidPromoPeriodError,
    ServiceRateNotFoundError,
)

__all__ = [
    'get_active_promo',
    'get_running_promo',
    'create_promo',
    'update_promo',
    'activate_promo',
    'delete_promo',
    'get_service_rates',
    'update_service_rate',
    'PromosServiceError',
    'PromoNotFoundError',
    'InvalidPromoPeriodError',
    'ServiceRateNotFoundError',
]
