"""Domain exceptions for promos app."""


class PromosServiceError(Exception):
    """Base exception for all promos service errors."""
    pass


class PromoNotFoundError(PromosServiceError):
    """Promo does not exist."""
    pass


class InvalidPromoPeriodError(PromosServiceError):
    """Promo must end after it starts."""
    pass


class ServiceRateNotFoundError(PromosServiceError):
    """Service rate does not exist."""
    pass
