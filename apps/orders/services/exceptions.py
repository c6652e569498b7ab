"""Domain exceptions for orders app."""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Order does not exist or belongs to another customer."""
    pass


class OrderIdentifierConflictError(OrdersServiceError):
    """Every allocated order ID collided with a concurrent insert."""
    pass


class DailyOrderLimitError(OrdersServiceError):
    """Customer already submitted the maximum number of orders today."""
    pass


class OrderNotCancelableError(OrdersServiceError):
    """Order has progressed past the point where it can be canceled."""
    pass


class InvalidStatusTransitionError(OrdersServiceError):
    """Status change is not allowed from the order's current status."""
    pass


class InvalidPaymentError(OrdersServiceError):
    """Payment amount is not positive or the order cannot take payments."""
    pass
