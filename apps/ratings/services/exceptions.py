"""Domain exceptions for ratings app."""


class RatingsServiceError(Exception):
    """Base exception for all ratings service errors."""
    pass


class RatingOrderNotFoundError(RatingsServiceError):
    """Order does not exist."""
    pass


class InvalidRatingError(RatingsServiceError):
    """Rating must be between 1 and 5."""
    pass


class UnauthorizedRatingError(RatingsServiceError):
    """Only the customer who placed the order can rate it."""
    pass


class OrderNotCompletedError(RatingsServiceError):
    """Order has not been completed yet."""
    pass


class DuplicateRatingError(RatingsServiceError):
    """Order was already rated."""
    pass
