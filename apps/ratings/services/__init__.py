"""
Ratings services - Business logic layer.

- Customer ratings of completed orders
- Rating statistics
"""

from .rating_management import (
    create_rating,
    get_ratings,
)

from .statistics import (
    get_rating_statistics,
)

from .exceptions import (
    RatingsServiceError,
    RatingOrderNotFoundError,
    InvalidRatingError,
    UnauthorizedRatingError,
    OrderNotCompletedError,
    DuplicateRatingError,
)

__all__ = [
    'create_rating',
    'get_ratings',
    'get_rating_statistics',
    'RatingsServiceError',
    'RatingOrderNotFoundError',
    'InvalidRatingError',
    'UnauthorizedRatingError',
    'OrderNotCompletedError',
    'DuplicateRatingError',
]
