"""Rating management service - Customer feedback on completed orders."""

import logging
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from typing import Optional

from apps.accounts.models import User
from apps.orders.constants import COMPLETED_STATUSES
from apps.orders.models import Order
from apps.ratings.models import Rating
from .exceptions import (
    RatingOrderNotFoundError,
    InvalidRatingError,
    UnauthorizedRatingError,
    OrderNotCompletedError,
    DuplicateRatingError,
)

logger = logging.getLogger(__name__)


def create_rating(
    *,
    customer: User,
    order_id: str,
    overall_rating: int,
    feedback_message: str = ''
) -> Rating:
    """
    Rate a completed order.

    This operation:
    1. Validates rating range
    2. Checks the order belongs to the customer and is completed
    3. Checks the order has not been rated yet
    4. Creates the rating

    Args:
        customer: Customer submitting the rating
        order_id: Order being rated
        overall_rating: Stars (1-5)
        feedback_message: Optional written feedback

    Returns:
        Created Rating instance

    Raises:
        InvalidRatingError: If rating not in 1-5 range
        RatingOrderNotFoundError: If order doesn't exist
        UnauthorizedRatingError: If the order belongs to someone else
        OrderNotCompletedError: If the order is not delivered or successful
        DuplicateRatingError: If the order already has a rating
    """
    if not (1 <= overall_rating <= 5):
        raise InvalidRatingError("Rating must be between 1 and 5")

    try:
        order = Order.objects.get(id=order_id)
    except Order.DoesNotExist:
        raise RatingOrderNotFoundError(f"Order {order_id} not found")

    if order.customer_id != customer.id:
        raise UnauthorizedRatingError("You can only rate your own orders")

    if order.status not in COMPLETED_STATUSES:
        raise OrderNotCompletedError("Only completed orders can be rated")

    if Rating.objects.filter(order=order).exists():
        raise DuplicateRatingError("You have already rated this order")

    try:
        with transaction.atomic():
            rating = Rating.objects.create(
                order=order,
                customer=customer,
                overall_rating=overall_rating,
                feedback_message=feedback_message,
            )
    except IntegrityError:
        # Two submissions for the same order raced each other
        raise DuplicateRatingError("You have already rated this order")

    logger.info("Order %s rated %s by %s", order.id, overall_rating, customer.id)
    return rating


def get_ratings(*, stars: Optional[int] = None, search: Optional[str] = None) -> QuerySet[Rating]:
    """Ratings newest first, optionally filtered by star count and feedback text."""
    queryset = Rating.objects.select_related('order', 'customer')

    if stars:
        queryset = queryset.filter(overall_rating=stars)

    if search:
        queryset = queryset.filter(feedback_message__icontains=search)

    return queryset
