"""Statistics service - Rating aggregations."""

from datetime import date
from typing import Optional

from django.db.models import Avg, Count
from django.utils import timezone

from apps.ratings.models import Rating


def get_rating_statistics(today: Optional[date] = None) -> dict:
    """
    Summarize customer ratings.

    Returns:
        Dictionary with statistics:
        - total_ratings: int
        - average_rating: float (rounded to 2 decimals, 0 when empty)
        - rating_distribution: dict - Count for each rating ('1'-'5')
        - five_star_percentage: float (rounded to 2 decimals)
        - this_month: int - Ratings created in the current local month
    """
    today = today or timezone.localdate()
    queryset = Rating.objects.all()

    aggregates = queryset.aggregate(total=Count('id'), avg=Avg('overall_rating'))
    total = aggregates['total']

    counts = {
        row['overall_rating']: row['count']
        for row in queryset.order_by().values('overall_rating').annotate(count=Count('id'))
    }
    distribution = {str(stars): counts.get(stars, 0) for stars in range(1, 6)}

    five_star_percentage = 0
    if total:
        five_star_percentage = round(distribution['5'] * 100 / total, 2)

    this_month = queryset.filter(
        created_at__year=today.year,
        created_at__month=today.month,
    ).count()

    return {
        'total_ratings': total,
        'average_rating': round(aggregates['avg'] or 0, 2),
        'rating_distribution': distribution,
        'five_star_percentage': five_star_percentage,
        'this_month': this_month,
    }
