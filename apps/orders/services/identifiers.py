"""
Order identifier allocation.

Orders carry a sequential, human-readable identifier ``RKR###``. The next
identifier is derived from the most recently issued one, so allocation is a
read-then-insert: two concurrent requests can compute the same candidate,
and the loser gets a uniqueness violation from the database. Callers handle
that with a bounded retry (see ``order_management``).

Customer submissions get a placeholder ``RKR-Pending-###`` identifier from
a separate series until staff place the order.
"""

import logging
import re
from typing import Optional

from django.conf import settings
from django.db.models import F

from apps.orders.models import Order

logger = logging.getLogger(__name__)

PERMANENT_PREFIX = 'RKR'
PENDING_PREFIX = 'RKR-Pending-'

_PERMANENT_NUMBER = re.compile(r'RKR(\d+)', re.IGNORECASE)
_PENDING_NUMBER = re.compile(r'RKR-Pending-(\d+)', re.IGNORECASE)
_PERMANENT_ID = re.compile(r'^RKR\d+$', re.IGNORECASE)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION = '23505'


def format_identifier(number: int, prefix: str = PERMANENT_PREFIX) -> str:
    """Zero-pad to three digits; wider numbers keep all their digits."""
    return f"{prefix}{number:03d}"


def _first_number(start: Optional[int]) -> int:
    if start is None:
        start = getattr(settings, 'ORDER_ID_START', 1)
    return max(0, int(start))


def _next_in_series(latest_id, pattern, prefix, start):
    first = _first_number(start)
    if not latest_id:
        return format_identifier(first, prefix)

    match = pattern.search(latest_id)
    if not match:
        logger.warning(
            "Unexpected order ID format: %s. Starting from %s.",
            latest_id, format_identifier(first, prefix)
        )
        return format_identifier(first, prefix)

    return format_identifier(int(match.group(1)) + 1, prefix)


def next_identifier(latest_id: Optional[str], start: Optional[int] = None) -> str:
    """
    Next permanent identifier after ``latest_id``.

    Args:
        latest_id: Identifier of the most recently created order, or None
            when no order exists yet.
        start: Number issued when the series is empty or ``latest_id`` is
            unparseable. Defaults to ``settings.ORDER_ID_START``.

    Returns:
        ``RKR`` followed by the incremented number, at least three digits.

    Example:
        >>> next_identifier('RKR007')
        'RKR008'
        >>> next_identifier('RKR999')
        'RKR1000'
    """
    return _next_in_series(latest_id, _PERMANENT_NUMBER, PERMANENT_PREFIX, start)


def next_temporary_identifier(latest_pending_id: Optional[str]) -> str:
    """Next ``RKR-Pending-###`` placeholder; the pending series always starts at 001."""
    return _next_in_series(latest_pending_id, _PENDING_NUMBER, PENDING_PREFIX, 1)


def is_permanent_identifier(value: Optional[str]) -> bool:
    return bool(value) and bool(_PERMANENT_ID.match(value))


def fetch_latest_order_id() -> Optional[str]:
    """Most recently issued permanent identifier, or None."""
    return (
        Order.objects
        .filter(id__iregex=r'^RKR[0-9]+$')
        .order_by(F('identifier_assigned_at').desc(nulls_last=True), '-created_at')
        .values_list('id', flat=True)
        .first()
    )


def fetch_latest_pending_id() -> Optional[str]:
    """Most recently issued placeholder identifier, or None."""
    return (
        Order.objects
        .filter(id__istartswith=PENDING_PREFIX)
        .order_by(F('identifier_assigned_at').desc(nulls_last=True), '-created_at')
        .values_list('id', flat=True)
        .first()
    )


def is_duplicate_key_error(exc: Exception) -> bool:
    """True when a database error is a uniqueness violation."""
    cause = exc.__cause__
    if getattr(cause, 'pgcode', None) == UNIQUE_VIOLATION:
        return True
    if getattr(cause, 'sqlstate', None) == UNIQUE_VIOLATION:
        return True
    message = str(exc).lower()
    return 'unique' in message or 'duplicate' in message
