"""Customer directory - order history grouped by customer name."""

from decimal import Decimal
from typing import Iterable, Optional

from django.utils import timezone

from apps.orders.models import Order

UNKNOWN_CUSTOMER = 'Unknown'

DIRECTORY_SORTS = ('name', 'visits', 'loads', 'amount')


def build_customer_directory(orders: Iterable[Order], sort: str = 'name', search: Optional[str] = None) -> list:
    """
    Group orders into one entry per customer name.

    Walk-in customers have no account, so the name on the order is the
    only key. A visit is a distinct local day with at least one order. The
    contact number is the most recent non-empty one.

    Args:
        orders: Orders to group
        sort: 'name' (A-Z), 'visits', 'loads' or 'amount' (highest first)
        search: Case-insensitive match on name or contact number

    Returns:
        List of dicts with name, contact_number, visits, total_loads,
        total_weight, total_amount_paid and transactions (newest first)
    """
    if sort not in DIRECTORY_SORTS:
        raise ValueError(f"Unknown sort '{sort}'. Use one of: {', '.join(DIRECTORY_SORTS)}")

    entries = {}
    for order in sorted(orders, key=lambda o: o.created_at, reverse=True):
        name = order.customer_name or UNKNOWN_CUSTOMER
        entry = entries.setdefault(name, {
            'name': name,
            'contact_number': '',
            'visit_days': set(),
            'total_loads': 0,
            'total_weight': Decimal('0.00'),
            'total_amount_paid': Decimal('0.00'),
            'transactions': [],
        })

        if order.contact_number and not entry['contact_number']:
            entry['contact_number'] = order.contact_number

        amount_paid = order.total if order.is_paid else Decimal('0.00')
        entry['visit_days'].add(timezone.localdate(order.created_at))
        entry['total_loads'] += order.loads or 0
        entry['total_weight'] += order.weight or Decimal('0.00')
        entry['total_amount_paid'] += amount_paid
        entry['transactions'].append({
            'order_id': order.pk,
            'date': order.created_at,
            'loads': order.loads or 0,
            'weight': order.weight or Decimal('0.00'),
            'amount_paid': amount_paid,
        })

    directory = []
    for entry in entries.values():
        entry['visits'] = len(entry.pop('visit_days'))
        directory.append(entry)

    if search and search.strip():
        query = search.strip().lower()
        directory = [
            entry for entry in directory
            if query in entry['name'].lower() or query in entry['contact_number'].lower()
        ]

    if sort == 'name':
        directory.sort(key=lambda entry: entry['name'].lower())
    else:
        field = {'visits': 'visits', 'loads': 'total_loads', 'amount': 'total_amount_paid'}[sort]
        directory.sort(key=lambda entry: entry[field], reverse=True)

    return directory


def get_customer_directory(sort: str = 'name', search: Optional[str] = None) -> list:
    orders = Order.objects.only(
        'id', 'customer_name', 'contact_number', 'loads', 'weight', 'total', 'is_paid', 'created_at'
    )
    return build_customer_directory(orders, sort=sort, search=search)
