"""
Orders services - Business logic layer.

This package contains all business operations for the orders app:
- Pricing engine (pure, no database access)
- Order identifier allocation
- Order creation, status changes and cancellation
- Dashboard statistics
- Customer directory for the owners
"""

# Pricing
from .pricing import (
    PricingInput,
    PricingResult,
    compute_loads,
    compute_price,
    suggest_services,
    split_into_loads,
)

# Identifiers
from .identifiers import (
    next_identifier,
    next_temporary_identifier,
    is_permanent_identifier,
    fetch_latest_order_id,
    fetch_latest_pending_id,
)

# Order Management
from .order_management import (
    quote_price,
    create_order,
    create_customer_order,
    get_order,
    update_order_status,
    update_order_fields,
    record_payment,
    cancel_order_by_customer,
    count_customer_orders_today,
    get_customer_orders,
    find_order_for_customer,
)

# Statistics
from .statistics import calculate_order_statistics

# Customer directory
from .customers import build_customer_directory, get_customer_directory

# Domain Exceptions
from .exceptions import (
    OrdersServiceError,
    OrderNotFoundError,
    OrderIdentifierConflictError,
    DailyOrderLimitError,
    OrderNotCancelableError,
    InvalidStatusTransitionError,
    InvalidPaymentError,
)

__all__ = [
    # Pricing
    'PricingInput',
    'PricingResult',
    'compute_loads',
    'compute_price',
    'suggest_services',
    'split_into_loads',
    # Identifiers
    'next_identifier',
    'next_temporary_identifier',
    'is_permanent_identifier',
    'fetch_latest_order_id',
    'fetch_latest_pending_id',
    # Order Management
    'quote_price',
    'create_order',
    'create_customer_order',
    'get_order',
    'update_order_status',
    'update_order_fields',
    'record_payment',
    'cancel_order_by_customer',
    'count_customer_orders_today',
    'get_customer_orders',
    'find_order_for_customer',
    # Statistics
    'calculate_order_statistics',
    # Customer directory
    'build_customer_directory',
    'get_customer_directory',
    # Exceptions
    'OrdersServiceError',
    'OrderNotFoundError',
    'OrderIdentifierConflictError',
    'DailyOrderLimitError',
    'OrderNotCancelableError',
    'InvalidStatusTransitionError',
    'InvalidPaymentError',
]
