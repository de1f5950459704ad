"""
Shared Orders

Normalized order schema and address-based order merging.
"""

from .columns import (
    ORDER_SCHEMA,
    ORDER_COLS,
    ADDRESS_KEY_COLS,
    SUMMED_COLS,
    EXPEDITED_PREFIX,
    is_expedited,
    validate_order_columns,
)
from .merge import address_key, drop_invalid_orders, merge_orders
from .postal import normalize_zip_code

__all__ = [
    # Schema
    "ORDER_SCHEMA",
    "ORDER_COLS",
    "ADDRESS_KEY_COLS",
    "SUMMED_COLS",
    "EXPEDITED_PREFIX",
    "is_expedited",
    "validate_order_columns",
    # Merging
    "address_key",
    "drop_invalid_orders",
    "merge_orders",
    # Postal codes
    "normalize_zip_code",
]
