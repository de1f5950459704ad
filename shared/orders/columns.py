"""
Order Column Schema

Normalized order columns shared by every marketplace loader and by the
merge step. Marketplace loaders rename their export headers to these names.
"""

import polars as pl


# =============================================================================
# REQUIRED ORDER COLUMNS (must be present from any loader)
# =============================================================================

ORDER_SCHEMA = {
    "order_id": pl.Utf8,          # Marketplace order number ("" = footer row)
    "first_name": pl.Utf8,        # Recipient first name
    "last_name": pl.Utf8,         # Recipient last name
    "street1": pl.Utf8,           # Address line 1
    "street2": pl.Utf8,           # Address line 2 ("" when absent)
    "city": pl.Utf8,
    "state": pl.Utf8,
    "postal_code": pl.Utf8,       # Raw postal code, as exported
    "country": pl.Utf8,
    "item_count": pl.Int64,       # Number of items in the order
    "value_cents": pl.Int64,      # Merchandise value in integer cents
    "shipping_method": pl.Utf8,   # e.g. "Standard", "Expedited Priority"
}

ORDER_COLS = list(ORDER_SCHEMA)


# =============================================================================
# ADDRESS KEY
# =============================================================================

# Orders sharing all five values ship together. Values are compared raw:
# no trimming or case folding.
ADDRESS_KEY_COLS = [
    "street1",
    "street2",
    "city",
    "state",
    "postal_code",
]

# Summed when orders are merged
SUMMED_COLS = [
    "item_count",
    "value_cents",
]


# =============================================================================
# SHIPPING METHOD
# =============================================================================

EXPEDITED_PREFIX = "Expedited"


def is_expedited(col: str = "shipping_method") -> pl.Expr:
    """Polars expression that is True when the shipping method is an expedited tier."""
    return pl.col(col).fill_null("").str.starts_with(EXPEDITED_PREFIX)


def validate_order_columns(df: pl.DataFrame) -> None:
    """Raise ValueError if any required order column is missing."""
    missing = [c for c in ORDER_COLS if c not in df.columns]
    if missing:
        raise ValueError(f"Orders are missing required columns: {missing}")
