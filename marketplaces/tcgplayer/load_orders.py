"""
TCGplayer Order Loader

Reads a TCGplayer shipping export and normalizes it to the shared order
schema. CSV in, DataFrame out.

NORMALIZATION
-------------
    - Columns are read as strings and renamed (see columns.py).
    - Missing text values become "" so address keys compare consistently.
      Text is NOT trimmed: the address key uses raw values.
    - Item Count is parsed as an integer.
    - Value Of Products is parsed to integer cents ("$1,234.50" -> 123450).

SKIPPED ROWS
------------
    Rows with an empty order id (the export's footer row) and rows whose
    item count or value cannot be parsed, or is negative, are dropped.
    A file missing a required column raises ValueError.

USAGE
-----
    from marketplaces.tcgplayer import load_orders
    orders = load_orders("TCGplayer_ShippingExport.csv")
"""

from pathlib import Path

import polars as pl

from shared.orders import ORDER_SCHEMA, ORDER_COLS
from .columns import ORDER_COLUMN_MAPPING, REQUIRED_EXPORT_COLS


TEXT_COLS = [c for c, dtype in ORDER_SCHEMA.items() if dtype == pl.Utf8]


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def load_orders(path: str | Path) -> pl.DataFrame:
    """Load and normalize a TCGplayer shipping export."""
    return normalize_orders(read_export(path))


def read_export(path: str | Path) -> pl.DataFrame:
    """Read an export CSV with every column as a string."""
    return pl.read_csv(path, infer_schema_length=0)


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize_orders(raw: pl.DataFrame) -> pl.DataFrame:
    """
    Normalize raw export rows to the shared order schema.

    Args:
        raw: Export DataFrame with TCGplayer headers (all string columns)

    Returns:
        DataFrame with ORDER_COLS first, followed by any other export
        columns. Footer and malformed rows are removed.
    """
    missing = [c for c in REQUIRED_EXPORT_COLS if c not in raw.columns]
    if missing:
        raise ValueError(f"Export is missing required columns: {missing}")

    df = raw.rename(ORDER_COLUMN_MAPPING)

    df = df.with_columns(
        [pl.col(c).cast(pl.Utf8).fill_null("") for c in TEXT_COLS] + [
            parse_count("item_count").alias("item_count"),
            parse_cents("value_cents").alias("value_cents"),
        ]
    )

    df = df.filter(
        (pl.col("order_id").str.strip_chars() != "") &
        pl.col("item_count").is_not_null() &
        (pl.col("item_count") >= 0) &
        pl.col("value_cents").is_not_null() &
        (pl.col("value_cents") >= 0)
    )

    other_cols = [c for c in df.columns if c not in ORDER_COLS]
    return df.select(ORDER_COLS + other_cols)


def parse_count(col: str) -> pl.Expr:
    """Parse an integer count column; unparseable values become null."""
    return (
        pl.col(col)
        .cast(pl.Utf8)
        .str.strip_chars()
        .cast(pl.Int64, strict=False)
    )


def parse_cents(col: str) -> pl.Expr:
    """
    Parse a currency column to integer cents; unparseable values become null.

    Currency symbols, thousands separators and whitespace are stripped.
    Rounding to whole cents removes binary float noise ("12.34" -> 1234).
    """
    return (
        (
            pl.col(col)
            .cast(pl.Utf8)
            .str.replace_all(r"[$,\s]", "")
            .cast(pl.Float64, strict=False)
            * 100
        )
        .round(0)
        .cast(pl.Int64, strict=False)
    )
