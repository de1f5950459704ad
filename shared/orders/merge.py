"""
Order Merging

Combines orders going to the same physical address into one shipment.

MERGE RULES
-----------
    - Rows with an empty order_id are footer rows and are skipped.
    - A repeated order_id is skipped; the first row for an id wins.
    - Orders are grouped by the address key (street1, street2, city, state,
      postal_code). The first order at an address is the representative:
      its id and recipient fields are kept.
    - item_count and value_cents are summed.
    - shipping_method stays the representative's unless a merged order is
      expedited, in which case the last expedited method seen wins.
    - Shipments keep the order in which their address first appeared.

USAGE
-----
    from shared.orders import merge_orders
    consolidated, shipment_to_orders = merge_orders(orders)
"""

import polars as pl

from .columns import (
    ADDRESS_KEY_COLS,
    SUMMED_COLS,
    is_expedited,
    validate_order_columns,
)


def address_key(order: dict) -> tuple[str, ...]:
    """Return the address key of a single order row (as from iter_rows(named=True))."""
    return tuple(order[c] for c in ADDRESS_KEY_COLS)


def drop_invalid_orders(orders: pl.DataFrame) -> pl.DataFrame:
    """Remove footer rows (empty order_id) and repeated order ids, keeping file order."""
    return (
        orders
        .filter(pl.col("order_id").fill_null("") != "")
        .unique(subset=["order_id"], keep="first", maintain_order=True)
    )


def merge_orders(orders: pl.DataFrame) -> tuple[pl.DataFrame, dict[str, list[str]]]:
    """
    Merge orders that share a destination address.

    Args:
        orders: Normalized orders in file row order

    Returns:
        Tuple of:
            - DataFrame with one row per address, same columns as the input
            - Mapping of representative order_id to every order_id merged into it
    """
    validate_order_columns(orders)
    valid = drop_invalid_orders(orders)

    passthrough = [
        c for c in valid.columns
        if c not in ADDRESS_KEY_COLS + SUMMED_COLS + ["shipping_method"]
    ]

    merged = (
        valid
        .group_by(ADDRESS_KEY_COLS, maintain_order=True)
        .agg([
            pl.col(passthrough).first(),
            pl.col("order_id").alias("_order_ids"),
            pl.col("item_count").sum(),
            pl.col("value_cents").sum(),
            pl.col("shipping_method").first(),
            pl.col("shipping_method").filter(is_expedited()).last().alias("_expedited_method"),
        ])
        .with_columns(
            pl.coalesce("_expedited_method", "shipping_method").alias("shipping_method")
        )
    )

    shipment_to_orders = dict(zip(
        merged["order_id"].to_list(),
        merged["_order_ids"].to_list(),
    ))

    return merged.select(valid.columns), shipment_to_orders
