"""
Shipment Overrides

Manual edits to classified shipments, applied after the pipeline so the
pipeline itself stays replayable.

FORMAT
------
    {
        "<reference>": {"<column>": <value>, ...},
        ...
    }

Columns are shipment column names (e.g. "service", "parcel.weight",
"options.label_size", "to_address.street2"). Only EDITABLE_COLS may be
changed. Nothing is recomputed: editing parcel.predefined_package does not
move the label size, editing options.label_size does.

USAGE
-----
    from carriers.usps.overrides import load_overrides, apply_overrides
    shipments = apply_overrides(shipments, load_overrides("overrides.json"))
"""

import json
from pathlib import Path

import polars as pl

from .columns import EDITABLE_COLS, SHIPMENT_SCHEMA
from .data import (
    LABEL_SIZES,
    LABEL_FORMATS,
    SERVICES,
    PACKAGE_TYPES,
    SIGNATURE,
    NO_SIGNATURE,
)


# Columns limited to a fixed set of values
CHOICES = {
    "service": SERVICES,
    "parcel.predefined_package": PACKAGE_TYPES,
    "options.label_size": LABEL_SIZES,
    "options.label_format": LABEL_FORMATS,
    "options.delivery_confirmation": [SIGNATURE, NO_SIGNATURE],
}


def load_overrides(path: str | Path) -> dict[str, dict]:
    """Load overrides from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        overrides = json.load(f)

    if not isinstance(overrides, dict) or not all(
        isinstance(edits, dict) for edits in overrides.values()
    ):
        raise ValueError(f"Overrides file {path} must map references to objects of edits")

    return overrides


def apply_overrides(shipments: pl.DataFrame, overrides: dict[str, dict]) -> pl.DataFrame:
    """
    Apply manual edits to shipments.

    Args:
        shipments: Output of build_shipments()
        overrides: reference -> {column: value}

    Returns:
        New DataFrame with the edits applied; the input is not modified

    Raises:
        ValueError: for an unknown reference, a column that cannot be edited
            or a value the column does not accept
    """
    _validate_overrides(shipments, overrides)

    # column -> [(reference, value), ...]
    by_column: dict[str, list[tuple[str, object]]] = {}
    for reference, edits in overrides.items():
        for column, value in edits.items():
            by_column.setdefault(column, []).append((reference, value))

    exprs = []
    for column, edits in by_column.items():
        dtype = SHIPMENT_SCHEMA[column]
        reference, value = edits[0]
        expr = pl.when(pl.col("reference") == reference).then(_literal(value, dtype))
        for reference, value in edits[1:]:
            expr = expr.when(pl.col("reference") == reference).then(_literal(value, dtype))
        exprs.append(expr.otherwise(pl.col(column)).alias(column))

    return shipments.with_columns(exprs) if exprs else shipments


def _literal(value, dtype: pl.DataType) -> pl.Expr:
    if value is None:
        return pl.lit(None, dtype=dtype)
    if dtype == pl.Float64:
        return pl.lit(float(value), dtype=dtype)
    return pl.lit(str(value), dtype=dtype)


def _validate_overrides(shipments: pl.DataFrame, overrides: dict[str, dict]) -> None:
    """Raise ValueError listing every invalid edit."""
    references = set(shipments["reference"].to_list())
    errors = []

    for reference, edits in overrides.items():
        if reference not in references:
            errors.append(f"{reference}: no shipment with this reference")
        for column, value in edits.items():
            if column not in EDITABLE_COLS:
                errors.append(f"{reference}: column '{column}' cannot be edited")
            elif column in CHOICES and value not in CHOICES[column]:
                errors.append(f"{reference}: {column} must be one of {CHOICES[column]}")
            elif SHIPMENT_SCHEMA[column] == pl.Float64:
                try:
                    float(value)
                except (TypeError, ValueError):
                    errors.append(f"{reference}: {column} value {value!r} is not a number")

    if errors:
        raise ValueError("Invalid overrides:\n  " + "\n  ".join(errors))
