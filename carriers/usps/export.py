"""
Label Batch Export

Splits shipments by label size and writes one batch CSV per size.

FILE NAMES
----------
    EasyPost_Shipments_<label_size>_<YYYY.MM.DD.HH.MM.SS>.csv
    EasyPost_Returns_<label_size>_<YYYY.MM.DD.HH.MM.SS>.csv

Sizes without shipments produce no file. Shipments with a
classification_error are never exported.

USAGE
-----
    from carriers.usps.export import export_batch
    paths = export_batch(shipments, "out/")
"""

from datetime import datetime
from pathlib import Path

import polars as pl

from .columns import ADDRESS_FIELDS, EXPORT_COLS
from .data import LABEL_SIZES


SHIPMENTS_PREFIX = "EasyPost_Shipments"
RETURNS_PREFIX = "EasyPost_Returns"

TIMESTAMP_FORMAT = "%Y.%m.%d.%H.%M.%S"


# =============================================================================
# PARTITIONING
# =============================================================================

def exportable(shipments: pl.DataFrame) -> pl.DataFrame:
    """Shipments that were classified (no classification_error)."""
    return shipments.filter(pl.col("classification_error").is_null())


def partition_by_label_size(shipments: pl.DataFrame, label_size: str) -> pl.DataFrame:
    """Shipments printed on the given label size, order kept. May be empty."""
    return shipments.filter(pl.col("options.label_size") == label_size)


def to_return_shipments(shipments: pl.DataFrame) -> pl.DataFrame:
    """Swap origin and destination addresses; every other column is unchanged."""
    return shipments.with_columns(
        [pl.col(f"from_address.{f}").alias(f"to_address.{f}") for f in ADDRESS_FIELDS] +
        [pl.col(f"to_address.{f}").alias(f"from_address.{f}") for f in ADDRESS_FIELDS]
    )


# =============================================================================
# FILES
# =============================================================================

def batch_file_name(prefix: str, label_size: str, timestamp: datetime) -> str:
    return f"{prefix}_{label_size}_{timestamp.strftime(TIMESTAMP_FORMAT)}.csv"


def write_shipments_csv(shipments: pl.DataFrame, path: str | Path) -> Path:
    """Write shipments in batch CSV layout (EXPORT_COLS only)."""
    path = Path(path)
    shipments.select(EXPORT_COLS).write_csv(path)
    return path


def export_batch(
    shipments: pl.DataFrame,
    output_dir: str | Path,
    returns: bool = False,
    timestamp: datetime | None = None,
) -> list[Path]:
    """
    Write one batch file per label size that has shipments.

    Args:
        shipments: Output of build_shipments() (optionally with overrides)
        output_dir: Directory for the files (created if missing)
        returns: Write return labels (addresses swapped) instead
        timestamp: Time embedded in file names (defaults to now)

    Returns:
        Paths written, in LABEL_SIZES order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = timestamp or datetime.now()
    prefix = RETURNS_PREFIX if returns else SHIPMENTS_PREFIX

    ready = exportable(shipments)
    if returns:
        ready = to_return_shipments(ready)

    paths = []
    for label_size in LABEL_SIZES:
        partition = partition_by_label_size(ready, label_size)
        if partition.is_empty():
            continue
        path = output_dir / batch_file_name(prefix, label_size, timestamp)
        paths.append(write_shipments_csv(partition, path))

    return paths


def export_shipment(
    shipments: pl.DataFrame,
    reference: str,
    output_dir: str | Path,
    returns: bool = False,
    timestamp: datetime | None = None,
) -> Path:
    """
    Write a single shipment (or its return label) to its label-size file.

    Raises:
        ValueError: if no exportable shipment has this reference
    """
    shipment = exportable(shipments).filter(pl.col("reference") == reference)
    if shipment.is_empty():
        raise ValueError(f"No exportable shipment with reference {reference!r}")

    paths = export_batch(shipment, output_dir, returns=returns, timestamp=timestamp)
    return paths[0]
