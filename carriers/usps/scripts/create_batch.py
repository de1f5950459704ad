"""
Create USPS Label Batch
=======================

Builds USPS label batch files from a TCGplayer shipping export.

Orders going to the same address are merged into one shipment, each
shipment is classified (service, package, label size) and one batch file
is written per label size.

Usage:
    python -m carriers.usps.scripts.create_batch TCGplayer_ShippingExport.csv
    python -m carriers.usps.scripts.create_batch orders.csv --settings settings.json
    python -m carriers.usps.scripts.create_batch orders.csv --overrides overrides.json
    python -m carriers.usps.scripts.create_batch orders.csv --returns --output-dir out/
    python -m carriers.usps.scripts.create_batch orders.csv --dry-run
"""

import argparse
import sys
from pathlib import Path

import polars as pl

from marketplaces.tcgplayer import read_export, normalize_orders
from carriers.usps.build_shipments import process_orders
from carriers.usps.data import DEFAULT_SETTINGS, load_settings
from carriers.usps.export import export_batch, exportable
from carriers.usps.overrides import load_overrides, apply_overrides
from carriers.usps.version import VERSION


# =============================================================================
# STEPS
# =============================================================================

def load_orders_step(path: Path) -> pl.DataFrame:
    """Read and normalize the export, reporting skipped rows."""
    print(f"\nStep 1: Loading orders from {path}...")
    raw = read_export(path)
    orders = normalize_orders(raw)
    print(f"  Read {len(raw):,} rows")

    skipped = len(raw) - len(orders)
    if skipped > 0:
        print(f"  Skipped {skipped:,} footer or malformed rows")
    print(f"  Loaded {len(orders):,} orders")
    return orders


def build_step(orders: pl.DataFrame, settings) -> pl.DataFrame:
    """Merge and classify, reporting merged addresses and errors."""
    print("\nStep 2: Merging and classifying...")
    shipments, shipment_to_orders = process_orders(orders, settings)
    print(f"  {len(shipments):,} shipments")

    merged = {ref: ids for ref, ids in shipment_to_orders.items() if len(ids) > 1}
    if merged:
        print(f"  {len(merged):,} shipments combine several orders:")
        for reference, order_ids in merged.items():
            print(f"    {reference}: {', '.join(order_ids)}")

    failed = shipments.filter(pl.col("classification_error").is_not_null())
    for row in failed.iter_rows(named=True):
        print(f"  Not classified: {row['reference']}: {row['classification_error']}")

    return shipments


def print_summary(shipments: pl.DataFrame) -> None:
    """Shipment counts by service, package and label size."""
    ready = exportable(shipments)
    if ready.is_empty():
        print("\nNo shipments to export.")
        return

    summary = (
        ready
        .group_by(["service", "parcel.predefined_package", "options.label_size"])
        .agg(pl.len().alias("shipments"))
        .sort(["options.label_size", "service", "parcel.predefined_package"])
    )

    print("\nSummary:")
    print(f"  {'Service':<18}{'Package':<10}{'Label':<8}{'Shipments':>10}")
    for row in summary.iter_rows(named=True):
        print(
            f"  {row['service']:<18}{row['parcel.predefined_package']:<10}"
            f"{row['options.label_size']:<8}{row['shipments']:>10,}"
        )


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Create USPS label batch files from a TCGplayer shipping export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m carriers.usps.scripts.create_batch orders.csv
  python -m carriers.usps.scripts.create_batch orders.csv --settings settings.json
  python -m carriers.usps.scripts.create_batch orders.csv --returns --output-dir out/
        """
    )
    parser.add_argument(
        "orders",
        type=Path,
        help="TCGplayer shipping export (CSV)"
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Settings JSON (default: built-in defaults)"
    )
    parser.add_argument(
        "--overrides",
        type=Path,
        help="JSON of manual edits by shipment reference"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the batch files (default: current directory)"
    )
    parser.add_argument(
        "--returns",
        action="store_true",
        help="Write return labels (addresses swapped)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Classify and summarize without writing files"
    )

    args = parser.parse_args()

    print("=" * 60)
    print(f"USPS LABEL BATCH (v{VERSION})")
    print("=" * 60)

    try:
        settings = load_settings(args.settings) if args.settings else DEFAULT_SETTINGS

        orders = load_orders_step(args.orders)
        shipments = build_step(orders, settings)

        if args.overrides:
            overrides = load_overrides(args.overrides)
            shipments = apply_overrides(shipments, overrides)
            print(f"  Applied overrides to {len(overrides):,} shipments")

        print_summary(shipments)

        print("\n" + "=" * 60)
        if args.dry_run:
            print(f"[DRY RUN] Would have exported {len(exportable(shipments)):,} shipments")
        else:
            paths = export_batch(shipments, args.output_dir, returns=args.returns)
            for path in paths:
                print(f"Wrote {path}")
            if not paths:
                print("No batch files written")
        print("=" * 60)

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
