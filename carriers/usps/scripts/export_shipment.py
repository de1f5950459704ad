"""
Export a Single USPS Shipment
=============================

Writes one shipment (or its return label) from a TCGplayer shipping
export, e.g. to reprint a label or send a replacement.

The reference is the shipment's order number. When orders were merged,
use the first order number at that address.

Usage:
    python -m carriers.usps.scripts.export_shipment orders.csv 123456-ABCD
    python -m carriers.usps.scripts.export_shipment orders.csv 123456-ABCD --return
    python -m carriers.usps.scripts.export_shipment orders.csv 123456-ABCD --settings settings.json
"""

import argparse
import sys
from pathlib import Path

from marketplaces.tcgplayer import load_orders
from carriers.usps.build_shipments import process_orders
from carriers.usps.data import DEFAULT_SETTINGS, load_settings
from carriers.usps.export import export_shipment
from carriers.usps.overrides import load_overrides, apply_overrides


def main():
    parser = argparse.ArgumentParser(
        description="Export a single USPS shipment or return label",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m carriers.usps.scripts.export_shipment orders.csv 123456-ABCD
  python -m carriers.usps.scripts.export_shipment orders.csv 123456-ABCD --return
        """
    )
    parser.add_argument("orders", type=Path, help="TCGplayer shipping export (CSV)")
    parser.add_argument("reference", help="Shipment reference (order number)")
    parser.add_argument(
        "--return",
        dest="returns",
        action="store_true",
        help="Write a return label (addresses swapped)"
    )
    parser.add_argument("--settings", type=Path, help="Settings JSON")
    parser.add_argument("--overrides", type=Path, help="JSON of manual edits")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the file (default: current directory)"
    )

    args = parser.parse_args()

    try:
        settings = load_settings(args.settings) if args.settings else DEFAULT_SETTINGS
        shipments, shipment_to_orders = process_orders(load_orders(args.orders), settings)

        if args.overrides:
            shipments = apply_overrides(shipments, load_overrides(args.overrides))

        order_ids = shipment_to_orders.get(args.reference, [args.reference])
        path = export_shipment(shipments, args.reference, args.output_dir, returns=args.returns)

        kind = "return label" if args.returns else "shipment"
        print(f"Wrote {kind} {args.reference} (orders: {', '.join(order_ids)}) to {path}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
