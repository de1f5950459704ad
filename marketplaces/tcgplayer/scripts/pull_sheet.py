"""
TCGplayer Pull Sheet PDF
========================

Converts a TCGplayer pull sheet export into a printable PDF sorted by
card name.

Usage:
    python -m marketplaces.tcgplayer.scripts.pull_sheet TCGplayer_PullSheet.csv
    python -m marketplaces.tcgplayer.scripts.pull_sheet pull.csv --output PullSheet.pdf
"""

import argparse
import sys
from pathlib import Path

from marketplaces.tcgplayer.pull_sheet import (
    load_pull_sheet,
    pull_sheet_summary,
    render_pull_sheet_pdf,
)


def main():
    parser = argparse.ArgumentParser(description="Render a TCGplayer pull sheet as PDF")
    parser.add_argument("pull_sheet", type=Path, help="Pull sheet export (CSV)")
    parser.add_argument(
        "--output",
        type=Path,
        help="PDF path (default: the CSV name with .pdf)"
    )

    args = parser.parse_args()
    output = args.output or args.pull_sheet.with_suffix(".pdf")

    try:
        sheet = load_pull_sheet(args.pull_sheet)
        summary = pull_sheet_summary(sheet)
        print(f"{summary['unique_cards']:,} cards, {summary['total_quantity']:,} total")

        path = render_pull_sheet_pdf(sheet, output)
        print(f"Wrote {path}")

    except KeyboardInterrupt:
        print("\n\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        raise


if __name__ == "__main__":
    main()
