"""
Write a Settings Template
=========================

Writes the default shipping settings as JSON, ready to edit.

Usage:
    python -m carriers.usps.scripts.init_settings settings.json
    python -m carriers.usps.scripts.init_settings settings.json --force
"""

import argparse
import sys
from pathlib import Path

from carriers.usps.data import write_default_settings


def main():
    parser = argparse.ArgumentParser(description="Write the default USPS settings as JSON")
    parser.add_argument("path", type=Path, help="Destination file")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file"
    )

    args = parser.parse_args()

    if args.path.exists() and not args.force:
        print(f"{args.path} already exists (use --force to overwrite)")
        sys.exit(1)

    path = write_default_settings(args.path)
    print(f"Wrote default settings to {path}")
    print("Fill in from_address before creating a batch.")


if __name__ == "__main__":
    main()
