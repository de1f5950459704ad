"""
TCGplayer Marketplace

Loaders for the TCGplayer seller exports:
- load_orders: shipping export -> normalized orders
- pull_sheet: pull sheet export -> sorted packing manifest (PDF)
"""

from .load_orders import load_orders, read_export, normalize_orders
from .pull_sheet import (
    load_pull_sheet,
    prepare_pull_sheet,
    pull_sheet_summary,
    render_pull_sheet_pdf,
)

__all__ = [
    "load_orders",
    "read_export",
    "normalize_orders",
    "load_pull_sheet",
    "prepare_pull_sheet",
    "pull_sheet_summary",
    "render_pull_sheet_pdf",
]
