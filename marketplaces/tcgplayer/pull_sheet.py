"""
TCGplayer Pull Sheet

Turns the pull sheet export (one row per product across a batch of orders)
into a packing manifest sorted by card name, and renders it as a PDF.

USAGE
-----
    from marketplaces.tcgplayer.pull_sheet import load_pull_sheet, render_pull_sheet_pdf
    sheet = load_pull_sheet("TCGplayer_PullSheet.csv")
    render_pull_sheet_pdf(sheet, "PullSheet.pdf")
"""

from datetime import date
from pathlib import Path

import polars as pl
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from .columns import PULL_SHEET_COLS, PULL_SHEET_TABLE


# Letter paper, portrait (inches)
PAGE_SIZE = (8.5, 11.0)
ROWS_PER_PAGE = 45

HEADER_COLOR = "#282828"
STRIPE_COLOR = "#f5f5f5"

# Relative column widths, same order as PULL_SHEET_TABLE
COLUMN_WIDTHS = [0.06, 0.40, 0.24, 0.07, 0.07, 0.16]


# =============================================================================
# LOADING
# =============================================================================

def load_pull_sheet(path: str | Path) -> pl.DataFrame:
    """Load a pull sheet export and return it cleaned and sorted."""
    return prepare_pull_sheet(pl.read_csv(path, infer_schema_length=0))


def prepare_pull_sheet(raw: pl.DataFrame) -> pl.DataFrame:
    """
    Clean and sort raw pull sheet rows.

    Drops the footer ("Orders Contained in Pull Sheet:") and any row without
    a product name or with a non-positive quantity, then sorts A-Z by
    product name, ignoring case.

    Returns:
        DataFrame with PULL_SHEET_COLS; Quantity as Int64, other columns as
        strings with "" for missing values.
    """
    missing = [c for c in PULL_SHEET_COLS if c not in raw.columns]
    if missing:
        raise ValueError(f"Pull sheet is missing required columns: {missing}")

    text_cols = [c for c in PULL_SHEET_COLS if c != "Quantity"]

    return (
        raw
        .select(PULL_SHEET_COLS)
        .with_columns(
            [pl.col(c).cast(pl.Utf8).fill_null("") for c in text_cols] + [
                pl.col("Quantity").cast(pl.Utf8).str.strip_chars()
                .cast(pl.Int64, strict=False),
            ]
        )
        .filter(
            (pl.col("Product Name") != "") &
            pl.col("Quantity").is_not_null() &
            (pl.col("Quantity") > 0)
        )
        .sort(pl.col("Product Name").str.to_lowercase(), maintain_order=True)
    )


def pull_sheet_summary(sheet: pl.DataFrame) -> dict:
    """Total card quantity and number of unique rows on the sheet."""
    return {
        "total_quantity": int(sheet["Quantity"].sum()) if len(sheet) else 0,
        "unique_cards": len(sheet),
    }


# =============================================================================
# PDF RENDERING
# =============================================================================

def render_pull_sheet_pdf(
    sheet: pl.DataFrame,
    path: str | Path,
    generated: date | None = None,
) -> Path:
    """
    Render the pull sheet as a letter-size PDF table.

    Args:
        sheet: Output of prepare_pull_sheet()
        path: Destination PDF path
        generated: Date printed in the header (defaults to today)

    Returns:
        Path of the written PDF
    """
    path = Path(path)
    generated = generated or date.today()
    summary = pull_sheet_summary(sheet)

    headers = [header for header, _ in PULL_SHEET_TABLE]
    rows = [
        [str(row[col]) for _, col in PULL_SHEET_TABLE]
        for row in sheet.iter_rows(named=True)
    ]
    pages = paginate(rows)

    total = summary["total_quantity"]
    subtitle = (
        f"{total} total card{'' if total == 1 else 's'}  |  "
        f"{summary['unique_cards']} unique"
    )

    with PdfPages(path) as pdf:
        for page_number, page_rows in enumerate(pages, 1):
            fig = plt.figure(figsize=PAGE_SIZE)

            if page_number == 1:
                fig.text(0.06, 0.96, "TCGplayer Pull Sheet", fontsize=16, fontweight="bold")
                fig.text(0.06, 0.94, f"Generated: {generated.strftime('%B %d, %Y')}", fontsize=9)
                fig.text(0.06, 0.925, subtitle, fontsize=9)
            fig.text(0.94, 0.02, f"Page {page_number} of {len(pages)}", fontsize=8, ha="right")

            ax = fig.add_axes([0.06, 0.05, 0.88, 0.86])
            ax.axis("off")
            _draw_table(ax, headers, page_rows)

            pdf.savefig(fig)
            plt.close(fig)

    return path


def paginate(rows: list, per_page: int = ROWS_PER_PAGE) -> list[list]:
    """Split table rows into pages; an empty sheet still gets one page."""
    return [rows[i:i + per_page] for i in range(0, len(rows), per_page)] or [[]]


def _draw_table(ax, headers: list[str], rows: list[list[str]]) -> None:
    """Draw one page of the table with a dark header and striped rows."""
    table = ax.table(
        cellText=rows or [[""] * len(headers)],
        colLabels=headers,
        colWidths=COLUMN_WIDTHS,
        cellLoc="left",
        loc="upper center",
    )
    table.auto_set_font_size(False)
    table.set_fontsize(8.5)

    for (row, col), cell in table.get_celld().items():
        cell.set_linewidth(0.3)
        if row == 0:
            cell.set_facecolor(HEADER_COLOR)
            cell.get_text().set_color("white")
            cell.get_text().set_fontweight("bold")
        elif row % 2 == 0:
            cell.set_facecolor(STRIPE_COLOR)
        # Qty and # columns read better centered
        if col in (0, 3):
            cell.get_text().set_horizontalalignment("center")
