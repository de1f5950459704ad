"""
Postal Codes

Normalization of destination postal codes before they go on a label.
"""

import polars as pl


# Country values treated as the United States ("" = not given)
US_COUNTRIES = ["", "US", "USA", "UNITED STATES"]


def normalize_zip_code(col: str = "postal_code", country_col: str = "country") -> pl.Expr:
    """
    Normalize a postal code for the carrier.

    For US addresses, restores leading zeros lost by spreadsheet round trips
    and formats nine-digit codes as ZIP+4:
        "2134"       -> "02134"
        "021341234"  -> "02134-1234"
        "2134-1234"  -> "02134-1234"
    Anything else (including all non-US codes) is passed through trimmed.
    """
    code = pl.col(col).fill_null("").str.strip_chars()
    is_us = (
        pl.col(country_col).fill_null("").str.strip_chars().str.to_uppercase()
        .is_in(US_COUNTRIES)
    )

    return (
        pl.when(is_us & code.str.contains(r"^\d{1,5}$"))
        .then(code.str.zfill(5))
        .when(is_us & code.str.contains(r"^\d{9}$"))
        .then(pl.concat_str([code.str.slice(0, 5), pl.lit("-"), code.str.slice(5, 4)]))
        .when(is_us & code.str.contains(r"^\d{1,5}-\d{4}$"))
        .then(pl.concat_str([
            code.str.extract(r"^(\d+)-", 1).str.zfill(5),
            pl.lit("-"),
            code.str.extract(r"-(\d{4})$", 1),
        ]))
        .otherwise(code)
    )
