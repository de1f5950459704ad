"""
Shipment Column Schema

Documents every shipment column and which of them go into the label batch
files. Dotted names are the nested fields of the batch CSV format.
"""

import polars as pl


# =============================================================================
# ADDRESSES
# =============================================================================

ADDRESS_FIELDS = [
    "name",
    "company",
    "street1",
    "street2",
    "city",
    "state",
    "zip",
    "country",
    "phone",
    "email",
]


def address_cols(prefix: str) -> list[str]:
    """Columns of one address block, e.g. address_cols("to_address")."""
    return [f"{prefix}.{field}" for field in ADDRESS_FIELDS]


TO_ADDRESS_COLS = address_cols("to_address")          # Recipient
FROM_ADDRESS_COLS = address_cols("from_address")      # Sender (settings)
RETURN_ADDRESS_COLS = address_cols("return_address")  # Sender (settings)


# =============================================================================
# PARCEL AND OPTIONS
# =============================================================================

PARCEL_COLS = [
    "parcel.length",              # Inches, from the selected profile
    "parcel.width",
    "parcel.height",
    "parcel.weight",              # Ounces, base + items, rounded up to 0.01
    "parcel.predefined_package",  # Profile used: Letter, Flat or Parcel
]

OPTIONS_COLS = [
    "options.label_format",           # PDF or PNG
    "options.label_size",             # 4x6, 7x3 or 6x4
    "options.invoice_number",         # Same as reference
    "options.delivery_confirmation",  # SIGNATURE or NO_SIGNATURE
]


# =============================================================================
# COLUMN SETS
# =============================================================================

# Written to the batch files, in this order
EXPORT_COLS = (
    ["reference"] +
    TO_ADDRESS_COLS +
    FROM_ADDRESS_COLS +
    RETURN_ADDRESS_COLS +
    PARCEL_COLS +
    ["carrier", "service"] +
    OPTIONS_COLS
)

# Kept on the shipment frame for review, never exported
BOOKKEEPING_COLS = [
    "item_count",             # Merged item count
    "value_cents",            # Merged merchandise value (cents)
    "package_type",           # Package rule outcome (may differ from parcel profile)
    "service_rule",           # Name of the service rule that matched
    "package_rule",           # Name of the package rule that matched
    "classification_error",   # Settings error that blocked classification, else null
]

SHIPMENT_COLS = EXPORT_COLS + BOOKKEEPING_COLS


def _dtype(col: str) -> pl.DataType:
    if col in ("parcel.length", "parcel.width", "parcel.height", "parcel.weight"):
        return pl.Float64
    if col in ("item_count", "value_cents"):
        return pl.Int64
    return pl.Utf8


SHIPMENT_SCHEMA = {col: _dtype(col) for col in SHIPMENT_COLS}


# Columns a reviewer may change after classification
EDITABLE_COLS = (
    TO_ADDRESS_COLS +
    FROM_ADDRESS_COLS +
    RETURN_ADDRESS_COLS +
    PARCEL_COLS +
    ["service"] +
    [c for c in OPTIONS_COLS if c != "options.invoice_number"]
)

# Nulled on shipments that could not be classified (classification_error set)
CLASSIFIED_COLS = (
    ["service", "service_rule", "package_type", "package_rule"] +
    PARCEL_COLS +
    ["options.label_format", "options.label_size"]
)
