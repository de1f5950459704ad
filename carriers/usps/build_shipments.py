"""
USPS Shipment Builder

DataFrame in, DataFrame out. The input is a frame of orders in the shared
order schema (from any marketplace loader, or built by hand). The output is
one shipment row per merged order, ready for the label batch export.

REQUIRED INPUT COLUMNS
----------------------
    order_id            - Order number (becomes the shipment reference)
    first_name          - Recipient first name
    last_name           - Recipient last name
    street1, street2    - Address lines
    city, state         - City and state
    postal_code         - Postal code (normalized for the label)
    country             - Country code
    item_count          - Items in the (merged) order
    value_cents         - Merchandise value in cents
    shipping_method     - Marketplace shipping method

OUTPUT COLUMNS
--------------
    classify_orders() adds:
        - service, service_rule
        - package_type, package_rule

    add_parcels() adds:
        - parcel.predefined_package (profile used)
        - parcel.length, parcel.width, parcel.height, parcel.weight

    assemble_shipments() adds addresses, carrier and options and selects
    SHIPMENT_COLS (see columns.py).

SETTINGS ERRORS
---------------
If a field every shipment reads (thresholds, label format, expedited
service) does not parse, no shipment can be classified. If only a package
profile is broken, only the shipments packed in it are affected. Every row
is still returned, with the error in classification_error and nulls for
CLASSIFIED_COLS, so the caller can report it per shipment.

USAGE
-----
    from carriers.usps.build_shipments import process_orders
    shipments, shipment_to_orders = process_orders(orders, settings)
"""

import polars as pl

from shared.orders import merge_orders, normalize_zip_code, validate_order_columns
from shared.rules import apply_rules
from .columns import (
    ADDRESS_FIELDS,
    CLASSIFIED_COLS,
    SHIPMENT_COLS,
    SHIPMENT_SCHEMA,
)
from .data import (
    CARRIER,
    FIRST,
    LETTER,
    FLAT,
    PARCEL,
    SIGNATURE,
    NO_SIGNATURE,
    SIGNATURE_THRESHOLD_CENTS,
    Address,
    ShippingSettings,
    ResolvedSettings,
    InvalidConfigurationError,
    resolve_settings,
)
from .rules import SERVICE_RULES, PACKAGE_RULES


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================

def process_orders(
    orders: pl.DataFrame,
    settings: ShippingSettings,
) -> tuple[pl.DataFrame, dict[str, list[str]]]:
    """
    Merge orders by address and build one shipment per address.

    Args:
        orders: Normalized orders in file row order
        settings: Settings snapshot for this run

    Returns:
        Tuple of (shipments DataFrame, representative order id -> merged ids)
    """
    consolidated, shipment_to_orders = merge_orders(orders)
    return build_shipments(consolidated, settings), shipment_to_orders


def build_shipments(
    orders: pl.DataFrame,
    settings: ShippingSettings,
) -> pl.DataFrame:
    """
    Build shipments for already merged orders.

    This is the main entry point for classification. Orders are not merged
    here; pass the output of merge_orders() (or use process_orders()).

    Args:
        orders: Orders with required columns (see module docstring)
        settings: Settings snapshot for this run

    Returns:
        DataFrame with SHIPMENT_COLS, one row per input order, input order kept
    """
    validate_order_columns(orders)

    try:
        resolved = resolve_settings(settings)
    except InvalidConfigurationError as e:
        return _unclassified(orders, settings.from_address, str(e))

    df = classify_orders(orders, resolved)
    df = add_parcels(df, resolved)
    df = assemble_shipments(df, resolved)
    return df


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify_orders(df: pl.DataFrame, settings: ResolvedSettings) -> pl.DataFrame:
    """
    Decide service tier and package type.

    The two cascades are independent: each only reads the order columns,
    never the other's outcome.
    """
    df = apply_rules(df, SERVICE_RULES, settings, "service", "service_rule")
    df = apply_rules(df, PACKAGE_RULES, settings, "package_type", "package_rule")
    return df


# =============================================================================
# PARCEL
# =============================================================================

def add_parcels(df: pl.DataFrame, settings: ResolvedSettings) -> pl.DataFrame:
    """
    Select the package profile and compute parcel weight and dimensions.

    PROFILE SELECTION
    -----------------
    The letter and flat profiles are only used for First-Class shipments.
    Any other service ships with the parcel profile, whatever the package
    rules decided, so parcel.predefined_package can differ from package_type.

    WEIGHT
    ------
    base_weight + item_count * per_item_weight, rounded UP to 0.01 oz so the
    declared weight never understates the real one.
    """
    df = df.with_columns(
        pl.when((pl.col("service") == FIRST) & (pl.col("package_type") == LETTER))
        .then(pl.lit(LETTER))
        .when((pl.col("service") == FIRST) & (pl.col("package_type") == FLAT))
        .then(pl.lit(FLAT))
        .otherwise(pl.lit(PARCEL))
        .alias("parcel.predefined_package")
    )

    return df.with_columns([
        _by_profile(settings, lambda p: pl.lit(p.length), pl.Float64).alias("parcel.length"),
        _by_profile(settings, lambda p: pl.lit(p.width), pl.Float64).alias("parcel.width"),
        _by_profile(settings, lambda p: pl.lit(p.height), pl.Float64).alias("parcel.height"),
        _by_profile(settings, _parcel_weight, pl.Float64).alias("parcel.weight"),
    ])


def _by_profile(settings: ResolvedSettings, value, dtype: pl.DataType) -> pl.Expr:
    """
    Pick value(profile) according to parcel.predefined_package.

    Null for shipments whose profile did not resolve.
    """
    def pick(package_type: str) -> pl.Expr:
        profile = settings.profile(package_type)
        return pl.lit(None, dtype=dtype) if profile is None else value(profile)

    package = pl.col("parcel.predefined_package")
    return (
        pl.when(package == LETTER)
        .then(pick(LETTER))
        .when(package == FLAT)
        .then(pick(FLAT))
        .otherwise(pick(PARCEL))
    )


def _profile_error(settings: ResolvedSettings) -> pl.Expr:
    """Settings error of the shipment's profile, null when it resolved."""
    error = pl.lit(None, dtype=pl.Utf8)
    for package_type, message in settings.profile_errors.items():
        error = (
            pl.when(pl.col("parcel.predefined_package") == package_type)
            .then(pl.lit(message))
            .otherwise(error)
        )
    return error


def _parcel_weight(profile) -> pl.Expr:
    """
    Weight expression for one profile.

    Computed in hundredths of an ounce. The intermediate round(6) drops
    binary float noise first (0.83 + 3 * 0.09 must give 1.10, not 1.11).
    """
    base = float(profile.base_weight * 100)
    per_item = float(profile.per_item_weight * 100)
    return (
        (pl.lit(base) + pl.col("item_count").cast(pl.Float64) * per_item)
        .round(6)
        .ceil()
        / 100
    )


# =============================================================================
# ASSEMBLY
# =============================================================================

def assemble_shipments(df: pl.DataFrame, settings: ResolvedSettings) -> pl.DataFrame:
    """
    Add addresses, label options and delivery confirmation.

    The label size comes from the profile the parcel was built with.
    Shipments packed in a profile that did not resolve get its error in
    classification_error and nulls for CLASSIFIED_COLS.
    """
    df = _add_addresses(df, settings.from_address)
    df = _add_delivery_confirmation(df)

    df = df.with_columns([
        pl.col("order_id").alias("reference"),
        pl.lit(CARRIER).alias("carrier"),
        pl.lit(settings.label_format).alias("options.label_format"),
        _by_profile(settings, lambda p: pl.lit(p.label_size), pl.Utf8).alias("options.label_size"),
        pl.col("order_id").alias("options.invoice_number"),
        _profile_error(settings).alias("classification_error"),
    ])

    df = _select_shipment_columns(df)

    classified = pl.col("classification_error").is_null()
    return df.with_columns([
        pl.when(classified)
        .then(pl.col(c))
        .otherwise(pl.lit(None, dtype=SHIPMENT_SCHEMA[c]))
        .alias(c)
        for c in CLASSIFIED_COLS
    ])


def _add_addresses(df: pl.DataFrame, from_address: Address) -> pl.DataFrame:
    """Recipient from the order; sender and return address from settings."""
    recipient = {
        "name": pl.concat_str(
            [pl.col("first_name").fill_null(""), pl.col("last_name").fill_null("")],
            separator=" ",
        ),
        "company": pl.lit(""),
        "street1": pl.col("street1"),
        "street2": pl.col("street2"),
        "city": pl.col("city"),
        "state": pl.col("state"),
        "zip": normalize_zip_code("postal_code"),
        "country": pl.col("country"),
        "phone": pl.lit(""),
        "email": pl.lit(""),
    }

    sender = from_address._asdict()

    return df.with_columns(
        [recipient[f].alias(f"to_address.{f}") for f in ADDRESS_FIELDS] +
        [pl.lit(sender[f]).alias(f"from_address.{f}") for f in ADDRESS_FIELDS] +
        [pl.lit(sender[f]).alias(f"return_address.{f}") for f in ADDRESS_FIELDS]
    )


def _add_delivery_confirmation(df: pl.DataFrame) -> pl.DataFrame:
    """Signature required at or above the value threshold."""
    return df.with_columns(
        pl.when(pl.col("value_cents") >= SIGNATURE_THRESHOLD_CENTS)
        .then(pl.lit(SIGNATURE))
        .otherwise(pl.lit(NO_SIGNATURE))
        .alias("options.delivery_confirmation")
    )


def _unclassified(df: pl.DataFrame, from_address: Address, error: str) -> pl.DataFrame:
    """Shipments for orders that could not be classified (settings error)."""
    df = _add_addresses(df, from_address)
    df = _add_delivery_confirmation(df)

    df = df.with_columns([
        pl.col("order_id").alias("reference"),
        pl.lit(CARRIER).alias("carrier"),
        pl.col("order_id").alias("options.invoice_number"),
        pl.lit(error).alias("classification_error"),
    ])

    unset = [c for c in SHIPMENT_COLS if c not in df.columns]
    df = df.with_columns([pl.lit(None, dtype=SHIPMENT_SCHEMA[c]).alias(c) for c in unset])

    return _select_shipment_columns(df)


def _select_shipment_columns(df: pl.DataFrame) -> pl.DataFrame:
    """Select SHIPMENT_COLS in order with their documented types."""
    return df.select([pl.col(c).cast(SHIPMENT_SCHEMA[c]) for c in SHIPMENT_COLS])


__all__ = [
    "process_orders",
    "build_shipments",
    "classify_orders",
    "add_parcels",
    "assemble_shipments",
]
