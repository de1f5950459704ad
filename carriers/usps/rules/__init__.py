"""
USPS Classification Rules

Exports the service and package rule cascades.

Each cascade is applied with shared.rules.apply_rules: rules are checked
in priority order and only the first match decides the value. The last
rule of each cascade is a catch-all.

Usage:
    from carriers.usps.rules import SERVICE_RULES, PACKAGE_RULES
"""

from decimal import Decimal

import polars as pl

from shared.rules import Rule, apply_rules, validate_rules
from ..data.settings import ShippingSettings, resolve_settings
from .service import Expedited, OverFlatValue, OverFlatCount, FirstClass
from .package import (
    ParcelOverFlatCount,
    ParcelExpedited,
    ParcelOverFlatValue,
    FlatOverLetterCount,
    LetterDefault,
)


SERVICE_RULES: list[type[Rule]] = [Expedited, OverFlatValue, OverFlatCount, FirstClass]

PACKAGE_RULES: list[type[Rule]] = [
    ParcelOverFlatCount, ParcelExpedited, ParcelOverFlatValue,
    FlatOverLetterCount, LetterDefault,
]

ALL: list[type[Rule]] = SERVICE_RULES + PACKAGE_RULES


# Run validation at import time
validate_rules(ALL)


# =============================================================================
# SINGLE-ORDER HELPERS
# =============================================================================

def _single_order(item_count: int, value, shipping_method: str) -> pl.DataFrame:
    """One-row order frame; value is a currency amount (str, int or Decimal)."""
    cents = int((Decimal(str(value)) * 100).to_integral_value())
    return pl.DataFrame([{
        "item_count": item_count,
        "value_cents": cents,
        "shipping_method": shipping_method,
    }])


def classify_service(
    item_count: int,
    value,
    shipping_method: str,
    settings: ShippingSettings,
) -> str:
    """Service tier for a single order (e.g. classify_service(3, "12.50", "Standard", s))."""
    df = apply_rules(
        _single_order(item_count, value, shipping_method),
        SERVICE_RULES, resolve_settings(settings), "service", "service_rule",
    )
    return df["service"][0]


def classify_package(
    item_count: int,
    value,
    shipping_method: str,
    settings: ShippingSettings,
) -> str:
    """Package type for a single order."""
    df = apply_rules(
        _single_order(item_count, value, shipping_method),
        PACKAGE_RULES, resolve_settings(settings), "package_type", "package_rule",
    )
    return df["package_type"][0]


__all__ = [
    # Rule classes
    "Expedited",
    "OverFlatValue",
    "OverFlatCount",
    "FirstClass",
    "ParcelOverFlatCount",
    "ParcelExpedited",
    "ParcelOverFlatValue",
    "FlatOverLetterCount",
    "LetterDefault",
    # Lists
    "SERVICE_RULES",
    "PACKAGE_RULES",
    "ALL",
    # Helpers
    "classify_service",
    "classify_package",
]
