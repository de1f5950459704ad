"""
Package Rules

Decide the package type of a shipment. Checked in priority order, first
match wins:

    1. PARCEL_OVER_FLAT_COUNT  - items > flat max item count -> Parcel
    2. PARCEL_EXPEDITED        - expedited order -> Parcel
    3. PARCEL_OVER_FLAT_VALUE  - value >= flat max value -> Parcel
    4. FLAT_OVER_LETTER_COUNT  - items > letter max item count -> Flat
    5. LETTER                  - everything else -> Letter

Unlike the service rules, the step down from Parcel to Flat uses the
letter profile's item limit.
"""

import polars as pl

from shared.orders import is_expedited
from shared.rules import Rule
from ..data.reference.services import LETTER, FLAT, PARCEL


class ParcelOverFlatCount(Rule):
    """More items than fit in a flat."""

    name = "PARCEL_OVER_FLAT_COUNT"
    decision = "package_type"
    priority = 1
    outcome = PARCEL

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return pl.col("item_count") > settings.limits.flat_max_item_count


class ParcelExpedited(Rule):
    """Expedited orders always ship as parcels."""

    name = "PARCEL_EXPEDITED"
    decision = "package_type"
    priority = 2
    outcome = PARCEL

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return is_expedited()


class ParcelOverFlatValue(Rule):
    """Merchandise value at or above the flat maximum."""

    name = "PARCEL_OVER_FLAT_VALUE"
    decision = "package_type"
    priority = 3
    outcome = PARCEL

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return pl.col("value_cents") >= settings.limits.flat_max_value_cents


class FlatOverLetterCount(Rule):
    """More items than fit in a letter."""

    name = "FLAT_OVER_LETTER_COUNT"
    decision = "package_type"
    priority = 4
    outcome = FLAT

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return pl.col("item_count") > settings.limits.letter_max_item_count


class LetterDefault(Rule):
    """Catch-all: letter."""

    name = "LETTER"
    decision = "package_type"
    priority = 5
    outcome = LETTER
