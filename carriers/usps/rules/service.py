"""
Service Rules

Decide the USPS service tier of a shipment. Checked in priority order,
first match wins:

    1. EXPEDITED        - expedited order -> configured expedited service
    2. OVER_FLAT_VALUE  - value >= flat max value -> GroundAdvantage
    3. OVER_FLAT_COUNT  - items > flat max item count -> GroundAdvantage
    4. FIRST_CLASS      - everything else -> First

The flat profile's limits are the ceiling for First even when the package
will be a letter.
"""

import polars as pl

from shared.orders import is_expedited
from shared.rules import Rule
from ..data.reference.services import FIRST, GROUND_ADVANTAGE


class Expedited(Rule):
    """Expedited orders use the configured expedited service."""

    name = "EXPEDITED"
    decision = "service"
    priority = 1

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return is_expedited()

    @classmethod
    def result(cls, settings) -> pl.Expr:
        return pl.lit(settings.expedited_service, dtype=pl.Utf8)


class OverFlatValue(Rule):
    """Merchandise value at or above the flat maximum."""

    name = "OVER_FLAT_VALUE"
    decision = "service"
    priority = 2
    outcome = GROUND_ADVANTAGE

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return pl.col("value_cents") >= settings.limits.flat_max_value_cents


class OverFlatCount(Rule):
    """More items than fit in a flat."""

    name = "OVER_FLAT_COUNT"
    decision = "service"
    priority = 3
    outcome = GROUND_ADVANTAGE

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        return pl.col("item_count") > settings.limits.flat_max_item_count


class FirstClass(Rule):
    """Catch-all: First-Class."""

    name = "FIRST_CLASS"
    decision = "service"
    priority = 4
    outcome = FIRST
