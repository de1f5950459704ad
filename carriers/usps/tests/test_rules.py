"""
Unit Tests for USPS Classification Rules

Tests the service and package cascades at and around every threshold.

Run with: pytest carriers/usps/tests/test_rules.py -v
"""

import pytest

from carriers.usps.data import (
    DEFAULT_SETTINGS,
    FIRST,
    GROUND_ADVANTAGE,
    PRIORITY,
    LETTER,
    FLAT,
    PARCEL,
    InvalidConfigurationError,
)
from carriers.usps.rules import (
    SERVICE_RULES,
    PACKAGE_RULES,
    classify_service,
    classify_package,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    """Defaults: letter <= 24 items, flat <= 100 items, both under $50."""
    return DEFAULT_SETTINGS


@pytest.fixture
def priority_settings():
    return DEFAULT_SETTINGS._replace(expedited_service=PRIORITY)


# =============================================================================
# SERVICE RULES
# =============================================================================

class TestServiceRules:
    """Expedited, then over-flat value, then over-flat count, else First."""

    def test_small_order_is_first(self, settings):
        assert classify_service(3, "12.50", "Standard", settings) == FIRST

    def test_value_at_flat_max_upgrades(self, settings):
        assert classify_service(1, "50.00", "Standard", settings) == GROUND_ADVANTAGE

    def test_value_just_under_flat_max(self, settings):
        assert classify_service(1, "49.99", "Standard", settings) == FIRST

    def test_count_at_flat_max_stays_first(self, settings):
        assert classify_service(100, "1.00", "Standard", settings) == FIRST

    def test_count_over_flat_max_upgrades(self, settings):
        assert classify_service(101, "1.00", "Standard", settings) == GROUND_ADVANTAGE

    def test_expedited_uses_configured_service(self, priority_settings):
        assert classify_service(1, "1.00", "Expedited Priority", priority_settings) == PRIORITY

    def test_expedited_default_service(self, settings):
        assert classify_service(1, "1.00", "Expedited Priority", settings) == GROUND_ADVANTAGE

    def test_empty_expedited_service_falls_back(self):
        blank = DEFAULT_SETTINGS._replace(expedited_service="")
        assert classify_service(1, "1.00", "Expedited", blank) == GROUND_ADVANTAGE

    def test_expedited_beats_value(self, priority_settings):
        assert classify_service(1, "500", "Expedited", priority_settings) == PRIORITY

    def test_letter_limits_do_not_affect_service(self, settings):
        """A 50-item order is over the letter limit but still First."""
        assert classify_service(50, "10", "Standard", settings) == FIRST

    def test_same_inputs_same_answer(self, settings):
        first = classify_service(7, "20", "Standard", settings)
        assert all(classify_service(7, "20", "Standard", settings) == first for _ in range(3))


# =============================================================================
# PACKAGE RULES
# =============================================================================

class TestPackageRules:
    """Parcel when over flat limits or expedited, flat when over letter count."""

    def test_small_order_is_letter(self, settings):
        assert classify_package(3, "12.50", "Standard", settings) == LETTER

    def test_count_at_letter_max_is_letter(self, settings):
        assert classify_package(24, "1", "Standard", settings) == LETTER

    def test_count_over_letter_max_is_flat(self, settings):
        assert classify_package(25, "1", "Standard", settings) == FLAT

    def test_count_at_flat_max_is_flat(self, settings):
        assert classify_package(100, "1", "Standard", settings) == FLAT

    def test_count_over_flat_max_is_parcel(self, settings):
        assert classify_package(101, "1", "Standard", settings) == PARCEL

    def test_expedited_is_parcel(self, settings):
        assert classify_package(1, "1", "Expedited Priority", settings) == PARCEL

    def test_value_at_flat_max_is_parcel(self, settings):
        assert classify_package(1, "50", "Standard", settings) == PARCEL

    def test_letter_value_limit_not_used(self):
        """Only the letter item count moves a package from letter to flat."""
        low_letter_value = DEFAULT_SETTINGS._replace(
            letter=DEFAULT_SETTINGS.letter._replace(max_value="1"),
        )
        assert classify_package(1, "20", "Standard", low_letter_value) == LETTER

    def test_custom_letter_count(self):
        custom = DEFAULT_SETTINGS._replace(
            letter=DEFAULT_SETTINGS.letter._replace(max_item_count="5"),
        )
        assert classify_package(6, "1", "Standard", custom) == FLAT


# =============================================================================
# CONFIGURATION
# =============================================================================

class TestRuleConfiguration:
    """Cascade layout and settings errors."""

    def test_cascades_end_with_catch_all(self):
        assert SERVICE_RULES[-1].outcome == FIRST
        assert PACKAGE_RULES[-1].outcome == LETTER

    def test_unparseable_threshold_raises(self):
        broken = DEFAULT_SETTINGS._replace(
            flat=DEFAULT_SETTINGS.flat._replace(max_value="fifty"),
        )
        with pytest.raises(InvalidConfigurationError, match="flat.max_value"):
            classify_service(1, "1", "Standard", broken)
