"""
Unit Tests for USPS Shipping Settings

Tests settings files, defaults and number parsing.

Run with: pytest carriers/usps/tests/test_settings.py -v
"""

import json
from decimal import Decimal

import pytest

from carriers.usps.data import (
    DEFAULT_SETTINGS,
    GROUND_ADVANTAGE,
    PRIORITY,
    FLAT,
    PARCEL,
    InvalidConfigurationError,
    load_settings,
    parse_number,
    resolve_settings,
    settings_from_dict,
    settings_to_dict,
    write_default_settings,
)


# =============================================================================
# SETTINGS FILES
# =============================================================================

class TestSettingsFiles:
    """Reading and writing settings JSON."""

    def test_empty_document_is_defaults(self):
        assert settings_from_dict({}) == DEFAULT_SETTINGS

    def test_partial_section_keeps_other_defaults(self):
        settings = settings_from_dict({"letter": {"max_item_count": 30}})
        assert settings.letter.max_item_count == "30"
        assert settings.letter.base_weight == DEFAULT_SETTINGS.letter.base_weight
        assert settings.flat == DEFAULT_SETTINGS.flat

    def test_camel_case_keys(self):
        settings = settings_from_dict({
            "fromAddress": {"name": "Card Shop"},
            "labelFormat": "PNG",
            "expeditedService": PRIORITY,
            "flat": {"maxValue": "75", "labelSize": "6x4"},
        })
        assert settings.from_address.name == "Card Shop"
        assert settings.label_format == "PNG"
        assert settings.expedited_service == PRIORITY
        assert settings.flat.max_value == "75"
        assert settings.flat.label_size == "6x4"

    def test_unknown_keys_ignored(self):
        assert settings_from_dict({"theme": "dark", "letter": {"color": "red"}}) == DEFAULT_SETTINGS

    def test_malformed_number_still_loads(self):
        """Bad numbers only fail when shipments are classified."""
        settings = settings_from_dict({"flat": {"max_value": "fifty"}})
        assert settings.flat.max_value == "fifty"
        with pytest.raises(InvalidConfigurationError):
            resolve_settings(settings)

    def test_write_then_load(self, tmp_path):
        path = write_default_settings(tmp_path / "settings.json")
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_parcel_has_no_limits_in_file(self):
        data = settings_to_dict(DEFAULT_SETTINGS)
        assert "max_item_count" not in data["parcel"]
        assert data["letter"]["max_item_count"] == "24"

    def test_load_non_object_raises(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ValueError, match="JSON object"):
            load_settings(path)


# =============================================================================
# RESOLVING
# =============================================================================

class TestResolveSettings:
    """Parsing settings for classification."""

    def test_defaults_resolve(self):
        resolved = resolve_settings(DEFAULT_SETTINGS)
        assert resolved.limits.letter_max_item_count == 24
        assert resolved.limits.flat_max_value_cents == 5000
        assert resolved.profile_errors == {}
        assert resolved.letter.base_weight == Decimal("0.60")

    def test_profile_lookup(self):
        resolved = resolve_settings(DEFAULT_SETTINGS)
        assert resolved.profile("Flat") is resolved.flat

    def test_missing_expedited_service_defaults(self):
        resolved = resolve_settings(DEFAULT_SETTINGS._replace(expedited_service=None))
        assert resolved.expedited_service == GROUND_ADVANTAGE

    def test_unknown_expedited_service(self):
        with pytest.raises(InvalidConfigurationError, match="expedited_service"):
            resolve_settings(DEFAULT_SETTINGS._replace(expedited_service="Overnight"))

    def test_unknown_label_format(self):
        with pytest.raises(InvalidConfigurationError, match="label_format"):
            resolve_settings(DEFAULT_SETTINGS._replace(label_format="ZPL"))

    def test_unknown_label_size_only_breaks_its_profile(self):
        bad = DEFAULT_SETTINGS._replace(parcel=DEFAULT_SETTINGS.parcel._replace(label_size="8x10"))
        resolved = resolve_settings(bad)
        assert resolved.parcel is None
        assert "parcel.label_size" in resolved.profile_errors[PARCEL]
        assert resolved.letter is not None

    def test_bad_profile_number_collected(self):
        bad = DEFAULT_SETTINGS._replace(flat=DEFAULT_SETTINGS.flat._replace(height="0,75"))
        resolved = resolve_settings(bad)
        assert resolved.profile("Flat") is None
        assert list(resolved.profile_errors) == [FLAT]
        assert "flat.height" in resolved.profile_errors[FLAT]

    def test_bad_threshold_raises(self):
        bad = DEFAULT_SETTINGS._replace(letter=DEFAULT_SETTINGS.letter._replace(max_item_count="x"))
        with pytest.raises(InvalidConfigurationError, match="letter.max_item_count"):
            resolve_settings(bad)


class TestParseNumber:
    """Settings numbers are strict."""

    @pytest.mark.parametrize("value, expected", [
        ("0.09", Decimal("0.09")),
        (" 24 ", Decimal("24")),
        (50, Decimal("50")),
        ("0", Decimal("0")),
    ])
    def test_valid(self, value, expected):
        assert parse_number(value, "field") == expected

    @pytest.mark.parametrize("value", ["", None, "abc", "NaN", "Infinity", "-1"])
    def test_invalid(self, value):
        with pytest.raises(InvalidConfigurationError, match="field"):
            parse_number(value, "field")

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_number("abc", "field")
