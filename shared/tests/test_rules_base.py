"""
Unit Tests for Decision Rules

Tests cascade application (first match wins) and rule configuration checks.

Run with: pytest shared/tests/test_rules_base.py -v
"""

import pytest
import polars as pl

from shared.rules import Rule, apply_rules, validate_rules


# =============================================================================
# FIXTURES
# =============================================================================

class Big(Rule):
    name = "BIG"
    decision = "size"
    priority = 1
    outcome = "big"

    @classmethod
    def conditions(cls, settings):
        return pl.col("n") > settings["limit"]


class Odd(Rule):
    name = "ODD"
    decision = "size"
    priority = 2
    outcome = "odd"

    @classmethod
    def conditions(cls, settings):
        return pl.col("n") % 2 == 1


class Small(Rule):
    name = "SMALL"
    decision = "size"
    priority = 3
    outcome = "small"


@pytest.fixture
def numbers():
    return pl.DataFrame({"n": [1, 2, 11, 12]})


SETTINGS = {"limit": 10}


# =============================================================================
# APPLY
# =============================================================================

class TestApplyRules:
    """First matching rule decides."""

    def test_first_match_wins(self, numbers):
        df = apply_rules(numbers, [Big, Odd, Small], SETTINGS, "size", "size_rule")
        assert df["size"].to_list() == ["odd", "small", "big", "big"]

    def test_rule_names_recorded(self, numbers):
        df = apply_rules(numbers, [Big, Odd, Small], SETTINGS, "size", "size_rule")
        assert df["size_rule"].to_list() == ["ODD", "SMALL", "BIG", "BIG"]

    def test_list_order_does_not_matter(self, numbers):
        forward = apply_rules(numbers, [Big, Odd, Small], SETTINGS, "size", "r")
        backward = apply_rules(numbers, [Small, Odd, Big], SETTINGS, "size", "r")
        assert forward["size"].to_list() == backward["size"].to_list()

    def test_settings_passed_to_conditions(self, numbers):
        df = apply_rules(numbers, [Big, Odd, Small], {"limit": 0}, "size", "r")
        assert df["size"].to_list() == ["big"] * 4

    def test_no_match_gives_null(self, numbers):
        df = apply_rules(numbers, [Big], SETTINGS, "size", "r")
        assert df["size"].to_list() == [None, None, "big", "big"]
        assert df["r"].null_count() == 2

    def test_empty_rule_list_raises(self, numbers):
        with pytest.raises(ValueError):
            apply_rules(numbers, [], SETTINGS, "size", "r")


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidateRules:
    """Configuration problems are reported together."""

    def test_valid_cascade(self):
        validate_rules([Big, Odd, Small])

    def test_duplicate_priority(self):
        class AlsoBig(Big):
            name = "ALSO_BIG"

        with pytest.raises(ValueError, match="share a priority"):
            validate_rules([Big, AlsoBig, Odd, Small])

    def test_duplicate_name(self):
        class Renamed(Odd):
            name = "BIG"

        with pytest.raises(ValueError, match="used more than once"):
            validate_rules([Big, Renamed, Small])

    def test_last_rule_must_be_catch_all(self):
        with pytest.raises(ValueError, match="must not override conditions"):
            validate_rules([Big, Odd])
