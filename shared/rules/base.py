"""
Decision Rule Base Class

Shared base class for classification rules. A rule is a condition over an
order row plus the outcome it decides when the condition holds.

Rules that decide the same thing (e.g., "service") form a cascade: they are
checked in priority order and the first match wins.
"""

from abc import ABC

import polars as pl


# =============================================================================
# BASE CLASS
# =============================================================================

class Rule(ABC):
    """
    Base class for all classification rules.

    Attributes:
        IDENTITY
            name        - Short code (e.g., "EXPEDITED", "OVER_FLAT_VALUE")

        DECISION
            decision    - Column this rule decides (e.g., "service")
            priority    - Rank within the decision (1 = checked first)
            outcome     - Literal value written when the rule matches

    Settings are passed to conditions() and result() explicitly so that a
    rule never reads ambient configuration.
    """

    # -------------------------------------------------------------------------
    # IDENTITY
    # -------------------------------------------------------------------------
    name: str

    # -------------------------------------------------------------------------
    # DECISION
    # -------------------------------------------------------------------------
    decision: str
    priority: int
    outcome: str | None = None

    # -------------------------------------------------------------------------
    # METHODS
    # -------------------------------------------------------------------------

    @classmethod
    def conditions(cls, settings) -> pl.Expr:
        """
        Polars expression for when this rule matches.

        Default returns True (for the catch-all rule at the end of a cascade).
        Override for rules with specific conditions.
        """
        return pl.lit(True)

    @classmethod
    def result(cls, settings) -> pl.Expr:
        """Value decided when the rule matches (defaults to the literal outcome)."""
        return pl.lit(cls.outcome, dtype=pl.Utf8)


# =============================================================================
# APPLICATION
# =============================================================================

def apply_rules(
    df: pl.DataFrame,
    rules: list[type[Rule]],
    settings,
    decision_col: str,
    rule_col: str,
) -> pl.DataFrame:
    """
    Apply a rule cascade, first match wins.

    Args:
        df: Order DataFrame
        rules: Rules deciding the same column (any order, sorted by priority)
        settings: Settings snapshot handed to every rule
        decision_col: Output column for the decided value
        rule_col: Output column naming the rule that matched

    Returns:
        DataFrame with decision_col and rule_col added. Rows no rule matches
        get nulls in both columns.
    """
    if not rules:
        raise ValueError(f"No rules given for '{decision_col}'")

    ordered = sorted(rules, key=lambda r: r.priority)
    first, rest = ordered[0], ordered[1:]

    decided = pl.when(first.conditions(settings)).then(first.result(settings))
    matched = pl.when(first.conditions(settings)).then(pl.lit(first.name))

    for rule in rest:
        decided = decided.when(rule.conditions(settings)).then(rule.result(settings))
        matched = matched.when(rule.conditions(settings)).then(pl.lit(rule.name))

    return df.with_columns([
        decided.otherwise(pl.lit(None, dtype=pl.Utf8)).alias(decision_col),
        matched.otherwise(pl.lit(None, dtype=pl.Utf8)).alias(rule_col),
    ])


def validate_rules(rules: list[type[Rule]]) -> None:
    """
    Validate rule configuration integrity.

    Raises ValueError if any configuration issues are found.
    """
    errors = []

    names = [r.name for r in rules]
    for name in sorted({n for n in names if names.count(n) > 1}):
        errors.append(f"{name}: rule name used more than once")

    for decision in sorted({r.decision for r in rules}):
        group = [r for r in rules if r.decision == decision]
        priorities = [r.priority for r in group]
        if len(set(priorities)) != len(priorities):
            errors.append(f"{decision}: rules share a priority")

        # The lowest-ranked rule must be the catch-all so every row is decided
        last = max(group, key=lambda r: r.priority)
        if last.conditions.__func__ is not Rule.conditions.__func__:
            errors.append(f"{decision}: last rule {last.name} must not override conditions()")

    if errors:
        raise ValueError("Rule configuration errors:\n  " + "\n  ".join(errors))
