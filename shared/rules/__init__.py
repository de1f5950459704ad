"""
Shared Rules

Base class and utilities for first-match classification rules.
"""

from .base import Rule, apply_rules, validate_rules

__all__ = [
    "Rule",
    "apply_rules",
    "validate_rules",
]
