"""
USPS Data

Reference data and the shipping settings used by the classification rules.

Structure:
    - reference/: Static reference data (packaging, labels, services)
    - settings.py: User-editable settings, defaults, and parsing
"""

from .reference.labels import LABEL_SIZES, LABEL_FORMATS
from .reference.services import (
    CARRIER,
    FIRST,
    GROUND_ADVANTAGE,
    PRIORITY,
    EXPRESS,
    SERVICES,
    LETTER,
    FLAT,
    PARCEL,
    PACKAGE_TYPES,
)
from .reference.delivery_confirmation import (
    SIGNATURE,
    NO_SIGNATURE,
    SIGNATURE_THRESHOLD_CENTS,
)
from .settings import (
    Address,
    PackageProfile,
    ShippingSettings,
    ResolvedLimits,
    ResolvedProfile,
    ResolvedSettings,
    InvalidConfigurationError,
    DEFAULT_SETTINGS,
    resolve_settings,
    parse_number,
    settings_from_dict,
    settings_to_dict,
    load_settings,
    write_default_settings,
)


__all__ = [
    # Labels
    "LABEL_SIZES",
    "LABEL_FORMATS",
    # Services and package types
    "CARRIER",
    "FIRST",
    "GROUND_ADVANTAGE",
    "PRIORITY",
    "EXPRESS",
    "SERVICES",
    "LETTER",
    "FLAT",
    "PARCEL",
    "PACKAGE_TYPES",
    # Delivery confirmation
    "SIGNATURE",
    "NO_SIGNATURE",
    "SIGNATURE_THRESHOLD_CENTS",
    # Settings
    "Address",
    "PackageProfile",
    "ShippingSettings",
    "ResolvedLimits",
    "ResolvedProfile",
    "ResolvedSettings",
    "InvalidConfigurationError",
    "DEFAULT_SETTINGS",
    "resolve_settings",
    "parse_number",
    "settings_from_dict",
    "settings_to_dict",
    "load_settings",
    "write_default_settings",
]
