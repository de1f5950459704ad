"""
Shipping Settings

The user-editable configuration for shipment classification, and its
parsed ("resolved") form used by the rules.

STORED VS RESOLVED
------------------
ShippingSettings holds numbers as the strings the user typed. They are only
parsed by resolve_settings(), at classification time, so a settings file
with a typo still loads; the shipments it would classify report the error
instead (see InvalidConfigurationError).

A bad rule threshold, label format or expedited service affects every
shipment. A bad field in one package profile (weights, dimensions, label
size) only affects the shipments packed in that profile.

DEFAULTS
--------
Missing sections or fields in a settings file fall back to the defaults
field by field when read. The file itself is never rewritten.
"""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import NamedTuple

from .reference.packaging import (
    DEFAULT_PER_ITEM_WEIGHT,
    DEFAULT_LETTER_BASE_WEIGHT,
    DEFAULT_FLAT_BASE_WEIGHT,
    DEFAULT_PARCEL_BASE_WEIGHT,
    DEFAULT_MAX_LETTER_ITEM_COUNT,
    DEFAULT_MAX_FLAT_ITEM_COUNT,
    DEFAULT_MAX_LETTER_VALUE,
    DEFAULT_MAX_FLAT_VALUE,
    DEFAULT_LETTER_DIMENSIONS,
    DEFAULT_FLAT_DIMENSIONS,
    DEFAULT_PARCEL_DIMENSIONS,
)
from .reference.labels import (
    LABEL_SIZES,
    LABEL_FORMATS,
    DEFAULT_LETTER_LABEL_SIZE,
    DEFAULT_FLAT_LABEL_SIZE,
    DEFAULT_PARCEL_LABEL_SIZE,
    DEFAULT_LABEL_FORMAT,
)
from .reference.services import (
    SERVICES,
    DEFAULT_EXPEDITED_SERVICE,
    LETTER,
    FLAT,
    PARCEL,
)


class InvalidConfigurationError(ValueError):
    """A settings field could not be parsed for classification."""


# =============================================================================
# STORED SETTINGS
# =============================================================================

class Address(NamedTuple):
    """A postal address as the label batch expects it."""
    name: str = ""
    company: str = ""
    street1: str = ""
    street2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = "US"
    phone: str = ""
    email: str = ""


class PackageProfile(NamedTuple):
    """
    Physical parameters of one package type.

    All numbers are strings as entered. Weights are in ounces, dimensions in
    inches. max_item_count and max_value only apply to letter and flat.
    """
    label_size: str
    base_weight: str
    per_item_weight: str
    length: str
    width: str
    height: str
    max_item_count: str | None = None
    max_value: str | None = None


DEFAULT_LETTER = PackageProfile(
    label_size=DEFAULT_LETTER_LABEL_SIZE,
    base_weight=str(DEFAULT_LETTER_BASE_WEIGHT),
    per_item_weight=str(DEFAULT_PER_ITEM_WEIGHT),
    length=DEFAULT_LETTER_DIMENSIONS[0],
    width=DEFAULT_LETTER_DIMENSIONS[1],
    height=DEFAULT_LETTER_DIMENSIONS[2],
    max_item_count=str(DEFAULT_MAX_LETTER_ITEM_COUNT),
    max_value=str(DEFAULT_MAX_LETTER_VALUE),
)

DEFAULT_FLAT = PackageProfile(
    label_size=DEFAULT_FLAT_LABEL_SIZE,
    base_weight=str(DEFAULT_FLAT_BASE_WEIGHT),
    per_item_weight=str(DEFAULT_PER_ITEM_WEIGHT),
    length=DEFAULT_FLAT_DIMENSIONS[0],
    width=DEFAULT_FLAT_DIMENSIONS[1],
    height=DEFAULT_FLAT_DIMENSIONS[2],
    max_item_count=str(DEFAULT_MAX_FLAT_ITEM_COUNT),
    max_value=str(DEFAULT_MAX_FLAT_VALUE),
)

DEFAULT_PARCEL = PackageProfile(
    label_size=DEFAULT_PARCEL_LABEL_SIZE,
    base_weight=str(DEFAULT_PARCEL_BASE_WEIGHT),
    per_item_weight=str(DEFAULT_PER_ITEM_WEIGHT),
    length=DEFAULT_PARCEL_DIMENSIONS[0],
    width=DEFAULT_PARCEL_DIMENSIONS[1],
    height=DEFAULT_PARCEL_DIMENSIONS[2],
)


class ShippingSettings(NamedTuple):
    """Complete classification configuration, one snapshot per run."""
    from_address: Address = Address()
    letter: PackageProfile = DEFAULT_LETTER
    flat: PackageProfile = DEFAULT_FLAT
    parcel: PackageProfile = DEFAULT_PARCEL
    label_format: str = DEFAULT_LABEL_FORMAT
    expedited_service: str | None = DEFAULT_EXPEDITED_SERVICE


DEFAULT_SETTINGS = ShippingSettings()


# =============================================================================
# RESOLVED SETTINGS
# =============================================================================

class ResolvedLimits(NamedTuple):
    """
    Thresholds read by the classification rules, for every shipment.

    The letter max_value is stored but not read: the flat value limit is
    the ceiling for First-Class letters too.
    """
    letter_max_item_count: float
    flat_max_item_count: float
    flat_max_value_cents: float


class ResolvedProfile(NamedTuple):
    """A PackageProfile with every number parsed."""
    package_type: str
    label_size: str
    base_weight: Decimal
    per_item_weight: Decimal
    length: float
    width: float
    height: float


class ResolvedSettings(NamedTuple):
    """
    ShippingSettings with every number parsed and every choice checked.

    A profile that does not parse is None, with its error message in
    profile_errors. Only shipments packed in that profile are affected.
    """
    from_address: Address
    limits: ResolvedLimits
    letter: ResolvedProfile | None
    flat: ResolvedProfile | None
    parcel: ResolvedProfile | None
    label_format: str
    expedited_service: str
    profile_errors: dict[str, str]

    def profile(self, package_type: str) -> ResolvedProfile | None:
        """Profile for a package type name ("Letter", "Flat", "Parcel")."""
        return {LETTER: self.letter, FLAT: self.flat, PARCEL: self.parcel}[package_type]


def resolve_settings(settings: ShippingSettings) -> ResolvedSettings:
    """
    Parse every field the rules and parcels need.

    Raises:
        InvalidConfigurationError: for a field every shipment reads (label
            format, expedited service, rule thresholds). Errors in a
            package profile are collected in profile_errors instead.
    """
    label_format = settings.label_format
    if label_format not in LABEL_FORMATS:
        raise InvalidConfigurationError(
            f"label_format: {label_format!r} is not one of {LABEL_FORMATS}"
        )

    expedited_service = settings.expedited_service or DEFAULT_EXPEDITED_SERVICE
    if expedited_service not in SERVICES:
        raise InvalidConfigurationError(
            f"expedited_service: {expedited_service!r} is not one of {SERVICES}"
        )

    limits = ResolvedLimits(
        letter_max_item_count=float(
            parse_number(settings.letter.max_item_count, "letter.max_item_count")
        ),
        flat_max_item_count=float(
            parse_number(settings.flat.max_item_count, "flat.max_item_count")
        ),
        flat_max_value_cents=float(
            parse_number(settings.flat.max_value, "flat.max_value") * 100
        ),
    )

    profiles = {}
    profile_errors = {}
    for section, package_type, profile in (
        ("letter", LETTER, settings.letter),
        ("flat", FLAT, settings.flat),
        ("parcel", PARCEL, settings.parcel),
    ):
        try:
            profiles[package_type] = _resolve_profile(section, package_type, profile)
        except InvalidConfigurationError as e:
            profiles[package_type] = None
            profile_errors[package_type] = str(e)

    return ResolvedSettings(
        from_address=settings.from_address,
        limits=limits,
        letter=profiles[LETTER],
        flat=profiles[FLAT],
        parcel=profiles[PARCEL],
        label_format=label_format,
        expedited_service=expedited_service,
        profile_errors=profile_errors,
    )


def _resolve_profile(
    section: str,
    package_type: str,
    profile: PackageProfile,
) -> ResolvedProfile:
    """Parse one profile; section names the profile in error messages."""
    if profile.label_size not in LABEL_SIZES:
        raise InvalidConfigurationError(
            f"{section}.label_size: {profile.label_size!r} is not one of {LABEL_SIZES}"
        )

    def number(field: str) -> Decimal:
        return parse_number(getattr(profile, field), f"{section}.{field}")

    return ResolvedProfile(
        package_type=package_type,
        label_size=profile.label_size,
        base_weight=number("base_weight"),
        per_item_weight=number("per_item_weight"),
        length=float(number("length")),
        width=float(number("width")),
        height=float(number("height")),
    )


def parse_number(value, field: str) -> Decimal:
    """
    Parse a settings number.

    Empty, non-numeric, non-finite and negative values are rejected rather
    than read as zero: a zero threshold would push every shipment into the
    largest package type.
    """
    text = "" if value is None else str(value).strip()
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise InvalidConfigurationError(f"{field}: {value!r} is not a number") from None

    if not number.is_finite():
        raise InvalidConfigurationError(f"{field}: {value!r} is not a finite number")
    if number < 0:
        raise InvalidConfigurationError(f"{field}: {value!r} must not be negative")
    return number


# =============================================================================
# SETTINGS FILES
# =============================================================================

# camelCase keys (as saved by the browser settings form) -> field names
_KEY_ALIASES = {
    "fromAddress": "from_address",
    "labelFormat": "label_format",
    "expeditedService": "expedited_service",
    "labelSize": "label_size",
    "baseWeight": "base_weight",
    "perItemWeight": "per_item_weight",
    "maxItemCount": "max_item_count",
    "maxValue": "max_value",
}


def _canonical(data: dict) -> dict:
    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}


def _merge(defaults: NamedTuple, stored: dict | None, as_text: bool):
    """Overlay stored fields on a defaults tuple; unknown keys are ignored."""
    stored = _canonical(stored or {})
    values = {}
    for field, default in defaults._asdict().items():
        value = stored.get(field)
        if value is None:
            values[field] = default
        else:
            values[field] = str(value) if as_text else value
    return type(defaults)(**values)


def settings_from_dict(data: dict) -> ShippingSettings:
    """
    Build settings from a (possibly partial) settings document.

    Accepts snake_case or camelCase keys. Values are kept as given (numbers
    become strings) and are not validated here.
    """
    data = _canonical(data)
    return ShippingSettings(
        from_address=_merge(DEFAULT_SETTINGS.from_address, data.get("from_address"), as_text=True),
        letter=_merge(DEFAULT_SETTINGS.letter, data.get("letter"), as_text=True),
        flat=_merge(DEFAULT_SETTINGS.flat, data.get("flat"), as_text=True),
        parcel=_merge(DEFAULT_SETTINGS.parcel, data.get("parcel"), as_text=True),
        label_format=data.get("label_format") or DEFAULT_SETTINGS.label_format,
        expedited_service=data.get("expedited_service") or DEFAULT_SETTINGS.expedited_service,
    )


def settings_to_dict(settings: ShippingSettings) -> dict:
    """JSON-ready form of the settings (snake_case keys)."""
    return {
        "from_address": settings.from_address._asdict(),
        "letter": settings.letter._asdict(),
        "flat": settings.flat._asdict(),
        "parcel": {
            k: v for k, v in settings.parcel._asdict().items()
            if k not in ("max_item_count", "max_value")
        },
        "label_format": settings.label_format,
        "expedited_service": settings.expedited_service,
    }


def load_settings(path: str | Path) -> ShippingSettings:
    """Load settings from a JSON file, filling gaps with defaults."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")

    return settings_from_dict(data)


def write_default_settings(path: str | Path) -> Path:
    """Write the default settings as a JSON template."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(DEFAULT_SETTINGS), f, indent=2)
        f.write("\n")
    return path
