"""
USPS Services and Package Types

Service tiers and predefined package names as the label batch expects them.
"""

CARRIER = "USPS"

# -----------------------------------------------------------------------------
# SERVICE TIERS
# -----------------------------------------------------------------------------
FIRST = "First"
GROUND_ADVANTAGE = "GroundAdvantage"
PRIORITY = "Priority"
EXPRESS = "Express"

SERVICES = [FIRST, GROUND_ADVANTAGE, PRIORITY, EXPRESS]

# Used for expedited orders when no expedited service is configured
DEFAULT_EXPEDITED_SERVICE = GROUND_ADVANTAGE

# -----------------------------------------------------------------------------
# PACKAGE TYPES
# -----------------------------------------------------------------------------
LETTER = "Letter"
FLAT = "Flat"
PARCEL = "Parcel"

PACKAGE_TYPES = [LETTER, FLAT, PARCEL]
