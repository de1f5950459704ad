"""
Packaging Weights and Default Package Profiles

Weights of the supplies that go into each package type, in ounces, and the
default profile values built from them.
"""

from decimal import Decimal


# =============================================================================
# SUPPLY WEIGHTS (oz)
# =============================================================================

SLEEVED_CARD_OZ = Decimal("0.09")
NO_10_ENVELOPE_OZ = Decimal("0.2")
TEAM_BAG_OZ = Decimal("0.03")
PACKING_SLIP_OZ = Decimal("0.08")
BUBBLE_MAILER_5X7_OZ = Decimal("0.3")
BUBBLE_MAILER_7X9_OZ = Decimal("0.45")
RACK_CARD_OZ = Decimal("0.18")
BINDER_PAGE_OZ = Decimal("0.14")
LETTER_PAPER_OZ = Decimal("0.2")


# =============================================================================
# DEFAULT PROFILES
# =============================================================================

DEFAULT_PER_ITEM_WEIGHT = SLEEVED_CARD_OZ

# #10 envelope with a rack card and binder page for stiffness: 0.60 oz
DEFAULT_LETTER_BASE_WEIGHT = NO_10_ENVELOPE_OZ + RACK_CARD_OZ + BINDER_PAGE_OZ + PACKING_SLIP_OZ

# 5x7 bubble mailer, cards in two team bags: 0.44 oz
DEFAULT_FLAT_BASE_WEIGHT = BUBBLE_MAILER_5X7_OZ + TEAM_BAG_OZ * 2 + PACKING_SLIP_OZ

# 7x9 bubble mailer, four team bags wrapped in letter paper: 0.85 oz
DEFAULT_PARCEL_BASE_WEIGHT = (
    BUBBLE_MAILER_7X9_OZ + TEAM_BAG_OZ * 4 + LETTER_PAPER_OZ + PACKING_SLIP_OZ
)

DEFAULT_MAX_LETTER_ITEM_COUNT = 24
DEFAULT_MAX_FLAT_ITEM_COUNT = 100
DEFAULT_MAX_LETTER_VALUE = 50
DEFAULT_MAX_FLAT_VALUE = 50

# Dimensions in inches: (length, width, height)
DEFAULT_LETTER_DIMENSIONS = ("9.5", "4.125", "0.25")
DEFAULT_FLAT_DIMENSIONS = ("5", "7", "0.75")
DEFAULT_PARCEL_DIMENSIONS = ("7", "9", "0.75")
