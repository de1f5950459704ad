"""
Label Configuration

Physical label sizes and image formats accepted by the label batch.
"""

# Export order for batch files
LABEL_SIZES = ["4x6", "7x3", "6x4"]

LABEL_FORMATS = ["PDF", "PNG"]

DEFAULT_LETTER_LABEL_SIZE = "7x3"
DEFAULT_FLAT_LABEL_SIZE = "4x6"
DEFAULT_PARCEL_LABEL_SIZE = "4x6"
DEFAULT_LABEL_FORMAT = "PDF"
