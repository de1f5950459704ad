"""
Delivery Confirmation

Orders at or above the threshold ship with signature confirmation.
"""

SIGNATURE = "SIGNATURE"
NO_SIGNATURE = "NO_SIGNATURE"

SIGNATURE_THRESHOLD_CENTS = 25_000    # $250.00 merchandise value
