"""
TCGplayer Export Columns

Header names of the TCGplayer seller exports and their mapping to the
normalized order schema (shared.orders.columns).
"""


# =============================================================================
# SHIPPING EXPORT (one row per order)
# =============================================================================

# Export header -> normalized order column
ORDER_COLUMN_MAPPING = {
    "Order #": "order_id",
    "FirstName": "first_name",
    "LastName": "last_name",
    "Address1": "street1",
    "Address2": "street2",
    "City": "city",
    "State": "state",
    "PostalCode": "postal_code",
    "Country": "country",
    "Item Count": "item_count",
    "Value Of Products": "value_cents",
    "Shipping Method": "shipping_method",
}

REQUIRED_EXPORT_COLS = list(ORDER_COLUMN_MAPPING)

# Other columns seen in the export, carried through untouched:
#   Order Date, Product Weight, Shipping Fee Paid, Tracking #, Carrier


# =============================================================================
# PULL SHEET EXPORT (one row per product)
# =============================================================================

PULL_SHEET_COLS = [
    "Product Line",
    "Product Name",
    "Condition",
    "Number",
    "Set",
    "Rarity",
    "Quantity",
]

# Printed table: (header, source column)
PULL_SHEET_TABLE = [
    ("Qty", "Quantity"),
    ("Card Name", "Product Name"),
    ("Set", "Set"),
    ("#", "Number"),
    ("Rarity", "Rarity"),
    ("Condition", "Condition"),
]
