"""
USPS Carrier Module

Label batch builder for USPS: classifies merged marketplace orders into
service tiers and package profiles and writes the batch files.
"""

from .build_shipments import process_orders, build_shipments
from .export import export_batch, export_shipment
from .overrides import apply_overrides
from .version import VERSION

__all__ = [
    "process_orders",
    "build_shipments",
    "export_batch",
    "export_shipment",
    "apply_overrides",
    "VERSION",
]
