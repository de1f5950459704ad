"""Shipment builder version, printed by the scripts."""

VERSION = "2025.11.0"
