"""
USPS Reference Data

Static configuration: packaging weights, label sizes, services and
delivery confirmation policy.
"""
