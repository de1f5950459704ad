"""
Shared

Marketplace- and carrier-independent building blocks: the order schema,
order merging, and the classification rule base.
"""
