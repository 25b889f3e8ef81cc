"""Data access adapters for rebates and products.

Keep these modules small and testable:
- No calculation rules
- Pure IO + parsing helpers
"""
