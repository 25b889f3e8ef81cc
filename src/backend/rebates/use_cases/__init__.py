"""Use-case level logic.

These modules implement rebate calculation rules on top of already-fetched
rebate and product values.

They should be:
- deterministic
- unit-testable
- free of storage details (stores are injected)
"""
