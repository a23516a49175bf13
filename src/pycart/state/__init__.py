"""Cart state layer.

This package owns the in-memory cart, the rules deciding whether a
mutation may happen, and the persisted snapshot format.
"""
