"""State/store layer.

This package is the single source of truth for how proposed partial state is
merged into the shared history state, how the difference to the previous state
is resolved, and how the result is committed and announced.
"""
