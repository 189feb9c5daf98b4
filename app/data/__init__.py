"""
Data access layer.

Design rules:
- Views call ONLY functions in this package.
- Every read goes through contracts.parse_rows before a view sees it.
- A failed read becomes an empty result plus a warning, never an exception in a view.
- No env var reads here (config-only).
"""
