"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services receive the store explicitly (no module-level store instance)
    - Input is parsed through schemas before it reaches the store
"""
