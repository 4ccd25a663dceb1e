"""Services Layer — async orchestration of pure core rules around the key-value store.

Invariants:
    - Services take their store, clock and collaborators in __init__
    - Missing entities come back as None; only store/advisor failures raise
"""
