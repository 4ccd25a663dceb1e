"""Decision Twin — decision journal data layer, outcome follow-ups and advisor proxy.

Invariants:
    - Package root holds no executable code beyond the version string
"""

__version__ = "1.0.0"
