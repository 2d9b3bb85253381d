"""Statement Gate — conformance gate for xAPI experience statements.

Invariants:
    - Package root holds only the version (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
