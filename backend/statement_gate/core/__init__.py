"""Core Layer — pure statement validation, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators never raise on malformed input; they report into a ValidationScope
    - Caller-owned documents are never mutated

Design Decisions:
    - Functional core separated from imperative shell: the HTTP route and the
      repositories orchestrate IO around validate_statements()
"""
