"""Core Layer — domain entity, business limits, error taxonomy, repository contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
