"""API Layer — FastAPI routes, middleware, envelope and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All module endpoints return the APIResponse envelope
    - Only this layer chooses HTTP status codes

Design Decisions:
    - Thin routes delegate to services; errors travel as exceptions to error_handlers
"""
