"""Services — business orchestration between the API layer and repositories.

Invariants:
    - Services raise typed errors from core/errors.py; they never build HTTP responses
    - Repositories arrive through constructors, never through module globals
"""
