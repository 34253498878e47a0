"""Infrastructure — database sessions, repository implementations, logging.

Invariants:
    - Implements core/repository_protocols.py contracts; core never imports from here
"""
