"""API Layer — FastAPI routes, the route handler wrapper and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is an envelope (core/envelope.py), health probes excepted
"""
