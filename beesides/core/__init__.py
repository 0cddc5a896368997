"""Core Layer — pure domain rules, no IO, no framework imports.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - FastAPI, httpx and postgrest never appear here
"""
