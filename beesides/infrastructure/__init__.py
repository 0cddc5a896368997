"""Infrastructure Layer — clients for the hosted backend, the catalog provider, and logging.

Invariants:
    - Every collaborator failure is mapped to a core/errors.py type before leaving this layer
"""
