"""Beesides API Package — music cataloging, ratings, reviews and collections.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
