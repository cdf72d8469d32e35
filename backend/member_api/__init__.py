"""Member API Package: CRUD HTTP service over the members table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
