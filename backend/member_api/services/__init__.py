"""Services Layer: member operations between routes and the store.

Invariants:
    - Services raise MemberApiError subclasses only; routes never see driver errors
"""
