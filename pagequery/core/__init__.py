"""Core Layer — pure paging logic and boundary contracts, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
"""
