"""PageQuery — a paged query engine behind a small FastAPI catalog service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
