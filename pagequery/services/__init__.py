"""Services Layer — async orchestration of IO around the pure core.

Invariants:
    - Services call core/ for decisions and PageSource implementations for IO
    - Services never catch source failures; callers decide how to surface them
"""
