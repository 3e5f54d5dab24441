"""Infrastructure Layer — database access, startup retry and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All store failures mapped to DatabaseError before leaving this layer

Design Decisions:
    - Resilient wrappers over raw clients: retry and error mapping live here,
      not in the engines
"""
