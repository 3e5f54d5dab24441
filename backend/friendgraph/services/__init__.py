"""Services Layer — identity resolution, edge persistence and the two engines.

Invariants:
    - Engines own transaction boundaries; resolver and edge store never commit
    - Services orchestrate IO around the pure rules in core/

Design Decisions:
    - Mutations (relationship_engine) and reads (query_engine) kept in separate classes
"""
