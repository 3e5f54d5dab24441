"""Database Definitions — declarative Base shared by all ORM models.

Invariants:
    - Models import Base from here; runtime sessions come from infrastructure/database.py
"""
