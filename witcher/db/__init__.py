"""
State store layer for Witcher Alchemy.

Provides the StateStore interface and an in-memory implementation.
State lives only for the lifetime of the process.
"""

from __future__ import annotations

from witcher.db.interfaces import StateStore, UpsertResult
from witcher.db.memory import InMemoryStateStore

__all__ = [
    "StateStore",
    "UpsertResult",
    "InMemoryStateStore",
]
