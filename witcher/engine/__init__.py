"""
Core Engine for Witcher Alchemy.

The engine orchestrates:
- Command routing (which family a line belongs to)
- Query answering (inventory, formulas, bestiary)
- Actions (loot, trade, brew, learn, encounter)
"""

from __future__ import annotations

from witcher.engine.actions import ActionHandlers
from witcher.engine.classifier import classify
from witcher.engine.game import AlchemyEngine
from witcher.engine.intent import CommandParser
from witcher.engine.models import (
    INVALID,
    Command,
    CommandType,
    EngineConfig,
    Query,
    QueryType,
    TurnResult,
)
from witcher.engine.queries import QueryEngine

__all__ = [
    # Engine
    "AlchemyEngine",
    "EngineConfig",
    # Routing
    "CommandParser",
    "Command",
    "CommandType",
    "Query",
    "QueryType",
    # Handlers
    "ActionHandlers",
    "QueryEngine",
    "classify",
    # Results
    "TurnResult",
    "INVALID",
]
