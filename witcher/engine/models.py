"""
Engine Data Models for Witcher Alchemy.

Defines the core data structures for one interpreter turn:
- Command: a matched input line, tagged with its command family
- Query: a matched question line, tagged with its question shape
- TurnResult: the text answered to the user
- EngineConfig: capacities and limits
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

# Literal responses. These are compared verbatim by consumers of the output.
INVALID = "INVALID"
NONE_LISTED = "None"
LOOT_SUCCESS = "Alchemy ingredients obtained"
TRADE_SUCCESS = "Trade successful"
NOT_ENOUGH_TROPHIES = "Not enough trophies"
NOT_ENOUGH_INGREDIENTS = "Not enough ingredients"
NO_FORMULA = "No formula for {name}"
BREW_SUCCESS = "Alchemy item created: {name}"
NO_KNOWLEDGE = "No knowledge of {name}"
NEW_BESTIARY_ENTRY = "New bestiary entry added: {name}"
BESTIARY_UPDATED = "Bestiary entry updated: {name}"
ALREADY_KNOWN_EFFECTIVENESS = "Already known effectiveness"
NEW_FORMULA = "New alchemy formula obtained: {name}"
ALREADY_KNOWN_FORMULA = "Already known formula"
UNPREPARED = "Geralt is unprepared and barely escapes with his life"
DEFEATS = "Geralt defeats {name}"


class CommandType(str, Enum):
    """Families of input line."""

    QUERY = "query"
    LOOT = "loot"
    TRADE = "trade"
    BREW = "brew"
    LEARN = "learn"
    ENCOUNTER = "encounter"
    EXIT = "exit"
    UNKNOWN = "unknown"


class QueryType(str, Enum):
    """Shapes of question the query engine answers."""

    EFFECTIVENESS = "effectiveness"
    TOTAL_INGREDIENT = "total_ingredient"
    TOTAL_POTION = "total_potion"
    TOTAL_TROPHY = "total_trophy"
    FORMULA = "formula"
    UNKNOWN = "unknown"


class Command(BaseModel):
    """A routed input line."""

    type: CommandType
    original_input: str = Field(description="The line as entered, trimmed")


class Query(BaseModel):
    """A parsed question line."""

    type: QueryType
    subject: str = Field(default="", description="Name asked about, empty for listings")
    original_input: str = Field(description="The question as entered")


class TurnResult(BaseModel):
    """Response to one input line."""

    output: str = Field(description="Text to print, may be empty")
    command_type: CommandType
    exit_requested: bool = False


class EngineConfig(BaseModel):
    """Engine configuration."""

    # Capacities, None for unbounded
    max_inventory_items: int | None = Field(default=100, ge=1)
    max_formulas: int | None = Field(default=50, ge=1)
    max_bestiary_entries: int | None = Field(default=100, ge=1)
    max_components: int | None = Field(default=10, ge=1)

    # Input limits
    max_name_length: int = Field(default=64, ge=9)
    max_input_length: int = Field(default=1024, ge=1)

    # Behavior
    strict_capacity: bool = Field(
        default=True,
        description="Raise on a full collection instead of silently dropping",
    )
