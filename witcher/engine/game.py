"""
Alchemy Engine for Witcher Alchemy.

Runs one input line through the interpreter:
1. Route the line to a command family
2. Answer it (query) or apply it (action)
3. Map malformed input to INVALID
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from witcher.db.interfaces import StateStore
from witcher.db.memory import InMemoryStateStore
from witcher.engine.actions import ActionHandlers
from witcher.engine.intent import CommandParser
from witcher.engine.models import INVALID, CommandType, EngineConfig, TurnResult
from witcher.engine.queries import QueryEngine

logger = logging.getLogger(__name__)


class AlchemyEngine:
    """
    Main interpreter loop step.

    Owns the state store for the whole run. Each call to process_line
    is one complete command; nothing is carried between lines except
    the store's contents.
    """

    def __init__(
        self,
        store: StateStore | None = None,
        config: EngineConfig | None = None,
        parser: CommandParser | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            store: State store, a fresh in-memory store if omitted
            config: Capacities and limits
            parser: Command router
        """
        self.config = config or EngineConfig()
        self.store = store or InMemoryStateStore(
            max_items=self.config.max_inventory_items,
            max_formulas=self.config.max_formulas,
            max_bestiary_entries=self.config.max_bestiary_entries,
            strict_capacity=self.config.strict_capacity,
        )
        self.parser = parser or CommandParser()
        self.queries = QueryEngine(self.store)
        self.actions = ActionHandlers(self.store, self.config)

        self._handlers: dict[CommandType, Callable[[str], str]] = {
            CommandType.QUERY: self._answer_query,
            CommandType.LOOT: self.actions.loot,
            CommandType.TRADE: self.actions.trade,
            CommandType.BREW: self.actions.brew,
            CommandType.LEARN: self.actions.learn,
            CommandType.ENCOUNTER: self.actions.encounter,
        }

    def process_line(self, line: str) -> TurnResult:
        """
        Process one line of input.

        Args:
            line: Raw text from the user

        Returns:
            TurnResult with the text to print
        """
        if len(line) > self.config.max_input_length:
            logger.warning("Rejected line of %d characters", len(line))
            return TurnResult(output=INVALID, command_type=CommandType.UNKNOWN)

        command = self.parser.parse(line)

        if command.type == CommandType.EXIT:
            return TurnResult(output="", command_type=command.type, exit_requested=True)

        handler = self._handlers.get(command.type)
        if handler is None:
            return TurnResult(output=INVALID, command_type=command.type)

        try:
            output = handler(command.original_input)
        except ValueError as e:
            # CapacityExceededError is a ValueError too
            logger.warning(
                "Invalid %s command %r: %s", command.type.value, command.original_input, e
            )
            output = INVALID

        return TurnResult(output=output, command_type=command.type)

    def _answer_query(self, line: str) -> str:
        return self.queries.answer(self.parser.parse_query(line))
