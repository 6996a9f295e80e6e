"""
Interactive REPL for Witcher Alchemy.

Reads one command per line, prints the engine's answer, and stops on
"Exit" or end of input.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass

from witcher.engine import AlchemyEngine, EngineConfig

DEFAULT_PROMPT = ">> "


@dataclass
class SessionState:
    """Current state of the REPL session."""

    engine: AlchemyEngine
    running: bool = True
    lines_read: int = 0


class AlchemyREPL:
    """
    Interactive REPL for the alchemy interpreter.

    Handles user input and prints results exactly as the engine
    returns them; logs go to stderr only.
    """

    def __init__(
        self,
        *,
        prompt: str = DEFAULT_PROMPT,
        config: EngineConfig | None = None,
    ) -> None:
        self.prompt = prompt
        self.config = config or EngineConfig()

    def create_state(self) -> SessionState:
        """Create a session with a fresh engine."""
        return SessionState(engine=AlchemyEngine(config=self.config))

    def process_input(self, text: str, state: SessionState) -> str:
        """Process one line and return the text to print."""
        text = text.strip()
        state.lines_read += 1

        result = state.engine.process_line(text)
        if result.exit_requested:
            state.running = False
        return result.output

    def run(self, state: SessionState | None = None) -> SessionState:
        """Run the read-eval loop until Exit or end of input."""
        state = state or self.create_state()

        while state.running:
            try:
                user_input = input(self.prompt)
            except (EOFError, KeyboardInterrupt):
                state.running = False
                break

            response = self.process_input(user_input, state)
            if response:
                print(response)

        return state


def configure_logging(level: str) -> None:
    """Send logs to stderr so stdout carries only answers."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Witcher Alchemy interpreter")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT, help="Input prompt")
    parser.add_argument(
        "--no-prompt",
        action="store_true",
        help="Do not print a prompt (for piped input)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.getenv("WITCHER_LOG_LEVEL", "WARNING").upper(),
        help="Log level for stderr output",
    )
    parser.add_argument(
        "--max-input-length",
        type=int,
        default=1024,
        help="Longest accepted input line",
    )
    parser.add_argument(
        "--legacy-capacity",
        action="store_true",
        help="Silently drop additions to full collections",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the Witcher Alchemy interpreter.

    Args:
        argv: Command line arguments, sys.argv if omitted

    Returns:
        Process exit code, always 0
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    config = EngineConfig(
        max_input_length=args.max_input_length,
        strict_capacity=not args.legacy_capacity,
    )
    repl = AlchemyREPL(prompt="" if args.no_prompt else args.prompt, config=config)
    repl.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
