## pushpop — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable, TextIO

from .types import Pair
from .errors import PushPopEmptyParse
from .parser import parse
from .interpreter import execute_program, can_execute


class Runtime:
    """Minimal runtime facade: parse a script, then execute it against a fresh stack."""

    def __init__(self, write: Callable[[str], None] | None = None, file: TextIO | None = None):
        self.write = write or print
        # Destination of execution traces, stdout when not set.
        self.file = file

    # Parsing ─────────────────────────────────────────────────────────────────────────────────
    def parse(self, source: str, filename: str | None = None) -> list[Pair]:
        return list(parse(source, filename=filename))

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None) -> int:
        pairs = self.parse(source, filename=filename)
        if not pairs:
            raise PushPopEmptyParse("Parsed code is empty")
        return self.execute(pairs[0], verbosity=verbosity, stats=stats)

    def execute(self, node: Pair, stack: list[str] | None = None, verbosity: int = 0, stats: dict | None = None) -> int:
        return execute_program(node, stack=stack, write=self.write, verbosity=verbosity, stats=stats, file=self.file)

    def can_step(self, node: Pair, stack: list[str]) -> tuple[bool, str]:
        return can_execute(node, stack)
