## pushpop — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from dataclasses import dataclass


class Rule(Enum):
    STACK = 'stack'
    PUSH_EXPR = 'push_expr'
    POP_EXPR = 'pop_expr'
    LITERAL = 'literal'
    EOI = 'EOI'

    def __repr__(self):
        return f"{self.value}"


@dataclass(frozen=True)
class Pair:
    """Node of the syntax tree: one rule tag, the source text it spans, and ordered children.

    Positions are 1-based for `line` and `column` as reported by the lexer, while
    `start` and `end` are 0-based offsets into the source so `source[start:end] == text`.
    """

    rule: Rule
    text: str
    children: tuple["Pair", ...] = ()
    line: int = 1
    column: int = 1
    start: int = 0
    end: int = 0

    @property
    def inner_text(self) -> str:
        """Text spanned by the children, e.g. the literal payload of a `push_expr`."""
        return ''.join(ch.text for ch in self.children)

    def __repr__(self):
        if not self.children:
            return f"{self.rule!r}({self.text!r})"
        return f"{self.rule!r}({', '.join(repr(ch) for ch in self.children)})"
