## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable

from .types import Rule, Pair
from .errors import PushPopStackError, PushPopContractError
from .formatting import show_step


def can_execute(node: Pair, stack: list[str]) -> tuple[bool, str]:
    """Check if the node can execute on the stack without underflow."""
    if node.rule is Rule.POP_EXPR and len(stack) == 0:
        return False, "`pop` needs at least 1 item on the stack, but stack is empty."
    return True, ""


def execute_node(stack: list[str], node: Pair, index: int, write: Callable[[str], None] = print) -> int:
    match node.rule:
        case Rule.PUSH_EXPR:
            stack.append(node.inner_text)
        case Rule.POP_EXPR:
            ok, reason = can_execute(node, stack)
            if not ok:
                raise PushPopStackError(f"Cannot pop from empty stack at index {index}: {node.text}",
                                        index=index, node=node, reason=reason)
            write(f"POP: {stack.pop()}")
        case Rule.EOI:
            pass
        case _:
            raise PushPopContractError("Received unknown rule")
    return index + 1


def execute_program(node: Pair, stack: list[str] | None = None, write: Callable[[str], None] = print,
                    verbosity=0, stats=None, file=None) -> int:
    """Run the children of a `stack` node in order, returning the number of instructions executed.

    The first failing instruction raises and no further instruction is executed.
    """
    if node.rule is not Rule.STACK:
        raise PushPopContractError("Provided rule was not 'stack'")

    stack = [] if stack is None else stack
    index = 0
    for child in node.children:
        if verbosity > 0:
            show_step(index, child, stack, file=file)
        index = execute_node(stack, child, index, write=write)

    if verbosity > 1:
        show_step(index, None, stack, file=file)
    if stats is not None:
        stats['steps'] = stats.get('steps', 0) + index

    return index
