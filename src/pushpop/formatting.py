## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Pair


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))

def format_item(it, abbreviate: bool = False):
    if isinstance(it, str):
        return f'≪string:{len(it)}≫' if abbreviate else '"' + it.replace('"', '\\"') + '"'
    if isinstance(it, Pair):
        return it.text if it.text else f'{it.rule!r}'
    return str(it)

def format_stack(stack: list[str], width=72, abbreviate: bool = False) -> str:
    if not stack: return '∅'
    # First render without abbreviation, check if it fits on screen.
    stack_str = ' '.join(format_item(s) for s in stack)
    if abbreviate and len(stack_str) > 144:
        stack_str = ' '.join(format_item(s, abbreviate=True) for s in stack)
    if width is not None and len(stack_str) > width:
        stack_str = '… ' + stack_str[-width+2:]
    return stack_str

def show_stack(stack: list[str], width=72, end='\n', file=None, abbreviate: bool = False):
    stack_str = format_stack(stack, width=width, abbreviate=abbreviate)
    print(f"{stack_str:>{width}}" if width else stack_str, end=end, file=file)

def show_step(index: int, node: Pair | None, stack: list[str], width=72, file=None):
    node_str = format_item(node) if node is not None else '∅'
    if len(node_str) > width:
        node_str = node_str[:+width-2] + ' …'
    print(f"\033[90m{index:>3} :\033[0m  ", end='', file=file)
    show_stack(stack, width=width, end='', file=file, abbreviate=True)
    print(f" \033[36m <=> \033[0m {node_str:<{width}}", file=file)
