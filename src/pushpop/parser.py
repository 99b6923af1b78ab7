## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark
from .types import Rule, Pair
from .errors import PushPopParseError, PushPopIncompleteParse


GRAMMAR = r"""stack: expression*
?expression: push_expr | pop_expr
push_expr: PUSH STRING
pop_expr: POP

// COMMENTS
COMMENT.11: /#[^\r\n]*/

// TOKENS
PUSH.9: /push\b/
POP.9: /pop\b/
STRING.8: /"[^"]*"/

// WHITESPACE
%import common.WS
%ignore WS
%ignore COMMENT
"""


TERMINAL_NAMES = {
    'PUSH': '`push`',
    'POP': '`pop`',
    'STRING': 'string literal',
    '$END': 'end of input',
    '<END-OF-FILE>': 'end of input',
}


def _describe_expected(names) -> str:
    described = sorted({TERMINAL_NAMES.get(n, n) for n in (names or ())})
    if not described: return 'nothing'
    if len(described) == 1: return described[0]
    return ', '.join(described[:-1]) + ' or ' + described[-1]


def _end_position(source: str) -> tuple[int, int]:
    return source.count('\n') + 1, len(source) - source.rfind('\n')


def parse(source: str, start='stack', filename=None):
    """Parse `source` and yield the top-level pairs, normally a single `stack` node."""
    parser = lark.Lark(GRAMMAR, start=start, parser="lalr", lexer="contextual", propagate_positions=True)

    def _literal(tok: lark.Token) -> Pair:
        # The payload is the content between the quotes, kept verbatim.
        return Pair(Rule.LITERAL, tok.value[1:-1], (), tok.line, tok.column + 1, tok.start_pos + 1, tok.end_pos - 1)

    def _expression(tree: lark.Tree) -> Pair:
        tokens = [ch for ch in tree.children if isinstance(ch, lark.Token)]
        first, last = tokens[0], tokens[-1]
        text = source[first.start_pos:last.end_pos]
        match tree.data:
            case 'push_expr':
                children = tuple(_literal(t) for t in tokens if t.type == 'STRING')
                return Pair(Rule.PUSH_EXPR, text, children, first.line, first.column, first.start_pos, last.end_pos)
            case 'pop_expr':
                return Pair(Rule.POP_EXPR, text, (), first.line, first.column, first.start_pos, last.end_pos)
        raise NotImplementedError(f"Unexpected tree `{tree.data}` from parser.")

    def _traverse(tree: lark.Tree):
        assert isinstance(tree, lark.Tree) and tree.data == 'stack'
        line, column = _end_position(source)
        eoi = Pair(Rule.EOI, '', (), line, column, len(source), len(source))
        children = tuple(_expression(ch) for ch in tree.children) + (eoi,)
        yield Pair(Rule.STACK, source, children, 1, 1, 0, len(source))

    try:
        tree = parser.parse(source)
    except (lark.exceptions.UnexpectedToken, lark.exceptions.UnexpectedCharacters) as exc:
        raise _convert_error(exc, source, filename) from None
    yield from _traverse(tree)


def _convert_error(exc, source: str, filename=None) -> PushPopParseError:
    line, column = exc.line, exc.column
    if isinstance(exc, lark.exceptions.UnexpectedToken):
        token = exc.token
        expected = _describe_expected(exc.expected)
        if token.type == '$END':
            # Report the position right after the last token that was consumed.
            if getattr(token, 'end_line', None) is not None:
                line, column = token.end_line, token.end_column
            else:
                line, column = _end_position(source)
            found, token_val, error_class = 'end of input', '', PushPopIncompleteParse
        else:
            found, token_val, error_class = f"`{token.value}`", token.value, PushPopParseError
    else:
        expected = _describe_expected(exc.allowed)
        token_val, error_class = exc.char, PushPopParseError
        found = 'unterminated string' if exc.char == '"' else f"`{exc.char}`"

    where = f" in `{filename}`" if filename else ""
    message = f"Syntax error{where} at line {line}, column {column}: expected {expected}, found {found}."
    return error_class(message, filename=filename, line=line, column=column, token=token_val)


def format_parse_error_context(filename, line, column, token_value, source):
    lines = source.splitlines(keepends=True)
    if not lines: lines = ['']
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i].rstrip('\n')
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            width = max(1, len(token_value or ''))
            if column > len(line_content):
                # End of input, mark the position past the last character.
                line_content += "\033[48;5;30m \033[0m"
            elif column > 0:
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
