## pushpop — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

import pushpop.api as P


def test_run_string_prints_popped_value(capsys):
    assert P.run('push "hello" pop') == 3
    assert capsys.readouterr().out == "POP: hello\n"


def test_parse_through_default_runtime():
    [root] = P.parse('push "a" pop')
    assert root.rule is P.Rule.STACK
    assert [ch.rule for ch in root.children] == [P.Rule.PUSH_EXPR, P.Rule.POP_EXPR, P.Rule.EOI]


def test_errors_are_exported():
    with pytest.raises(P.PushPopStackError):
        P.run("pop")
    with pytest.raises(P.PushPopError):
        P.run("push")
