## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# pushpop — A tiny stack language with two instructions: push a string, pop and print it.
#

import sys
import time
from pathlib import Path
from dataclasses import dataclass

import click

from .errors import PushPopError, PushPopParseError, PushPopStackError
from .parser import format_parse_error_context
from .formatting import write_without_ansi
from .runtime import Runtime


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    stats: bool
    context: bool
    plain: bool


class ScriptRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.stats_enabled = config.stats
        self.context = config.context
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = Runtime()
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _fatal_error(self, message: str) -> None:
        # Exactly one line on standard output describes the failure.
        print(message)
        self.failure = True

    def _show_context(self, title: str, filename: str, line: int, column: int, token: str, source: str, detail: str = '') -> None:
        context = format_parse_error_context(filename, line, column, token, source=source)
        if detail: context += f"\n\033[90m{detail}\033[0m\n"
        print(f'\033[30;43m {title} \033[0m Running `\033[97m{filename}\033[0m` caused a problem!\n{context}', file=sys.stderr)

    def _handle_exception(self, exc: PushPopError, filename: str, source: str) -> None:
        self._fatal_error(str(exc))
        if not self.context: return
        if isinstance(exc, PushPopParseError):
            self._show_context("SYNTAX ERROR.", filename, exc.line, exc.column, exc.token, source)
        elif isinstance(exc, PushPopStackError) and exc.node is not None:
            self._show_context("RUNTIME ERROR.", filename, exc.node.line, exc.node.column, exc.node.text, source, exc.reason)

    def read_script(self, script: str | None) -> str | None:
        if script is None:
            self._fatal_error("Not input file provided")
            return None
        try:
            if script == '-':
                return sys.stdin.read()
            return Path(script).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            self._fatal_error(str(exc))
            return None

    def execute_script(self, source: str, filename: str) -> None:
        try:
            self.runtime.run(source, filename=filename, verbosity=self.verbose, stats=self.total_stats)
        except PushPopError as exc:
            self._handle_exception(exc, filename, source)
        else:
            self.executed_items += 1

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m", file=sys.stderr)
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m", file=sys.stderr)
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m", file=sys.stderr)
        return 1 if self.failure else 0


@click.command(context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('script', required=False)
@click.option('--verbose', '-v', default=0, count=True, help='Trace each executed instruction with the stack.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--context', is_flag=True, help='Show the source lines around a syntax or runtime error.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, script: str | None, verbose: int, stats: bool, context: bool, plain: bool) -> None:
    """Run the push/pop SCRIPT file, or standard input when SCRIPT is `-`.

    Only the first argument is used, any further arguments are ignored.
    """
    config = RuntimeConfig(verbose=verbose, stats=stats, context=context, plain=plain)
    runner = ScriptRunner(config)

    source = runner.read_script(script)
    if source is not None:
        runner.execute_script(source, '<STDIN>' if script == '-' else script)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=list(sys.argv[1:] if argv is None else argv), prog_name='pushpop')


if __name__ == "__main__":
    main()
