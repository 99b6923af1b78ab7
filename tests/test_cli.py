## pushpop — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def run_cli(*cli_args: str | Path, stdin: str | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "pushpop", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root() / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(args, input=stdin, capture_output=True, text=True, env=env)


def _strip_output_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def test_cli_runs_script_file(tmp_path: Path):
    program = tmp_path / "hello.pp"
    program.write_text('push "a" push "b"\npop pop\n', encoding='utf-8')

    result = run_cli(program)

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["POP: b", "POP: a"]


def test_cli_missing_argument():
    result = run_cli()
    assert result.returncode != 0
    assert result.stdout == "Not input file provided\n"


def test_cli_unreadable_file_prints_io_error(tmp_path: Path):
    result = run_cli(tmp_path / "missing.pp")
    assert result.returncode != 0
    [line] = _strip_output_lines(result.stdout)
    assert "No such file or directory" in line


def test_cli_syntax_error_prints_single_line(tmp_path: Path):
    program = tmp_path / "bad.pp"
    program.write_text("push", encoding='utf-8')

    result = run_cli(program)

    assert result.returncode != 0
    [line] = _strip_output_lines(result.stdout)
    assert line.startswith("Syntax error")
    assert "line 1, column 5" in line


def test_cli_runtime_error_after_partial_output(tmp_path: Path):
    program = tmp_path / "underflow.pp"
    program.write_text('push "only" pop pop push "never" pop', encoding='utf-8')

    result = run_cli(program)

    assert result.returncode != 0
    assert _strip_output_lines(result.stdout) == [
        "POP: only",
        "Cannot pop from empty stack at index 2: pop",
    ]


def test_cli_single_pop_reports_index_zero():
    result = run_cli("-", stdin="pop\n")
    assert result.returncode != 0
    [line] = _strip_output_lines(result.stdout)
    assert "index 0" in line and "pop" in line


def test_cli_stdin_dash_runs_program():
    result = run_cli("-", stdin='push "DASH" pop\n')
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["POP: DASH"]


def test_cli_context_shows_source_for_syntax_error(tmp_path: Path):
    program = tmp_path / "bad.pp"
    program.write_text('push "a"\npop ?\n', encoding='utf-8')

    result = run_cli(program, extra_args=["--context"])

    assert result.returncode != 0
    out = result.stdout
    assert out.splitlines()[0].startswith("Syntax error")
    assert "SYNTAX ERROR." in out
    assert "File \"" in out
    assert "2 | pop ?" in out


def test_cli_context_shows_source_for_runtime_error(tmp_path: Path):
    program = tmp_path / "underflow.pp"
    program.write_text('pop\n', encoding='utf-8')

    result = run_cli(program, extra_args=["--context"])

    assert result.returncode != 0
    assert "RUNTIME ERROR." in result.stdout
    assert "1 | pop" in result.stdout


def test_cli_stats_report_steps(tmp_path: Path):
    program = tmp_path / "stats.pp"
    program.write_text('push "a" pop', encoding='utf-8')

    result = run_cli(program, extra_args=["--stats"])

    assert result.returncode == 0
    assert "STATISTICS." in result.stdout
    assert "step\t3" in result.stdout


def test_cli_verbose_traces_steps(tmp_path: Path):
    program = tmp_path / "trace.pp"
    program.write_text('push "a" pop', encoding='utf-8')

    result = run_cli(program, extra_args=["-v"])

    assert result.returncode == 0
    lines = _strip_output_lines(result.stdout)
    assert sum("<=>" in line for line in lines) == 3
    assert "POP: a" in lines


def test_cli_ignores_arguments_after_script(tmp_path: Path):
    program = tmp_path / "extra.pp"
    program.write_text('push "x" pop', encoding='utf-8')

    result = run_cli(program, "extra", "more")

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["POP: x"]


def test_cli_undecodable_file_prints_single_error_line(tmp_path: Path):
    program = tmp_path / "latin1.pp"
    program.write_bytes(b'push "\xff" pop')

    result = run_cli(program)

    assert result.returncode != 0
    [line] = _strip_output_lines(result.stdout)
    assert "utf-8" in line
    assert "POP:" not in result.stdout


def test_cli_context_explains_stack_underflow(tmp_path: Path):
    program = tmp_path / "underflow.pp"
    program.write_text('push "a" pop pop\n', encoding='utf-8')

    result = run_cli(program, extra_args=["--context"])

    assert result.returncode != 0
    assert "`pop` needs at least 1 item on the stack, but stack is empty." in result.stdout
