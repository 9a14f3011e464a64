"""
dumbjshell CLI.

Commands:
- repl: interactive read-eval-print loop on stdin
- eval: evaluate each argument as one line of a single session
"""

from __future__ import annotations

import platform
import sys

import typer
from rich.console import Console
from rich.markup import escape

from dumbjshell._version import get_version
from dumbjshell.config import ShellConfig, configure_logging
from dumbjshell.shell import LineResult, ShellSession

console = Console(soft_wrap=True, highlight=False, emoji=False)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"dumbjshell version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="dumbjshell – evaluate Java-like statements one line at a time",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (default: DUMBJSHELL_LOG_LEVEL or WARNING)",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """dumbjshell CLI main callback for global options."""
    config = ShellConfig.from_env(log_level=log_level)
    configure_logging(config)
    ctx.obj = config


def _print_result(result: LineResult) -> None:
    output = result.output
    if output is None:
        return
    if result.ok:
        console.print(output, markup=False)
    else:
        console.print(output, markup=False, style="red")


@app.command()
def repl(
    ctx: typer.Context,
    prompt: str | None = typer.Option(
        None,
        "--prompt",
        "-p",
        help="Prompt text (default: DUMBJSHELL_PROMPT or 'dumbjshell> ')",
    ),
) -> None:
    """Read lines from stdin and evaluate them until 'exit' or end of input."""
    config: ShellConfig = ctx.obj or ShellConfig.from_env()
    prompt_text = prompt if prompt is not None else config.prompt
    session = ShellSession()

    while not session.finished:
        try:
            line = console.input(escape(prompt_text))
        except EOFError:
            console.print()
            break
        except KeyboardInterrupt:
            console.print()
            continue
        _print_result(session.run_line(line))


@app.command(name="eval")
def eval_command(
    lines: list[str] = typer.Argument(..., help="Lines to evaluate, in order"),  # noqa: B008
) -> None:
    """Evaluate each LINE in one session and print its result."""
    session = ShellSession()
    failed = False

    for line in lines:
        result = session.run_line(line)
        _print_result(result)
        failed = failed or not result.ok
        if session.finished:
            break

    if failed:
        raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
