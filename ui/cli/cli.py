"""CLI entrypoint for run-or-raise."""

from __future__ import annotations

import typer

from ui.cli import commands

app = typer.Typer(
    help="Focus a running application's window, or start it if none is open.",
    add_completion=False,
    context_settings={
        "help_option_names": ["-h", "--help"],
        "allow_interspersed_args": False,
    },
)


@app.command()
def run_or_raise_cmd(
    command: str = typer.Argument(..., metavar="COMMAND", help="Application to raise or run"),
    args: list[str] | None = typer.Argument(
        None, metavar="[ARG]...", help="Arguments passed to COMMAND when it is launched"
    ),
    force: bool = typer.Option(False, "-f", "--force", help="Launch even if a matching process has no window"),
    list_mode: bool = typer.Option(False, "-L", "--list", help="List matching windows and exit"),
    no_fork: bool = typer.Option(False, "-n", "--no-fork", help="Replace this process instead of forking"),
    reverse: bool = typer.Option(False, "-r", "--reverse", help="Cycle to the previous window instead of the next"),
    passthrough: bool = typer.Option(
        False, "-p", "--passthrough", help="Launch a new instance when ARGs are given (implies -f)"
    ),
    class_name: str | None = typer.Option(None, "-c", "--class", metavar="NAME", help="Window class to match"),
    process_name: str | None = typer.Option(None, "-i", "--id", metavar="NAME", help="Process name to match"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log every matching step to stderr"),
) -> None:
    """Raise COMMAND's window, cycling through several, or run COMMAND."""
    commands.run_or_raise(
        command=command,
        args=args or [],
        force=force,
        list_mode=list_mode,
        no_fork=no_fork,
        reverse=reverse,
        passthrough=passthrough,
        class_name=class_name,
        process_name=process_name,
        verbose=verbose,
    )


def main() -> None:
    """Console script entrypoint."""
    app(prog_name="run-or-raise")


if __name__ == "__main__":
    main()
