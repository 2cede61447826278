"""Typer command handlers."""

from __future__ import annotations

import logging

import typer

from core.decision_engine import ActionKind
from core.errors import RunOrRaiseError
from core.orchestrator import InvocationResult, Orchestrator
from core.policy_runtime import RuntimeConfig, build_options, load_effective_config
from world_model.desktop_state import WindowRecord


def _orchestrator(config: RuntimeConfig) -> Orchestrator:
    return Orchestrator.build(config=config)


def _configure_logging(level_name: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="run-or-raise: %(levelname)s %(name)s: %(message)s")


def format_window(window: WindowRecord) -> str:
    """One line of list-mode output."""
    pid = str(window.pid) if window.pid is not None else "-"
    return (
        f"{window.hex_id}  {window.desktop_id:>2}  {pid:>6}  "
        f"{window.hostname or '-'}  {window.window_class or '-'}  {window.title}"
    )


def print_window_list(result: InvocationResult) -> None:
    count = len(result.windows)
    typer.echo(f"{count} window{'s' if count != 1 else ''}")
    for window in result.windows:
        typer.echo(format_window(window))


def run_or_raise(
    command: str,
    args: list[str],
    force: bool = False,
    list_mode: bool = False,
    no_fork: bool = False,
    reverse: bool = False,
    passthrough: bool = False,
    class_name: str | None = None,
    process_name: str | None = None,
    verbose: bool = False,
) -> None:
    """Raise or run one application; exit 1 on any fatal error."""
    try:
        config = load_effective_config()
        _configure_logging(config.log_level, verbose)
        options = build_options(
            config,
            command=command,
            extra_args=args,
            list_mode=list_mode,
            force=force,
            passthrough=passthrough,
            reverse=reverse,
            no_fork=no_fork,
            class_name=class_name,
            process_name=process_name,
        )
        result = _orchestrator(config).run(options)
    except RunOrRaiseError as exc:
        typer.echo(f"run-or-raise: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if result.decision.kind is ActionKind.LIST:
        print_window_list(result)
