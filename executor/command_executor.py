"""Command execution wrapper."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from core.errors import CollaboratorError, PrerequisiteMissing

logger = logging.getLogger("ror.command_executor")


def run_command(command: list[str], cwd: Path | None = None) -> tuple[int, str, str]:
    """Run command and return (exit_code, stdout, stderr)."""
    logger.debug("Running %s", " ".join(command))
    try:
        proc = subprocess.run(command, cwd=cwd, capture_output=True, text=True)
    except OSError as exc:
        raise CollaboratorError(f"Cannot run '{command[0]}': {exc}") from exc
    return proc.returncode, proc.stdout, proc.stderr


def check_output(command: list[str]) -> str:
    """Run command and return stdout, raising when it exits non-zero."""
    code, out, err = run_command(command)
    if code != 0:
        detail = err.strip() or f"exit status {code}"
        raise CollaboratorError(f"'{' '.join(command)}' failed: {detail}")
    return out


def require_tools(*tools: str) -> None:
    """Raise PrerequisiteMissing for the first tool not found on PATH."""
    for tool in tools:
        if shutil.which(tool) is None:
            raise PrerequisiteMissing(tool)
