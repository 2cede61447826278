"""Process lookup strategies: pgrep when installed, otherwise a psutil table scan."""

from __future__ import annotations

import logging
import os
import re
import shutil

import psutil

from core.errors import CollaboratorError
from executor.command_executor import run_command
from os_controller.base_controller import ProcessLocator

_ERE_SPECIAL = set(".[]()*+?{}|^$\\")

logger = logging.getLogger("ror.process_locator")


def _ere_escape(text: str) -> str:
    return "".join(f"\\{ch}" if ch in _ERE_SPECIAL else ch for ch in text)


def command_pattern(identifier: str) -> re.Pattern[str]:
    """Match a command line whose path-stripped program is ``identifier``."""
    return re.compile(rf"^(\S*/)?{re.escape(identifier)}(\s|$)")


def matches_process(identifier: str, name: str | None, cmdline: list[str] | None) -> bool:
    if name and name == identifier:
        return True
    if not cmdline:
        return False
    return command_pattern(identifier).match(" ".join(cmdline)) is not None


class PgrepLocator(ProcessLocator):
    """Asks procps ``pgrep`` for the command name and the command line."""

    name = "pgrep"

    def locate(self, identifier: str) -> frozenset[int]:
        pattern = rf"^([^[:space:]]*/)?{_ere_escape(identifier)}([[:space:]]|$)"
        pids = self._pgrep(["pgrep", "-x", "--", identifier])
        pids |= self._pgrep(["pgrep", "-f", "--", pattern])
        pids.discard(os.getpid())
        logger.debug("pgrep found %s for %r", sorted(pids), identifier)
        return frozenset(pids)

    @staticmethod
    def _pgrep(command: list[str]) -> set[int]:
        code, out, err = run_command(command)
        if code == 1:
            return set()
        if code != 0:
            raise CollaboratorError(f"pgrep failed with status {code}: {err.strip()}")
        return {int(token) for token in out.split()}


class ProcessTableLocator(ProcessLocator):
    """Walks the whole process table through psutil."""

    name = "scan"

    def locate(self, identifier: str) -> frozenset[int]:
        own_pid = os.getpid()
        pids: set[int] = set()
        for proc in psutil.process_iter(["pid", "name", "cmdline"]):
            info = proc.info
            if info["pid"] == own_pid:
                continue
            if matches_process(identifier, info.get("name"), info.get("cmdline")):
                pids.add(info["pid"])
        logger.debug("Process table scan found %s for %r", sorted(pids), identifier)
        return frozenset(pids)


def build_process_locator(strategy: str = "auto") -> ProcessLocator:
    """Choose the lookup strategy once, at startup."""
    if strategy == "scan":
        return ProcessTableLocator()
    if strategy == "pgrep":
        return PgrepLocator()
    if strategy != "auto":
        raise ValueError(f"Unknown process locator strategy: {strategy}")
    if shutil.which("pgrep"):
        return PgrepLocator()
    logger.debug("pgrep not installed, falling back to process table scan")
    return ProcessTableLocator()
