"""Start new application instances on a POSIX desktop."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence

from core.errors import CollaboratorError, CommandNotFound
from os_controller.base_controller import BaseLauncher


class PosixLauncher(BaseLauncher):
    """Launches by exec (replacing this process) or by a detached child."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("ror.launcher")

    def launch(self, command: str, args: Sequence[str], detach: bool) -> int | None:
        executable = shutil.which(command)
        if executable is None:
            raise CommandNotFound(command)
        argv = [command, *args]

        if not detach:
            self.logger.debug("Replacing process with %s", argv)
            try:
                os.execv(executable, argv)
            except OSError as exc:
                raise CollaboratorError(f"Failed to exec '{command}': {exc}") from exc
            return None

        try:
            proc = subprocess.Popen(
                argv,
                executable=executable,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise CollaboratorError(f"Failed to start '{command}': {exc}") from exc
        self.logger.info("Started %s as pid %d", command, proc.pid)
        return proc.pid
