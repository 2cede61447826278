"""X11 window access through wmctrl and xprop."""

from __future__ import annotations

import logging
import re

from executor.command_executor import check_output, run_command
from os_controller.base_controller import BaseWindowManager
from world_model.desktop_state import WindowRecord

_ACTIVE_RE = re.compile(r"#\s*(0x[0-9a-fA-F]+)")
_TYPE_PREFIX = "_NET_WM_WINDOW_TYPE_"


def split_wm_class(value: str) -> tuple[str, str]:
    """Split wmctrl's ``instance.Class`` column into (instance, class).

    Either half may itself contain dots (``org.gnome.Nautilus``), so an exact
    ``X.X`` repetition is split in the middle; otherwise at the first dot.
    """
    if value in ("", "N/A"):
        return "", ""
    half = len(value) // 2
    if len(value) % 2 == 1 and value[half] == "." and value[:half].casefold() == value[half + 1 :].casefold():
        return value[:half], value[half + 1 :]
    instance, sep, klass = value.partition(".")
    if not sep:
        return "", value
    return instance, klass


def parse_window_line(line: str) -> WindowRecord:
    """Parse one ``wmctrl -l -p -x`` line."""
    parts = line.split(None, 5)
    if len(parts) < 5:
        raise ValueError(f"expected at least 5 columns, got {len(parts)}")
    window_id, desktop, pid, wm_class, hostname = parts[:5]
    instance, klass = split_wm_class(wm_class)
    pid_value = int(pid)
    return WindowRecord(
        window_id=int(window_id, 16),
        desktop_id=int(desktop),
        pid=pid_value or None,
        window_instance=instance,
        window_class=klass,
        hostname="" if hostname == "N/A" else hostname,
        title=parts[5] if len(parts) > 5 else "",
    )


def parse_window_types(output: str) -> frozenset[str]:
    """Parse ``xprop -id ID _NET_WM_WINDOW_TYPE`` into short lower-case tags."""
    if "=" not in output:
        return frozenset()
    atoms = output.split("=", 1)[1].split(",")
    tags = set()
    for atom in atoms:
        atom = atom.strip()
        if not atom:
            continue
        if atom.startswith(_TYPE_PREFIX):
            atom = atom[len(_TYPE_PREFIX) :]
        tags.add(atom.lower())
    return frozenset(tags)


class WmctrlWindowManager(BaseWindowManager):
    """EWMH window manager access via the wmctrl and xprop command line tools."""

    required_tools = ("wmctrl", "xprop")

    def __init__(self) -> None:
        self.logger = logging.getLogger("ror.window_manager")

    def enumerate(self) -> list[WindowRecord]:
        output = check_output(["wmctrl", "-l", "-p", "-x"])
        windows: list[WindowRecord] = []
        for line in output.splitlines():
            if not line.strip():
                continue
            try:
                windows.append(parse_window_line(line))
            except ValueError as e:
                self.logger.warning("Skipping unparseable wmctrl line %r: %s", line, e)
        self.logger.debug("Window manager reports %d windows", len(windows))
        return windows

    def get_active(self) -> int | None:
        output = check_output(["xprop", "-root", "_NET_ACTIVE_WINDOW"])
        match = _ACTIVE_RE.search(output)
        if not match:
            return None
        window_id = int(match.group(1), 16)
        return window_id or None

    def get_types(self, window_id: int) -> frozenset[str]:
        output = check_output(["xprop", "-id", f"0x{window_id:08x}", "_NET_WM_WINDOW_TYPE"])
        return parse_window_types(output)

    def activate(self, window_id: int) -> bool:
        code, _, err = run_command(["wmctrl", "-i", "-a", f"0x{window_id:08x}"])
        if code != 0:
            self.logger.debug("wmctrl -a exited %d: %s", code, err.strip())
        return code == 0
