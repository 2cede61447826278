"""Interfaces for the desktop collaborators the matching core depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from world_model.desktop_state import WindowRecord


class ProcessLocator(ABC):
    """Finds running processes for an application identifier."""

    name: str = "locator"

    @abstractmethod
    def locate(self, identifier: str) -> frozenset[int]:
        """Return pids whose command name is, or starts with, ``identifier``."""
        pass


class BaseWindowManager(ABC):
    """Read and focus top-level windows."""

    required_tools: tuple[str, ...] = ()

    @abstractmethod
    def enumerate(self) -> list[WindowRecord]:
        """Return all managed windows in window manager order."""
        pass

    @abstractmethod
    def get_active(self) -> int | None:
        """Return the focused window id, if any."""
        pass

    @abstractmethod
    def get_types(self, window_id: int) -> frozenset[str]:
        """Return lower-cased window type tags; empty when no hint is set."""
        pass

    @abstractmethod
    def activate(self, window_id: int) -> bool:
        """Switch to and focus the window."""
        pass


class BaseLauncher(ABC):
    """Starts a new application instance."""

    @abstractmethod
    def launch(self, command: str, args: Sequence[str], detach: bool) -> int | None:
        """Start ``command``; return the child pid when detached."""
        pass
