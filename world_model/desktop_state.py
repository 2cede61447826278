"""Desktop snapshot models shared by the matching pipeline."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WindowRecord(BaseModel):
    """One top-level window as reported by the window manager."""

    model_config = ConfigDict(frozen=True)

    window_id: int
    hostname: str = ""
    pid: int | None = None
    desktop_id: int = 0
    window_class: str = ""
    window_instance: str = ""
    title: str = ""

    @property
    def hex_id(self) -> str:
        return f"0x{self.window_id:08x}"


class MatchCriteria(BaseModel):
    """What a window must look like to belong to the target application."""

    model_config = ConfigDict(frozen=True)

    target_class: str = Field(min_length=1)
    target_pids: frozenset[int] = Field(default_factory=frozenset)

    @field_validator("target_class")
    @classmethod
    def _strip_class(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("target_class must not be blank")
        return value

    @classmethod
    def for_command(
        cls,
        command: str,
        pids: frozenset[int] | set[int] = frozenset(),
        class_override: str | None = None,
    ) -> MatchCriteria:
        """Build criteria from a command, falling back to its basename as class."""
        target = (class_override or "").strip() or command.rstrip("/").rsplit("/", 1)[-1]
        return cls(target_class=target, target_pids=frozenset(pids))

    def matches_class(self, window: WindowRecord) -> bool:
        """Compare against both WM_CLASS halves and the last dotted segment of the class."""
        target = self.target_class.casefold()
        names = {window.window_class, window.window_instance, window.window_class.rsplit(".", 1)[-1]}
        return any(name and name.casefold() == target for name in names)
