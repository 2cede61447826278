"""Decide what a single run-or-raise invocation should do."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from core.policy_runtime import InvocationOptions
from selection.window_selector import select_window


class ActionKind(str, Enum):
    LIST = "list"
    ACTIVATE = "activate"
    REFUSE = "refuse"
    LAUNCH = "launch"


@dataclass(frozen=True)
class Decision:
    """Terminal action chosen for the invocation."""

    kind: ActionKind
    window_id: int | None = None
    window_ids: tuple[int, ...] = ()
    process_ids: frozenset[int] = field(default_factory=frozenset)
    args: tuple[str, ...] = ()
    detach: bool = True


def decide(
    filtered_ids: Sequence[int],
    process_ids: frozenset[int],
    options: InvocationOptions,
    active: int | None = None,
) -> Decision:
    """Map the gathered snapshot and options to exactly one action."""
    if options.list_mode:
        return Decision(ActionKind.LIST, window_ids=tuple(filtered_ids))

    # Extra arguments given with passthrough would be lost by re-focusing.
    needs_passthrough = options.needs_passthrough

    if filtered_ids and not needs_passthrough:
        target = select_window(filtered_ids, active, reverse=options.reverse)
        return Decision(ActionKind.ACTIVATE, window_id=target, window_ids=tuple(filtered_ids))

    if process_ids and not options.force and not needs_passthrough:
        return Decision(ActionKind.REFUSE, process_ids=frozenset(process_ids))

    return Decision(ActionKind.LAUNCH, args=options.extra_args, detach=options.detach)
