"""Narrow the window manager's window list to the target application."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from world_model.desktop_state import MatchCriteria, WindowRecord

DEFAULT_INTERACTABLE_TYPES = frozenset({"normal", "dialog"})

logger = logging.getLogger("ror.window_filter")

TypeQuery = Callable[[int], Iterable[str]]


def belongs_to(window: WindowRecord, criteria: MatchCriteria, local_hostname: str) -> bool:
    """Return True when the window is a class-match or a local pid-match."""
    if criteria.matches_class(window):
        return True
    if window.pid is None or window.pid not in criteria.target_pids:
        return False
    return window.hostname.casefold() == local_hostname.casefold()


def is_interactable(types: Iterable[str], allowed: frozenset[str]) -> bool:
    """Windows without a type hint count as interactable."""
    tags = {tag.casefold() for tag in types}
    return not tags or bool(tags & allowed)


def filter_windows(
    raw_windows: Sequence[WindowRecord],
    criteria: MatchCriteria,
    local_hostname: str,
    get_types: TypeQuery,
    interactable_types: Iterable[str] = DEFAULT_INTERACTABLE_TYPES,
) -> list[int]:
    """Return ids of matching, interactable windows in their original order.

    Ownership is checked in memory first; ``get_types`` is only called for
    windows that survive it, since each call is an external query.
    """
    allowed = frozenset(tag.casefold() for tag in interactable_types)
    candidates = [w for w in raw_windows if belongs_to(w, criteria, local_hostname)]
    logger.debug(
        "%d of %d windows belong to class=%s pids=%s",
        len(candidates),
        len(raw_windows),
        criteria.target_class,
        sorted(criteria.target_pids),
    )

    kept: list[int] = []
    for window in candidates:
        types = frozenset(get_types(window.window_id))
        if is_interactable(types, allowed):
            kept.append(window.window_id)
        else:
            logger.debug("Dropping %s with window types %s", window.hex_id, sorted(types))
    return kept
