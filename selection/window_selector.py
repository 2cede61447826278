"""Cyclic next/previous selection over an ordered window id list."""

from __future__ import annotations

from collections.abc import Sequence


def select_window(ids: Sequence[int], active: int | None, reverse: bool = False) -> int:
    """Pick the window to activate relative to the active one.

    Forward returns the id after ``active`` and reverse the id before it,
    both wrapping around. When ``active`` is not in ``ids`` forward falls
    back to the first id and reverse to the last.
    """
    if not ids:
        raise ValueError("select_window needs at least one window id")

    for index, window_id in enumerate(ids):
        if window_id == active:
            step = -1 if reverse else 1
            return ids[(index + step) % len(ids)]
    return ids[-1] if reverse else ids[0]
