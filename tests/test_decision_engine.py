"""Decision engine tests."""

from __future__ import annotations

from core.decision_engine import ActionKind, decide
from core.policy_runtime import InvocationOptions


def _options(**overrides: object) -> InvocationOptions:
    values: dict[str, object] = {"command": "firefox"}
    values.update(overrides)
    return InvocationOptions(**values)


def test_list_mode_wins_over_everything() -> None:
    decision = decide([1, 2], frozenset({9}), _options(list_mode=True, force=True), active=1)
    assert decision.kind is ActionKind.LIST
    assert decision.window_ids == (1, 2)


def test_activates_next_window() -> None:
    decision = decide([10, 20, 30], frozenset({5}), _options(), active=20)
    assert decision.kind is ActionKind.ACTIVATE
    assert decision.window_id == 30


def test_activates_previous_window_in_reverse() -> None:
    decision = decide([10, 20, 30], frozenset(), _options(reverse=True), active=10)
    assert decision.window_id == 30


def test_passthrough_with_arguments_launches_new_instance() -> None:
    options = _options(passthrough=True, force=True, extra_args=("--url",))
    decision = decide([10, 20], frozenset({5}), options, active=10)
    assert decision.kind is ActionKind.LAUNCH
    assert decision.args == ("--url",)


def test_passthrough_overrides_refusal_even_without_force() -> None:
    options = _options(passthrough=True, extra_args=("file.txt",))
    decision = decide([], frozenset({5}), options)
    assert decision.kind is ActionKind.LAUNCH


def test_passthrough_without_arguments_still_activates() -> None:
    decision = decide([10], frozenset(), _options(passthrough=True, force=True), active=None)
    assert decision.kind is ActionKind.ACTIVATE
    assert decision.window_id == 10


def test_running_process_without_window_is_refused() -> None:
    decision = decide([], frozenset({5, 6}), _options())
    assert decision.kind is ActionKind.REFUSE
    assert decision.process_ids == frozenset({5, 6})


def test_force_launches_despite_running_process() -> None:
    decision = decide([], frozenset({5}), _options(force=True, detach=False))
    assert decision.kind is ActionKind.LAUNCH
    assert decision.detach is False


def test_nothing_running_launches_with_arguments() -> None:
    decision = decide([], frozenset(), _options(extra_args=("-P", "work")))
    assert decision.kind is ActionKind.LAUNCH
    assert decision.args == ("-P", "work")
    assert decision.detach is True
