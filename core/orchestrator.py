"""Top-level run-or-raise orchestrator."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field
from pathlib import Path

from core.decision_engine import ActionKind, Decision, decide
from core.errors import ActivationFailure, ProcessRunningNoWindow
from core.policy_runtime import InvocationOptions, RuntimeConfig, load_effective_config
from executor.command_executor import require_tools
from os_controller.base_controller import BaseLauncher, BaseWindowManager, ProcessLocator
from os_controller.launcher import PosixLauncher
from os_controller.process_locator import build_process_locator
from os_controller.window_manager import WmctrlWindowManager
from selection.window_filter import filter_windows
from world_model.desktop_state import MatchCriteria, WindowRecord


@dataclass
class RuntimeBundle:
    """Holds initialized collaborators for one invocation."""

    config: RuntimeConfig
    process_locator: ProcessLocator
    window_manager: BaseWindowManager
    launcher: BaseLauncher
    hostname: str


@dataclass
class InvocationResult:
    """What was decided, plus the windows it was decided over."""

    decision: Decision
    windows: list[WindowRecord] = field(default_factory=list)
    launched_pid: int | None = None


class Orchestrator:
    """Gathers the desktop snapshot, decides, and carries out the decision."""

    def __init__(self, bundle: RuntimeBundle) -> None:
        self.bundle = bundle
        self.logger = logging.getLogger("ror.orchestrator")

    @classmethod
    def build(cls, config: RuntimeConfig | None = None, config_path: Path | None = None) -> Orchestrator:
        config = config or load_effective_config(config_path)
        bundle = RuntimeBundle(
            config=config,
            process_locator=build_process_locator(config.process_locator),
            window_manager=WmctrlWindowManager(),
            launcher=PosixLauncher(),
            hostname=socket.gethostname(),
        )
        return cls(bundle)

    def run(self, options: InvocationOptions) -> InvocationResult:
        bundle = self.bundle
        require_tools(*bundle.window_manager.required_tools)

        pids = bundle.process_locator.locate(options.identifier)
        criteria = MatchCriteria.for_command(options.command, pids, options.class_name)
        self.logger.debug(
            "Matching %r via %s: class=%s pids=%s",
            options.command,
            bundle.process_locator.name,
            criteria.target_class,
            sorted(pids),
        )

        raw_windows = bundle.window_manager.enumerate()
        filtered_ids = filter_windows(
            raw_windows,
            criteria,
            bundle.hostname,
            bundle.window_manager.get_types,
            bundle.config.interactable_types,
        )
        active = None if options.list_mode else bundle.window_manager.get_active()

        decision = decide(filtered_ids, pids, options, active)
        self.logger.debug("Decision for %r: %s", options.command, decision)
        by_id = {window.window_id: window for window in raw_windows}
        result = InvocationResult(
            decision=decision,
            windows=[by_id[window_id] for window_id in filtered_ids],
        )

        if decision.kind is ActionKind.ACTIVATE:
            if not bundle.window_manager.activate(decision.window_id):
                raise ActivationFailure(options.command, decision.window_id)
        elif decision.kind is ActionKind.REFUSE:
            raise ProcessRunningNoWindow(options.command, decision.process_ids)
        elif decision.kind is ActionKind.LAUNCH:
            result.launched_pid = bundle.launcher.launch(
                options.command, decision.args, decision.detach
            )
        return result
