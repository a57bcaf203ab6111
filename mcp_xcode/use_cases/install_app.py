#!/usr/bin/env python3
"""Install an .app bundle on a simulator, booting it first when needed"""

import logging
import os

from mcp_xcode.adapters.simulators import SimulatorStateQuery, SimulatorLocator, AppInstaller, ControlStatus
from mcp_xcode.domain.enums import SimulatorState
from mcp_xcode.domain.requests import InstallRequest
from mcp_xcode.domain.results import (
    BootOutcome,
    InstallResult,
    AppNotFoundError,
    SimulatorNotFoundError,
    NoBootedSimulatorError,
    MultipleBootedSimulatorsError,
    SimulatorBootFailedError,
    InstallCommandFailedError,
)
from mcp_xcode.use_cases.boot_simulator import BootSimulatorUseCase
from mcp_xcode.utils.logs import LogManager

logger = logging.getLogger(__name__)


class InstallAppUseCase:
    def __init__(self, locator: SimulatorLocator, state_query: SimulatorStateQuery,
                 boot_use_case: BootSimulatorUseCase, installer: AppInstaller, log_manager: LogManager):
        self.locator = locator
        self.state_query = state_query
        self.boot_use_case = boot_use_case
        self.installer = installer
        self.log_manager = log_manager

    def execute(self, request: InstallRequest) -> InstallResult:
        app_path = request.app_path.value
        app_name = request.app_path.name
        requested_id = request.simulator_id.value if request.simulator_id else None

        if not os.path.exists(app_path):
            self.log_manager.save_debug_data("install-app-failed", {
                "reason": "app_not_found",
                "appPath": app_path,
            }, app_name)
            return InstallResult.failed(AppNotFoundError(app_path), app_path, app_name, requested_id)

        # Locate the target simulator
        if requested_id:
            simulator = self.locator.find_simulator(requested_id)
            missing_error = SimulatorNotFoundError(requested_id)
        else:
            booted = self.locator.find_booted_simulators()
            if len(booted) > 1:
                self.log_manager.save_debug_data("install-app-failed", {
                    "reason": "multiple_booted_simulators",
                    "count": len(booted),
                }, app_name)
                return InstallResult.failed(MultipleBootedSimulatorsError(len(booted)), app_path, app_name)
            simulator = booted[0] if booted else None
            missing_error = NoBootedSimulatorError()

        if simulator is None:
            self.log_manager.save_debug_data("install-app-failed", {
                "reason": "simulator_not_found",
                "requestedId": requested_id,
            }, app_name)
            return InstallResult.failed(missing_error, app_path, app_name, requested_id)

        # Auto-boot only when the caller picked a specific simulator
        if requested_id and self.state_query.get_state(simulator.id) is SimulatorState.SHUTDOWN:
            boot_result = self.boot_use_case.boot(simulator)
            if boot_result.outcome is BootOutcome.FAILED:
                error = boot_result.diagnostics.error
                self.log_manager.save_debug_data("simulator-boot-failed", {
                    "simulatorId": simulator.id,
                    "error": str(error),
                }, app_name)
                return InstallResult.failed(SimulatorBootFailedError(error), app_path, app_name,
                                            simulator.id, simulator.name)
            self.log_manager.save_debug_data("simulator-auto-booted", {
                "simulatorId": simulator.id,
                "simulatorName": simulator.name,
            }, app_name)

        result = self.installer.install(app_path, simulator.id)
        if result.status is not ControlStatus.DONE:
            self.log_manager.save_debug_data("install-app-error", {
                "simulator": simulator.name,
                "simulatorId": simulator.id,
                "app": app_name,
                "error": result.stderr,
            }, app_name)
            return InstallResult.failed(InstallCommandFailedError(result.stderr), app_path, app_name,
                                        simulator.id, simulator.name)

        self.log_manager.save_debug_data("install-app-success", {
            "simulator": simulator.name,
            "simulatorId": simulator.id,
            "app": app_name,
        }, app_name)
        logger.info("Installed %s on %s (%s)", app_name, simulator.name, simulator.id)
        # The bundle's display name stands in for its identifier
        return InstallResult.succeeded(app_name, simulator, app_path)
