#!/usr/bin/env python3
"""Shut a simulator down, skipping the command when it is already off"""

import logging

from mcp_xcode.adapters.simulators import SimulatorLocator, SimulatorControl, ControlStatus
from mcp_xcode.domain.enums import SimulatorState
from mcp_xcode.domain.requests import ShutdownRequest
from mcp_xcode.domain.results import (
    ShutdownResult,
    SimulatorDiagnostics,
    SimulatorNotFoundError,
    ShutdownCommandFailedError,
)

logger = logging.getLogger(__name__)


class ShutdownSimulatorUseCase:
    def __init__(self, locator: SimulatorLocator, control: SimulatorControl):
        self.locator = locator
        self.control = control

    def execute(self, request: ShutdownRequest) -> ShutdownResult:
        device_id = request.device_id.value
        simulator = self.locator.find_simulator(device_id)
        if simulator is None:
            return ShutdownResult.failed(SimulatorDiagnostics(device_id, "", SimulatorNotFoundError(device_id)))

        # Shutting Down already converges on the target state
        if simulator.state in (SimulatorState.SHUTDOWN, SimulatorState.SHUTTING_DOWN):
            return ShutdownResult.already_shutdown(SimulatorDiagnostics.of(simulator))

        result = self.control.shutdown(simulator.id)
        if result.status is ControlStatus.DONE:
            logger.info("Shut down simulator %s (%s)", simulator.name, simulator.id)
            return ShutdownResult.shutdown(SimulatorDiagnostics.of(simulator))
        if result.status is ControlStatus.ALREADY_IN_STATE:
            return ShutdownResult.already_shutdown(SimulatorDiagnostics.of(simulator))
        if result.status is ControlStatus.NOT_FOUND:
            return ShutdownResult.failed(SimulatorDiagnostics.of(simulator, SimulatorNotFoundError(simulator.id)))

        logger.warning("Failed to shut down %s: %s", simulator.id, result.stderr)
        return ShutdownResult.failed(SimulatorDiagnostics.of(simulator, ShutdownCommandFailedError(result.stderr)))
