#!/usr/bin/env python3
"""Boot a simulator, skipping the command when it is already running"""

import logging

from mcp_xcode.adapters.simulators import SimulatorLocator, SimulatorControl, ControlStatus
from mcp_xcode.domain.enums import SimulatorState
from mcp_xcode.domain.requests import BootRequest
from mcp_xcode.domain.results import (
    BootResult,
    SimulatorDiagnostics,
    SimulatorNotFoundError,
    SimulatorBusyError,
    BootCommandFailedError,
)
from mcp_xcode.domain.simulator import SimulatorInfo

logger = logging.getLogger(__name__)


class BootSimulatorUseCase:
    def __init__(self, locator: SimulatorLocator, control: SimulatorControl):
        self.locator = locator
        self.control = control

    def execute(self, request: BootRequest) -> BootResult:
        device_id = request.device_id.value
        simulator = self.locator.find_simulator(device_id)
        if simulator is None:
            return BootResult.failed(SimulatorDiagnostics(device_id, "", SimulatorNotFoundError(device_id)))
        return self.boot(simulator)

    def boot(self, simulator: SimulatorInfo) -> BootResult:
        """
        Boot an already located simulator.

        Booted short-circuits without a command. Booting still gets an explicit
        boot, and simctl reports whether it was already up. Shutting Down is
        refused since simctl cannot boot a device mid-shutdown.
        """
        if simulator.is_booted:
            return BootResult.already_booted(SimulatorDiagnostics.of(simulator))
        if simulator.state is SimulatorState.SHUTTING_DOWN:
            error = SimulatorBusyError(simulator.state.value)
            return BootResult.failed(SimulatorDiagnostics.of(simulator, error))

        result = self.control.boot(simulator.id)
        if result.status is ControlStatus.DONE:
            logger.info("Booted simulator %s (%s)", simulator.name, simulator.id)
            return BootResult.booted(SimulatorDiagnostics.of(simulator))
        if result.status is ControlStatus.ALREADY_IN_STATE:
            return BootResult.already_booted(SimulatorDiagnostics.of(simulator))
        if result.status is ControlStatus.NOT_FOUND:
            return BootResult.failed(SimulatorDiagnostics.of(simulator, SimulatorNotFoundError(simulator.id)))

        logger.warning("Failed to boot %s: %s", simulator.id, result.stderr)
        return BootResult.failed(SimulatorDiagnostics.of(simulator, BootCommandFailedError(result.stderr)))
