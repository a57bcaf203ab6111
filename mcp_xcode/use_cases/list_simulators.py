#!/usr/bin/env python3
"""List available simulators with optional platform, state and name filters"""

import logging

from mcp_xcode.adapters.simulators import DeviceRepository, to_simulator_info
from mcp_xcode.domain.requests import ListSimulatorsRequest
from mcp_xcode.domain.results import ListSimulatorsResult
from mcp_xcode.exceptions import XCodeMCPError

logger = logging.getLogger(__name__)


class ListSimulatorsUseCase:
    def __init__(self, repository: DeviceRepository):
        self.repository = repository

    def execute(self, request: ListSimulatorsRequest) -> ListSimulatorsResult:
        try:
            pairs = self.repository.get_available_simulators()
        except XCodeMCPError as e:
            logger.error("Failed to list simulators: %s", e.message)
            return ListSimulatorsResult.failed(e)

        simulators = [to_simulator_info(device, runtime) for device, runtime in pairs]
        if request.platform is not None:
            simulators = [s for s in simulators if s.platform is request.platform]
        if request.state is not None:
            simulators = [s for s in simulators if s.state is request.state]
        if request.name:
            needle = request.name.lower()
            simulators = [s for s in simulators if needle in s.name.lower()]
        return ListSimulatorsResult.success(simulators)
