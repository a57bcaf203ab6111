#!/usr/bin/env python3
"""simctl adapters: inventory, lookup, lifecycle control and app install"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, List, Dict, Tuple

from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.enums import Platform, SimulatorState
from mcp_xcode.domain.simulator import SimulatorInfo
from mcp_xcode.exceptions import SimulatorListParseError, CommandFailedError

logger = logging.getLogger(__name__)

LIST_DEVICES_COMMAND = "xcrun simctl list devices --json"

# simctl exit statuses
ALREADY_IN_STATE_EXIT_CODE = 149
INVALID_DEVICE_EXIT_CODE = 164


def platform_from_runtime(runtime: str) -> Platform:
    """Platform of a runtime identifier such as com.apple.CoreSimulator.SimRuntime.tvOS-17-2"""
    lowered = runtime.lower()
    if "tvos" in lowered:
        return Platform.TVOS
    if "watchos" in lowered:
        return Platform.WATCHOS
    if "xros" in lowered or "visionos" in lowered:
        return Platform.VISIONOS
    if "macos" in lowered:
        return Platform.MACOS
    return Platform.IOS


def runtime_version(runtime: str) -> Tuple[int, int]:
    match = re.search(r"(\d+)-(\d+)", runtime)
    if not match:
        return (0, 0)
    return (int(match.group(1)), int(match.group(2)))


def describe_runtime(runtime: str) -> str:
    """Human readable runtime, e.g. 'iOS 17.2'"""
    platform = platform_from_runtime(runtime)
    match = re.search(r"(\d+(?:[-.]\d+)*)$", runtime)
    if not match:
        return platform.value
    return f"{platform.value} {match.group(1).replace('-', '.')}"


def to_simulator_info(device: dict, runtime: str) -> SimulatorInfo:
    return SimulatorInfo(
        id=device["udid"],
        name=device["name"],
        state=SimulatorState.from_simctl(device.get("state")),
        platform=platform_from_runtime(runtime),
        runtime=describe_runtime(runtime),
    )


class DeviceRepository:
    """Reads the full simulator inventory in one simctl call"""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def get_all_devices(self) -> Dict[str, List[dict]]:
        """
        Fetch every simulator grouped by runtime identifier.

        Raises:
            CommandFailedError: simctl exited nonzero
            SimulatorListParseError: output is not JSON or not the expected tree
        """
        result = self.executor.execute(LIST_DEVICES_COMMAND)
        if result.exit_code != 0:
            raise CommandFailedError(result.stderr.strip() or "Failed to list simulators", result.exit_code)

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise SimulatorListParseError(f"Failed to parse simulator list: {e}")

        devices = data.get("devices") if isinstance(data, dict) else None
        if not isinstance(devices, dict) or not all(isinstance(v, list) for v in devices.values()):
            raise SimulatorListParseError("Failed to parse simulator list: unexpected structure")
        for device_list in devices.values():
            for device in device_list:
                if not isinstance(device, dict) or "udid" not in device or "name" not in device:
                    raise SimulatorListParseError("Failed to parse simulator list: device entry missing udid or name")
        return devices

    def get_available_simulators(self) -> List[Tuple[dict, str]]:
        """(device, runtime) pairs for every available simulator, in inventory order"""
        pairs = []
        for runtime, device_list in self.get_all_devices().items():
            for device in device_list:
                if device.get("isAvailable", False):
                    pairs.append((device, runtime))
        return pairs


class SimulatorLocator:
    def __init__(self, repository: DeviceRepository):
        self.repository = repository

    def find_simulator(self, id_or_name: str) -> Optional[SimulatorInfo]:
        """
        Find an available simulator by UDID or name.

        When several simulators share the name, booted ones win, then the
        newest runtime.
        """
        matches = [
            (device, runtime)
            for device, runtime in self.repository.get_available_simulators()
            if device["udid"] == id_or_name or device["name"] == id_or_name
        ]
        if not matches:
            return None

        matches.sort(key=lambda pair: (
            pair[0].get("state") != SimulatorState.BOOTED.value,
            tuple(-part for part in runtime_version(pair[1])),
        ))
        device, runtime = matches[0]
        return to_simulator_info(device, runtime)

    def find_booted_simulators(self) -> List[SimulatorInfo]:
        return [
            to_simulator_info(device, runtime)
            for device, runtime in self.repository.get_available_simulators()
            if device.get("state") == SimulatorState.BOOTED.value
        ]


class SimulatorStateQuery:
    def __init__(self, repository: DeviceRepository):
        self.repository = repository

    def get_state(self, simulator_id: str) -> SimulatorState:
        for device_list in self.repository.get_all_devices().values():
            for device in device_list:
                if device["udid"] == simulator_id:
                    return SimulatorState.from_simctl(device.get("state"))
        return SimulatorState.UNKNOWN


class ControlStatus(Enum):
    DONE = "done"
    ALREADY_IN_STATE = "already_in_state"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ControlResult:
    status: ControlStatus
    stderr: str = ""


class SimulatorControl:
    """Issues simctl boot/shutdown and classifies simctl's exit conventions"""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def boot(self, simulator_id: str) -> ControlResult:
        result = self.executor.execute(f'xcrun simctl boot "{simulator_id}"')
        return _classify(result.exit_code, result.stderr, ("current state: Booted", "current state: Booting"))

    def shutdown(self, simulator_id: str) -> ControlResult:
        result = self.executor.execute(f'xcrun simctl shutdown "{simulator_id}"')
        return _classify(result.exit_code, result.stderr, ("current state: Shutdown", "current state: Shutting Down"))


def _classify(exit_code: int, stderr: str, already_markers: Tuple[str, ...]) -> ControlResult:
    stderr = stderr.strip()
    if exit_code == 0:
        return ControlResult(ControlStatus.DONE, stderr)
    if any(marker in stderr for marker in already_markers):
        return ControlResult(ControlStatus.ALREADY_IN_STATE, stderr)
    if exit_code == INVALID_DEVICE_EXIT_CODE or "Invalid device" in stderr:
        return ControlResult(ControlStatus.NOT_FOUND, stderr)
    if exit_code == ALREADY_IN_STATE_EXIT_CODE:
        logger.warning("simctl exit %d without a recognised state message: %s", exit_code, stderr)
    return ControlResult(ControlStatus.FAILED, stderr)


class AppInstaller:
    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def install(self, app_path: str, simulator_id: str) -> ControlResult:
        result = self.executor.execute(f'xcrun simctl install "{simulator_id}" "{app_path}"')
        if result.exit_code != 0:
            return ControlResult(ControlStatus.FAILED, result.stderr.strip() or "Failed to install app")
        return ControlResult(ControlStatus.DONE)
