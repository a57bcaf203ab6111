#!/usr/bin/env python3
"""
Outcome-tagged results for the simulator use cases.

Each result pairs a user-facing outcome with diagnostics. Failures carry an
error instance from the closed set below; these are returned, never raised.
"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List

from mcp_xcode.domain.simulator import SimulatorInfo


class SimulatorOperationError(Exception):
    """Base for every error carried inside a use-case result"""


class SimulatorNotFoundError(SimulatorOperationError):
    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(device_id)


class SimulatorBusyError(SimulatorOperationError):
    """Simulator is mid-transition and cannot accept the command"""

    def __init__(self, state: str):
        self.state = state
        super().__init__(state)


class BootCommandFailedError(SimulatorOperationError):
    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(stderr)


class ShutdownCommandFailedError(SimulatorOperationError):
    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(stderr)


class NoBootedSimulatorError(SimulatorOperationError):
    def __init__(self):
        super().__init__("No booted simulator found")


class MultipleBootedSimulatorsError(SimulatorOperationError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Multiple booted simulators found ({count}). Please specify a simulator ID.")


class SimulatorBootFailedError(SimulatorOperationError):
    """Auto-boot before install failed; wraps the boot error"""

    def __init__(self, boot_error: SimulatorOperationError):
        self.boot_error = boot_error
        super().__init__(str(boot_error))


class AppNotFoundError(SimulatorOperationError):
    def __init__(self, app_path: str):
        self.app_path = app_path
        super().__init__(app_path)


class InstallCommandFailedError(SimulatorOperationError):
    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(stderr)


# Closed error sets per use case
BOOT_ERRORS = (SimulatorNotFoundError, SimulatorBusyError, BootCommandFailedError)
SHUTDOWN_ERRORS = (SimulatorNotFoundError, ShutdownCommandFailedError)
INSTALL_ERRORS = (
    AppNotFoundError,
    SimulatorNotFoundError,
    NoBootedSimulatorError,
    MultipleBootedSimulatorsError,
    SimulatorBootFailedError,
    InstallCommandFailedError,
)


@dataclass(frozen=True)
class SimulatorDiagnostics:
    simulator_id: str
    simulator_name: str = ""
    error: Optional[SimulatorOperationError] = None
    runtime: Optional[str] = None
    platform: Optional[str] = None

    @classmethod
    def of(cls, simulator: SimulatorInfo, error: Optional[SimulatorOperationError] = None) -> "SimulatorDiagnostics":
        return cls(simulator.id, simulator.name, error, simulator.runtime, simulator.platform.value)


class BootOutcome(str, Enum):
    BOOTED = "booted"
    ALREADY_BOOTED = "alreadyBooted"
    FAILED = "failed"


@dataclass(frozen=True)
class BootResult:
    outcome: BootOutcome
    diagnostics: SimulatorDiagnostics

    @classmethod
    def booted(cls, diagnostics: SimulatorDiagnostics) -> "BootResult":
        return cls(BootOutcome.BOOTED, diagnostics)

    @classmethod
    def already_booted(cls, diagnostics: SimulatorDiagnostics) -> "BootResult":
        return cls(BootOutcome.ALREADY_BOOTED, diagnostics)

    @classmethod
    def failed(cls, diagnostics: SimulatorDiagnostics) -> "BootResult":
        if not isinstance(diagnostics.error, BOOT_ERRORS):
            raise TypeError(f"unexpected boot error: {diagnostics.error!r}")
        return cls(BootOutcome.FAILED, diagnostics)


class ShutdownOutcome(str, Enum):
    SHUTDOWN = "shutdown"
    ALREADY_SHUTDOWN = "already_shutdown"
    FAILED = "failed"


@dataclass(frozen=True)
class ShutdownResult:
    outcome: ShutdownOutcome
    diagnostics: SimulatorDiagnostics

    @classmethod
    def shutdown(cls, diagnostics: SimulatorDiagnostics) -> "ShutdownResult":
        return cls(ShutdownOutcome.SHUTDOWN, diagnostics)

    @classmethod
    def already_shutdown(cls, diagnostics: SimulatorDiagnostics) -> "ShutdownResult":
        return cls(ShutdownOutcome.ALREADY_SHUTDOWN, diagnostics)

    @classmethod
    def failed(cls, diagnostics: SimulatorDiagnostics) -> "ShutdownResult":
        if not isinstance(diagnostics.error, SHUTDOWN_ERRORS):
            raise TypeError(f"unexpected shutdown error: {diagnostics.error!r}")
        return cls(ShutdownOutcome.FAILED, diagnostics)


class InstallOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallDiagnostics:
    app_path: str
    bundle_id: str
    simulator_id: Optional[str] = None
    simulator_name: Optional[str] = None
    error: Optional[SimulatorOperationError] = None
    installed_at: Optional[datetime.datetime] = None


@dataclass(frozen=True)
class InstallResult:
    outcome: InstallOutcome
    diagnostics: InstallDiagnostics

    @classmethod
    def succeeded(cls, bundle_id: str, simulator: SimulatorInfo, app_path: str) -> "InstallResult":
        return cls(InstallOutcome.SUCCEEDED, InstallDiagnostics(
            app_path=app_path,
            bundle_id=bundle_id,
            simulator_id=simulator.id,
            simulator_name=simulator.name,
            installed_at=datetime.datetime.now(),
        ))

    @classmethod
    def failed(cls, error: SimulatorOperationError, app_path: str, bundle_id: str,
               simulator_id: Optional[str] = None, simulator_name: Optional[str] = None) -> "InstallResult":
        if not isinstance(error, INSTALL_ERRORS):
            raise TypeError(f"unexpected install error: {error!r}")
        return cls(InstallOutcome.FAILED, InstallDiagnostics(
            app_path=app_path,
            bundle_id=bundle_id,
            simulator_id=simulator_id,
            simulator_name=simulator_name,
            error=error,
        ))


@dataclass(frozen=True)
class ListSimulatorsResult:
    simulators: List[SimulatorInfo] = field(default_factory=list)
    error: Optional[Exception] = None

    @classmethod
    def success(cls, simulators: List[SimulatorInfo]) -> "ListSimulatorsResult":
        return cls(list(simulators))

    @classmethod
    def failed(cls, error: Exception) -> "ListSimulatorsResult":
        return cls([], error)

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        return len(self.simulators)
