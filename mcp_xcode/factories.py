#!/usr/bin/env python3
"""Wiring of adapters into use cases. Everything is built fresh per tool call."""

from mcp_xcode.adapters.artifacts import AppLocator
from mcp_xcode.adapters.dependencies import DependencyChecker
from mcp_xcode.adapters.destinations import ArchitectureDetector, BuildDestinationMapper
from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.adapters.simulators import (
    DeviceRepository,
    SimulatorLocator,
    SimulatorStateQuery,
    SimulatorControl,
    AppInstaller,
)
from mcp_xcode.use_cases.boot_simulator import BootSimulatorUseCase
from mcp_xcode.use_cases.build_project import BuildProjectUseCase
from mcp_xcode.use_cases.clean_project import CleanProjectUseCase
from mcp_xcode.use_cases.install_app import InstallAppUseCase
from mcp_xcode.use_cases.list_simulators import ListSimulatorsUseCase
from mcp_xcode.use_cases.run_project_tests import TestProjectUseCase
from mcp_xcode.use_cases.shutdown_simulator import ShutdownSimulatorUseCase
from mcp_xcode.utils.logs import LogManager
from mcp_xcode.utils.xcresult import TestResultParser


def get_executor() -> CommandExecutor:
    return CommandExecutor()


def get_log_manager() -> LogManager:
    return LogManager()


def get_dependency_checker() -> DependencyChecker:
    return DependencyChecker(get_executor())


def _locator(executor: CommandExecutor) -> SimulatorLocator:
    return SimulatorLocator(DeviceRepository(executor))


def _destination_mapper(executor: CommandExecutor) -> BuildDestinationMapper:
    return BuildDestinationMapper(ArchitectureDetector(executor))


def create_boot_simulator_use_case() -> BootSimulatorUseCase:
    executor = get_executor()
    return BootSimulatorUseCase(_locator(executor), SimulatorControl(executor))


def create_shutdown_simulator_use_case() -> ShutdownSimulatorUseCase:
    executor = get_executor()
    return ShutdownSimulatorUseCase(_locator(executor), SimulatorControl(executor))


def create_install_app_use_case() -> InstallAppUseCase:
    executor = get_executor()
    locator = _locator(executor)
    return InstallAppUseCase(
        locator,
        SimulatorStateQuery(DeviceRepository(executor)),
        BootSimulatorUseCase(locator, SimulatorControl(executor)),
        AppInstaller(executor),
        get_log_manager(),
    )


def create_list_simulators_use_case() -> ListSimulatorsUseCase:
    return ListSimulatorsUseCase(DeviceRepository(get_executor()))


def create_build_project_use_case() -> BuildProjectUseCase:
    executor = get_executor()
    return BuildProjectUseCase(_destination_mapper(executor), executor, AppLocator(executor), get_log_manager())


def create_test_project_use_case() -> TestProjectUseCase:
    executor = get_executor()
    return TestProjectUseCase(_destination_mapper(executor), executor, TestResultParser(executor), get_log_manager())


def create_clean_project_use_case() -> CleanProjectUseCase:
    return CleanProjectUseCase(get_executor(), get_log_manager())
