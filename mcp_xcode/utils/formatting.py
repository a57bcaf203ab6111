#!/usr/bin/env python3
"""Render use-case results as tool response text"""

from mcp_xcode.domain.build import BuildResult, TestRunResult
from mcp_xcode.domain.results import (
    BootResult,
    BootOutcome,
    ShutdownResult,
    ShutdownOutcome,
    InstallResult,
    InstallOutcome,
    ListSimulatorsResult,
    SimulatorDiagnostics,
    SimulatorOperationError,
    SimulatorNotFoundError,
    SimulatorBusyError,
    NoBootedSimulatorError,
    MultipleBootedSimulatorsError,
    SimulatorBootFailedError,
    AppNotFoundError,
)
from mcp_xcode.domain.simulator import SimulatorInfo
from mcp_xcode.utils.build_output import format_build_issues

MAX_FAILING_TESTS = 10


def _label(name, device_id) -> str:
    return f"{name} ({device_id})" if name else str(device_id)


def _failure(diagnostics: SimulatorDiagnostics, action: str) -> str:
    error = diagnostics.error
    if isinstance(error, SimulatorNotFoundError):
        return f"❌ Simulator not found: {error.device_id}"
    label = _label(diagnostics.simulator_name, diagnostics.simulator_id)
    if isinstance(error, SimulatorBusyError):
        return f"❌ {label} - cannot {action} while simulator is {error.state}, try again shortly"
    return f"❌ {label} - {error}"


def format_boot_result(result: BootResult) -> str:
    diagnostics = result.diagnostics
    label = _label(diagnostics.simulator_name, diagnostics.simulator_id)
    if result.outcome is BootOutcome.BOOTED:
        return f"✅ Successfully booted simulator: {label}"
    if result.outcome is BootOutcome.ALREADY_BOOTED:
        return f"✅ Simulator already booted: {label}"
    return _failure(diagnostics, "boot")


def format_shutdown_result(result: ShutdownResult) -> str:
    diagnostics = result.diagnostics
    label = _label(diagnostics.simulator_name, diagnostics.simulator_id)
    if result.outcome is ShutdownOutcome.SHUTDOWN:
        return f"✅ Successfully shutdown simulator: {label}"
    if result.outcome is ShutdownOutcome.ALREADY_SHUTDOWN:
        return f"✅ Simulator already shutdown: {label}"
    return _failure(diagnostics, "shut down")


def _install_error(error: SimulatorOperationError, label: str) -> str:
    if isinstance(error, AppNotFoundError):
        return f"❌ App not found: {error.app_path}"
    if isinstance(error, SimulatorNotFoundError):
        return f"❌ Simulator not found: {error.device_id}"
    if isinstance(error, NoBootedSimulatorError):
        return "❌ No booted simulator found. Please boot a simulator first or specify a simulator ID."
    if isinstance(error, MultipleBootedSimulatorsError):
        return f"❌ {error}"
    if isinstance(error, SimulatorBootFailedError):
        return f"❌ {label} - failed to boot simulator: {error.boot_error}"
    return f"❌ {label} - {error}"


def format_install_result(result: InstallResult) -> str:
    diagnostics = result.diagnostics
    label = _label(diagnostics.simulator_name, diagnostics.simulator_id)
    if result.outcome is InstallOutcome.SUCCEEDED:
        return f"✅ Successfully installed {diagnostics.bundle_id} on {label}"
    return _install_error(diagnostics.error, label)


def format_simulator_list(result: ListSimulatorsResult) -> str:
    if not result.is_success:
        return f"❌ Failed to list simulators: {result.error}"
    if result.count == 0:
        return "🔍 No simulators found"
    lines = [f"Found {result.count} simulator{'s' if result.count != 1 else ''}", ""]
    lines.extend(_simulator_line(simulator) for simulator in result.simulators)
    return "\n".join(lines)


def _simulator_line(simulator: SimulatorInfo) -> str:
    return f"• {simulator.name} ({simulator.id}) - {simulator.state.value} - {simulator.runtime}"


def format_build_result(result: BuildResult, include_warnings: bool = True) -> str:
    lines = []
    if result.success:
        lines.append(f"✅ Build succeeded for {result.destination}" if result.destination else "✅ Build succeeded")
        if result.app_path:
            lines.append(f"App path: {result.app_path}")
    else:
        lines.append(f"❌ Build failed with exit code {result.exit_code}")

    issues = format_build_issues(result.issues, include_warnings)
    if issues:
        lines.append("")
        lines.append(issues)
    elif not result.success:
        lines.append("")
        lines.append(_tail(result.output))

    if result.log_path:
        lines.append("")
        lines.append(f"📁 Full logs saved to: {result.log_path}")
    return "\n".join(lines)


def format_test_result(result: TestRunResult, include_warnings: bool = False) -> str:
    summary = result.summary
    icon = "✅" if result.success else "❌"
    status = "Tests passed" if result.success else "Tests failed"
    lines = [f"{icon} {status}: {summary.passed} passed, {summary.failed} failed"]

    if summary.failing_tests:
        lines.append("")
        lines.append("Failing tests:")
        for test in summary.failing_tests[:MAX_FAILING_TESTS]:
            lines.append(f"  • {test.identifier}" + (f": {test.reason}" if test.reason else ""))
        if len(summary.failing_tests) > MAX_FAILING_TESTS:
            lines.append(f"  ... and {len(summary.failing_tests) - MAX_FAILING_TESTS} more")

    # Compile errors explain a failed run that never reached the tests
    if result.issues and (not result.success or include_warnings):
        issues = format_build_issues(result.issues, include_warnings)
        if issues:
            lines.append("")
            lines.append(issues)

    if result.log_path:
        lines.append("")
        lines.append(f"📁 Full logs saved to: {result.log_path}")
    return "\n".join(lines)


def _tail(output: str, count: int = 20) -> str:
    lines = [line for line in output.split("\n") if line.strip()]
    return "\n".join(lines[-count:])
