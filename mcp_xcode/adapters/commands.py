#!/usr/bin/env python3
"""
xcodebuild command construction.

Pure string builders over validated inputs. Nothing here runs a process.
"""

from typing import Optional, List

from mcp_xcode.adapters.destinations import MappedDestination


def _quote_setting(setting: str) -> str:
    return f'"{setting}"' if " " in setting else setting


def _base_command(project_path: str, is_workspace: bool,
                  scheme: Optional[str], configuration: str) -> List[str]:
    parts = ["xcodebuild", "-workspace" if is_workspace else "-project", f'"{project_path}"']
    if scheme:
        parts.append(f'-scheme "{scheme}"')
    parts.append(f'-configuration "{configuration}"')
    return parts


def _beautified(command: str) -> str:
    # pipefail keeps xcodebuild's exit status through the xcbeautify pipe
    return f"set -o pipefail && {command} 2>&1 | xcbeautify"


def make_build_command(project_path: str,
                       is_workspace: bool,
                       scheme: Optional[str],
                       configuration: str,
                       destination: MappedDestination,
                       derived_data_path: Optional[str] = None) -> str:
    """
    Build an `xcodebuild ... build` invocation piped through xcbeautify.

    Args:
        project_path: Path to the .xcodeproj or .xcworkspace
        is_workspace: Use -workspace instead of -project
        scheme: Scheme to build
        configuration: Build configuration, e.g. Debug
        destination: Mapped destination and extra build settings
        derived_data_path: Optional -derivedDataPath

    Returns:
        Complete shell command string
    """
    parts = _base_command(project_path, is_workspace, scheme, configuration)
    parts.append(f"-destination '{destination.destination}'")
    parts.extend(_quote_setting(setting) for setting in destination.additional_settings)
    if derived_data_path:
        parts.append(f'-derivedDataPath "{derived_data_path}"')
    parts.append("build")
    return _beautified(" ".join(parts))


def make_test_command(project_path: str,
                      is_workspace: bool,
                      scheme: Optional[str],
                      configuration: str,
                      destination: MappedDestination,
                      result_bundle_path: str,
                      test_target: Optional[str] = None,
                      test_filter: Optional[str] = None,
                      derived_data_path: Optional[str] = None) -> str:
    """Build an `xcodebuild ... test` invocation writing a result bundle"""
    parts = _base_command(project_path, is_workspace, scheme, configuration)
    parts.append(f"-destination '{destination.destination}'")
    parts.extend(_quote_setting(setting) for setting in destination.additional_settings)
    if derived_data_path:
        parts.append(f'-derivedDataPath "{derived_data_path}"')
    if test_target:
        parts.append(f"-only-testing:{test_target}")
    if test_filter:
        parts.append(f"-only-testing:{test_filter}")
    # Parallel testing spawns extra simulator clones and tends to time out
    parts.append("-parallel-testing-enabled NO")
    parts.append(f'-resultBundlePath "{result_bundle_path}"')
    parts.append("test")
    return _beautified(" ".join(parts))


def make_clean_command(project_path: str,
                       is_workspace: bool,
                       scheme: Optional[str],
                       configuration: str) -> str:
    parts = _base_command(project_path, is_workspace, scheme, configuration)
    parts.append("clean")
    return " ".join(parts)
