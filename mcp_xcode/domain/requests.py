#!/usr/bin/env python3
"""Immutable, validated requests for each use case"""

import datetime
import os
from dataclasses import dataclass
from typing import Optional

from mcp_xcode import config
from mcp_xcode.domain.enums import (
    Platform,
    SimulatorState,
    BuildDestination,
    parse_platform,
    parse_simulator_state,
    parse_build_destination,
)
from mcp_xcode.domain.errors import RequiredError, EmptyError, InvalidTypeError, InvalidValueError
from mcp_xcode.domain.values import DeviceId, AppPath, ProjectPath


def _optional_string(raw, field: str) -> Optional[str]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidTypeError(field, provided=raw)
    return raw.strip() or None


def _required_string(raw, field: str) -> str:
    if raw is None:
        raise RequiredError(field)
    if not isinstance(raw, str):
        raise InvalidTypeError(field, provided=raw)
    if raw.strip() == "":
        raise EmptyError(field)
    return raw.strip()


@dataclass(frozen=True)
class BootRequest:
    device_id: DeviceId

    @classmethod
    def create(cls, device_id) -> "BootRequest":
        return cls(DeviceId.create(device_id))


@dataclass(frozen=True)
class ShutdownRequest:
    device_id: DeviceId

    @classmethod
    def create(cls, device_id) -> "ShutdownRequest":
        return cls(DeviceId.create(device_id))


@dataclass(frozen=True)
class InstallRequest:
    """What to install (app_path) and where (simulator_id, or the booted simulator)"""

    app_path: AppPath
    simulator_id: Optional[DeviceId] = None

    @classmethod
    def create(cls, app_path, simulator_id=None) -> "InstallRequest":
        return cls(AppPath.create(app_path), DeviceId.create_optional(simulator_id))


@dataclass(frozen=True)
class ListSimulatorsRequest:
    platform: Optional[Platform] = None
    state: Optional[SimulatorState] = None
    name: Optional[str] = None

    @classmethod
    def create(cls, platform=None, state=None, name=None) -> "ListSimulatorsRequest":
        return cls(
            parse_platform(platform) if platform is not None else None,
            parse_simulator_state(state) if state is not None else None,
            _optional_string(name, "Name"),
        )


def _parse_destination(raw) -> BuildDestination:
    try:
        return parse_build_destination(raw)
    except InvalidValueError:
        raise InvalidValueError(
            "Invalid destination. Use format: [platform][Simulator|Device|SimulatorUniversal]", value=raw
        )


def _derived_data(raw, project: ProjectPath) -> str:
    if raw is None:
        return config.get_derived_data_path(project.name)
    return _required_string(raw, "Derived data path")


@dataclass(frozen=True)
class BuildRequest:
    project_path: ProjectPath
    scheme: str
    destination: BuildDestination
    configuration: str
    derived_data_path: str
    device_id: Optional[DeviceId] = None

    @classmethod
    def create(cls, project_path, scheme, destination=BuildDestination.IOS_SIMULATOR,
               configuration="Debug", derived_data_path=None, device_id=None) -> "BuildRequest":
        project = ProjectPath.create(project_path)
        return cls(
            project,
            _required_string(scheme, "Scheme"),
            _parse_destination(destination),
            _required_string(configuration, "Configuration"),
            _derived_data(derived_data_path, project),
            DeviceId.create_optional(device_id),
        )


@dataclass(frozen=True)
class TestRequest:
    __test__ = False

    project_path: ProjectPath
    scheme: Optional[str]
    destination: BuildDestination
    configuration: str
    derived_data_path: str
    result_bundle_path: str
    device_id: Optional[DeviceId] = None
    test_target: Optional[str] = None
    test_filter: Optional[str] = None

    @classmethod
    def create(cls, project_path, scheme=None, destination=BuildDestination.IOS_SIMULATOR,
               configuration="Debug", device_id=None, test_target=None, test_filter=None,
               derived_data_path=None) -> "TestRequest":
        project = ProjectPath.create(project_path)
        scheme = _optional_string(scheme, "Scheme")
        derived_data_path = _derived_data(derived_data_path, project)
        timestamp = datetime.datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
        result_bundle_path = os.path.join(
            derived_data_path, "Logs", "Test", f"Test-{scheme or 'tests'}-{timestamp}.xcresult"
        )
        return cls(
            project,
            scheme,
            _parse_destination(destination),
            _required_string(configuration, "Configuration"),
            derived_data_path,
            result_bundle_path,
            DeviceId.create_optional(device_id),
            _optional_string(test_target, "Test target"),
            _optional_string(test_filter, "Test filter"),
        )


@dataclass(frozen=True)
class CleanRequest:
    project_path: ProjectPath
    scheme: Optional[str]
    configuration: str
    derived_data_path: str
    clean_derived_data: bool = False

    @classmethod
    def create(cls, project_path, scheme=None, configuration="Debug",
               derived_data_path=None, clean_derived_data=False) -> "CleanRequest":
        project = ProjectPath.create(project_path)
        if not isinstance(clean_derived_data, bool):
            raise InvalidTypeError("clean_derived_data", expected="boolean", provided=clean_derived_data)
        return cls(
            project,
            _optional_string(scheme, "Scheme"),
            _required_string(configuration, "Configuration"),
            _derived_data(derived_data_path, project),
            clean_derived_data,
        )
