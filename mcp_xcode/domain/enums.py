#!/usr/bin/env python3
"""Closed vocabularies: platforms, simulator states and build destinations"""

from enum import Enum
from typing import Type, TypeVar

from mcp_xcode.domain.errors import InvalidTypeError, InvalidValueError

E = TypeVar("E", bound=Enum)


class Platform(str, Enum):
    IOS = "iOS"
    MACOS = "macOS"
    TVOS = "tvOS"
    WATCHOS = "watchOS"
    VISIONOS = "visionOS"

    @property
    def destination_name(self) -> str:
        """Name xcodebuild expects in -destination strings"""
        return "xrOS" if self is Platform.VISIONOS else self.value


class SimulatorState(str, Enum):
    # Values match `xcrun simctl` output exactly
    BOOTED = "Booted"
    BOOTING = "Booting"
    SHUTDOWN = "Shutdown"
    SHUTTING_DOWN = "Shutting Down"
    UNKNOWN = "Unknown"

    @classmethod
    def from_simctl(cls, raw) -> "SimulatorState":
        """Lenient conversion for inventory data; anything unrecognised is Unknown."""
        for state in cls:
            if state.value == raw:
                return state
        return cls.UNKNOWN


class BuildDestination(str, Enum):
    IOS_SIMULATOR = "iOSSimulator"
    IOS_DEVICE = "iOSDevice"
    IOS_SIMULATOR_UNIVERSAL = "iOSSimulatorUniversal"
    MACOS = "macOS"
    MACOS_UNIVERSAL = "macOSUniversal"
    TVOS_SIMULATOR = "tvOSSimulator"
    TVOS_DEVICE = "tvOSDevice"
    TVOS_SIMULATOR_UNIVERSAL = "tvOSSimulatorUniversal"
    WATCHOS_SIMULATOR = "watchOSSimulator"
    WATCHOS_DEVICE = "watchOSDevice"
    WATCHOS_SIMULATOR_UNIVERSAL = "watchOSSimulatorUniversal"
    VISIONOS_SIMULATOR = "visionOSSimulator"
    VISIONOS_DEVICE = "visionOSDevice"
    VISIONOS_SIMULATOR_UNIVERSAL = "visionOSSimulatorUniversal"

    @property
    def platform(self) -> Platform:
        for platform in Platform:
            if self.value.startswith(platform.value):
                return platform
        return Platform.IOS

    @property
    def is_simulator(self) -> bool:
        return "Simulator" in self.value

    @property
    def is_device(self) -> bool:
        return self.value.endswith("Device")

    @property
    def is_universal(self) -> bool:
        return self.value.endswith("Universal")


def parse_enum(enum_cls: Type[E], value, field: str) -> E:
    """
    Parse a raw tool argument into an enum member.

    Args:
        enum_cls: Enum to parse into
        value: Raw value from the caller
        field: Display name used in error messages

    Returns:
        The matching enum member

    Raises:
        InvalidTypeError: value is not a string
        InvalidValueError: value is a string outside the allowed set
    """
    allowed = ", ".join(member.value for member in enum_cls)
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise InvalidTypeError(field, provided=value,
                               message=f"{field} must be a string (one of: {allowed}), got {type(value).__name__}")
    for member in enum_cls:
        if member.value == value:
            return member
    raise InvalidValueError(f"Invalid {field.lower()}: {value}. Valid values are: {allowed}", value=value)


def parse_platform(value) -> Platform:
    return parse_enum(Platform, value, "Platform")


def parse_simulator_state(value) -> SimulatorState:
    return parse_enum(SimulatorState, value, "State")


def parse_build_destination(value) -> BuildDestination:
    return parse_enum(BuildDestination, value, "Destination")
