#!/usr/bin/env python3
"""Map BuildDestination values onto xcodebuild -destination strings and build settings"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, List

from mcp_xcode.adapters.executor import CommandExecutor
from mcp_xcode.domain.enums import Platform, BuildDestination

logger = logging.getLogger(__name__)

UNIVERSAL_ARCHITECTURES = ["arm64", "x86_64"]

UUID_PATTERN = re.compile(
    r"^[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}$", re.IGNORECASE
)


class ArchitectureDetector:
    """Detects the host CPU architecture. The answer is cached per instance."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor
        self._architecture: Optional[str] = None

    def is_apple_silicon(self) -> bool:
        return self.current_architecture() == "arm64"

    def current_architecture(self) -> str:
        if self._architecture is not None:
            return self._architecture

        result = self.executor.execute("sysctl -n hw.optional.arm64", timeout=10)
        if result.exit_code == 0 and result.stdout.strip():
            self._architecture = "arm64" if result.stdout.strip() == "1" else "x86_64"
        else:
            result = self.executor.execute("uname -m", timeout=10)
            self._architecture = "arm64" if result.stdout.strip() == "arm64" else "x86_64"

        logger.debug("Detected host architecture: %s", self._architecture)
        return self._architecture


@dataclass(frozen=True)
class MappedDestination:
    destination: str
    additional_settings: List[str] = field(default_factory=list)
    architectures: List[str] = field(default_factory=list)

    def describe(self) -> str:
        if not self.architectures:
            return self.destination
        return f"{self.destination} ({','.join(self.architectures)})"


class BuildDestinationMapper:
    def __init__(self, architecture_detector: ArchitectureDetector):
        self.architecture_detector = architecture_detector

    def map(self, destination: BuildDestination, device_id: Optional[str] = None) -> MappedDestination:
        """
        Resolve a destination for xcodebuild.

        Args:
            destination: Abstract build destination
            device_id: Optional simulator/device UUID or name to target a specific instance

        Returns:
            MappedDestination with the -destination value and any extra build settings
        """
        if destination.is_universal:
            architectures = list(UNIVERSAL_ARCHITECTURES)
            settings = ["ONLY_ACTIVE_ARCH=NO", f"ARCHS={' '.join(architectures)}"]
        elif destination.is_device:
            architectures = ["arm64"]
            settings = []
        else:
            arch = self.architecture_detector.current_architecture()
            architectures = [arch]
            settings = [f"ARCHS={arch}", "ONLY_ACTIVE_ARCH=YES"]

        if device_id:
            dest = specific_destination(destination, device_id)
        else:
            dest = generic_destination(destination)
        return MappedDestination(dest, settings, architectures)


def _platform_label(destination: BuildDestination) -> str:
    platform = destination.platform
    if platform is Platform.MACOS:
        return "macOS"
    label = platform.destination_name
    return f"{label} Simulator" if destination.is_simulator else label


def generic_destination(destination: BuildDestination) -> str:
    if destination.platform is Platform.MACOS:
        return "platform=macOS"
    return f"generic/platform={_platform_label(destination)}"


def specific_destination(destination: BuildDestination, device_id: str) -> str:
    if destination.platform is Platform.MACOS:
        return "platform=macOS"
    key = "id" if UUID_PATTERN.match(device_id) else "name"
    return f"platform={_platform_label(destination)},{key}={device_id}"
