#!/usr/bin/env python3
"""Validated value objects built from raw tool arguments"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from mcp_xcode.domain.errors import (
    RequiredError,
    EmptyError,
    WhitespaceOnlyError,
    InvalidTypeError,
    InvalidFormatError,
)
from mcp_xcode.security import validate_and_normalize_project_path


@dataclass(frozen=True)
class DeviceId:
    """Simulator or device identifier - a UUID or a device name"""

    value: str

    @classmethod
    def create(cls, raw) -> "DeviceId":
        if raw is None:
            raise RequiredError("Device ID")
        if not isinstance(raw, str):
            raise InvalidTypeError("Device ID", provided=raw)
        if raw == "":
            raise EmptyError("Device ID")
        if raw.strip() == "":
            raise WhitespaceOnlyError("Device ID")
        return cls(raw.strip())

    @classmethod
    def create_optional(cls, raw) -> Optional["DeviceId"]:
        if raw is None:
            return None
        return cls.create(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AppPath:
    """Path to an .app bundle; a trailing separator is kept in the value"""

    value: str

    @classmethod
    def create(cls, raw) -> "AppPath":
        if raw is None:
            raise RequiredError("App path")
        if not isinstance(raw, str):
            raise InvalidTypeError("App path", provided=raw)
        if raw.strip() == "":
            raise EmptyError("App path")

        path = raw.strip()
        # Security checks run before format validation
        if ".." in path:
            raise InvalidFormatError("App path cannot contain directory traversal")
        if "\0" in path:
            raise InvalidFormatError("App path cannot contain null characters")
        if not (path.endswith(".app") or path.endswith(".app/")):
            raise InvalidFormatError("App path must end with .app")
        return cls(path)

    @property
    def name(self) -> str:
        parts = re.split(r"[/\\]", self.value)
        return parts[-1] or parts[-2]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProjectPath:
    """An existing .xcodeproj or .xcworkspace inside the allowed folders"""

    value: str

    @classmethod
    def create(cls, raw) -> "ProjectPath":
        if raw is not None and not isinstance(raw, str):
            raise InvalidTypeError("Project path", provided=raw)
        return cls(validate_and_normalize_project_path(raw))

    @property
    def name(self) -> str:
        return os.path.splitext(os.path.basename(self.value))[0]

    @property
    def is_workspace(self) -> bool:
        return self.value.endswith(".xcworkspace")

    def __str__(self) -> str:
        return self.value
