#!/usr/bin/env python3
"""Validation errors raised while building requests from tool arguments"""

from mcp_xcode.exceptions import InvalidParameterError


class ValidationError(InvalidParameterError):
    pass


class RequiredError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"{field} is required", code="required")


class EmptyError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"{field} cannot be empty", code="empty")


class WhitespaceOnlyError(ValidationError):
    def __init__(self, field: str):
        super().__init__(f"{field} cannot be whitespace only", code="whitespace_only")


class InvalidTypeError(ValidationError):
    def __init__(self, field: str, expected: str = "string", provided=None, message=None):
        self.provided_type = type(provided).__name__
        super().__init__(message or f"{field} must be a {expected}", code="invalid_type")


class InvalidFormatError(ValidationError):
    def __init__(self, message: str):
        super().__init__(message, code="invalid_format")


class InvalidValueError(ValidationError):
    """Value has the right type but is not one of the allowed values"""

    def __init__(self, message: str, value=None):
        self.value = value
        super().__init__(message, code="invalid_value")
