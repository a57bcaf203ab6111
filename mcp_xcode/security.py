#!/usr/bin/env python3
"""Allowed-folder access policy for project paths"""

import os
import sys
from typing import Optional, List, Set

from mcp_xcode.exceptions import AccessDeniedError, InvalidParameterError

ALLOWED_FOLDERS: Set[str] = set()


def get_allowed_folders(command_line_folders: Optional[List[str]] = None) -> Set[str]:
    """
    Get the allowed folders from environment variable and command line.
    Validates that paths are absolute, exist, and are directories.

    Args:
        command_line_folders: List of folders provided via command line

    Returns:
        Set of validated folder paths
    """
    allowed_folders = set()
    folders_to_process = []

    folder_list_str = os.environ.get("XCODEMCP_ALLOWED_FOLDERS")
    if folder_list_str:
        print(f"Using allowed folders from environment: {folder_list_str}", file=sys.stderr)
        folders_to_process.extend(folder_list_str.split(":"))

    if command_line_folders:
        print(f"Adding {len(command_line_folders)} folder(s) from command line", file=sys.stderr)
        folders_to_process.extend(command_line_folders)

    if not folders_to_process:
        home = os.environ.get("HOME", "/")
        print(f"Warning: No allowed folders specified, using default: $HOME = {home}", file=sys.stderr)
        folders_to_process = [home]

    for folder in folders_to_process:
        folder = folder.rstrip("/")
        if not folder:
            continue
        if not os.path.isabs(folder):
            print(f"Warning: Skipping non-absolute path: {folder}", file=sys.stderr)
            continue
        if ".." in folder:
            print(f"Warning: Skipping path with '..' components: {folder}", file=sys.stderr)
            continue
        if not os.path.isdir(folder):
            print(f"Warning: Skipping missing or non-directory path: {folder}", file=sys.stderr)
            continue
        allowed_folders.add(folder)

    return allowed_folders


def set_allowed_folders(folders: Set[str]):
    global ALLOWED_FOLDERS
    ALLOWED_FOLDERS = set(folders)


def is_path_allowed(project_path: str) -> bool:
    """
    Check if a path is inside one of the allowed folders.
    Path must be a subfolder or direct match of an allowed folder.
    """
    if not project_path or not ALLOWED_FOLDERS:
        return False

    project_path = os.path.abspath(project_path).rstrip("/")
    for allowed_folder in ALLOWED_FOLDERS:
        if project_path == allowed_folder or project_path.startswith(allowed_folder + "/"):
            return True
    return False


def validate_and_normalize_project_path(project_path: str) -> str:
    """
    Validate and normalize a project path for xcodebuild operations.

    Args:
        project_path: The project path to validate

    Returns:
        Normalized project path

    Raises:
        InvalidParameterError: If validation fails
        AccessDeniedError: If path access is denied
    """
    if project_path is None or not isinstance(project_path, str) or project_path.strip() == "":
        raise InvalidParameterError("Project path is required")

    project_path = project_path.strip().rstrip("/")

    if not (project_path.endswith('.xcodeproj') or project_path.endswith('.xcworkspace')):
        raise InvalidParameterError("Project path must be an .xcodeproj or .xcworkspace")

    if not is_path_allowed(project_path):
        raise AccessDeniedError(
            f"Access to path '{project_path}' is not allowed. Set XCODEMCP_ALLOWED_FOLDERS environment variable."
        )

    if not os.path.exists(project_path):
        raise InvalidParameterError(f"Project path does not exist: {project_path}")

    return os.path.realpath(project_path)
