#!/usr/bin/env python3
"""Logging setup and persisted build/test logs"""

import datetime
import json
import logging
import os
import re
import shutil
import sys
from typing import Optional, Dict, Any

from mcp_xcode import config

MAX_AGE_DAYS = 7


def setup_logging(level: Optional[str] = None):
    """Send log records to stderr; stdout carries the MCP stdio transport"""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )
    return logging.getLogger("mcp_xcode")


logger = logging.getLogger(__name__)


def _safe_name(name: str) -> str:
    return re.sub(r"[^\w.\-]+", "_", name)


class LogManager:
    """
    Stores full command logs and debug snapshots under <log dir>/<YYYY-MM-DD>/.
    """

    def __init__(self, log_dir: Optional[str] = None):
        self.log_dir = log_dir or config.LOG_DIR

    def _today_dir(self) -> str:
        path = os.path.join(self.log_dir, datetime.date.today().isoformat())
        os.makedirs(path, exist_ok=True)
        return path

    def _filename(self, operation: str, project_name: Optional[str], suffix: str) -> str:
        timestamp = datetime.datetime.now().strftime("%H-%M-%S")
        name = f"{operation}-{_safe_name(project_name)}" if project_name else operation
        return f"{timestamp}-{name}{suffix}"

    def save_log(self, operation: str, content: str,
                 project_name: Optional[str] = None,
                 metadata: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Save full command output.

        Args:
            operation: build, test or clean
            content: Complete output
            project_name: Included in the file name
            metadata: Written as a JSON header

        Returns:
            Path of the written file, or None if it could not be written
        """
        text = ""
        if metadata:
            text += "=== Log Metadata ===\n"
            text += json.dumps(metadata, indent=2, default=str) + "\n"
            text += "=== End Metadata ===\n\n"
        text += content

        try:
            path = os.path.join(self._today_dir(), self._filename(operation, project_name, ".log"))
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.error("Failed to save %s log: %s", operation, e)
            return None

        self._link_latest(operation, path)
        return path

    def _link_latest(self, operation: str, path: str):
        link = os.path.join(self.log_dir, f"latest-{operation}.log")
        try:
            if os.path.lexists(link):
                os.unlink(link)
            os.symlink(os.path.relpath(path, self.log_dir), link)
        except OSError as e:
            logger.debug("Could not update %s: %s", link, e)

    def save_debug_data(self, event: str, data: Dict[str, Any],
                        project_name: Optional[str] = None) -> Optional[str]:
        """Write a structured snapshot for an event, e.g. install-app-success"""
        logger.debug("%s: %s", event, data)
        try:
            path = os.path.join(self._today_dir(), self._filename(event, project_name, "-debug.json"))
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as e:
            logger.error("Failed to save debug data for %s: %s", event, e)
            return None
        return path

    def cleanup_old_logs(self, max_age_days: int = MAX_AGE_DAYS):
        """Delete dated log folders older than max_age_days"""
        if not os.path.isdir(self.log_dir):
            return
        cutoff = datetime.date.today() - datetime.timedelta(days=max_age_days)
        for entry in os.listdir(self.log_dir):
            full_path = os.path.join(self.log_dir, entry)
            if os.path.islink(full_path) or not os.path.isdir(full_path):
                continue
            try:
                day = datetime.date.fromisoformat(entry)
            except ValueError:
                continue
            if day < cutoff:
                shutil.rmtree(full_path, ignore_errors=True)
                logger.info("Removed old logs: %s", full_path)
