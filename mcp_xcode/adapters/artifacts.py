#!/usr/bin/env python3
"""Locate build products in derived data"""

import logging
import os
from typing import Optional

from mcp_xcode.adapters.executor import CommandExecutor

logger = logging.getLogger(__name__)


class AppLocator:
    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def find_app(self, derived_data_path: str) -> Optional[str]:
        """Return the first .app bundle under derived_data_path, or None"""
        result = self.executor.execute(f'find "{derived_data_path}" -name "*.app" -type d | head -1', timeout=5)
        app_path = result.stdout.strip()
        if not app_path:
            logger.warning("No app found in %s", derived_data_path)
            return None
        if not os.path.exists(app_path):
            logger.error("App path does not exist: %s", app_path)
            return None
        logger.info("Found app at %s", app_path)
        return app_path
