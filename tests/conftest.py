import json
import os
from collections import deque

import pytest

from mcp_xcode import factories, security
from mcp_xcode.adapters.executor import ExecutionResult
from mcp_xcode.utils.logs import LogManager

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")

IPHONE_15_PRO = "A1B2C3D4-1111-2222-3333-444455556666"
IPHONE_15_17 = "B1B2C3D4-1111-2222-3333-444455556666"
IPAD_AIR = "C1B2C3D4-1111-2222-3333-444455556666"
IPHONE_15_16 = "D1B2C3D4-1111-2222-3333-444455556666"
UNAVAILABLE_IPHONE_8 = "E1B2C3D4-1111-2222-3333-444455556666"
APPLE_TV = "F1B2C3D4-1111-2222-3333-444455556666"
VISION_PRO = "01B2C3D4-1111-2222-3333-444455556666"


class FakeExecutor:
    """Records commands and answers them from scripted responses.

    Responses are matched by substring, first registration wins. When several
    results are registered for one pattern they are returned in order and the
    last one repeats.
    """

    def __init__(self):
        self.commands = []
        self.responses = []

    def on(self, pattern, stdout="", stderr="", exit_code=0):
        for registered, results in self.responses:
            if registered == pattern:
                results.append(ExecutionResult(stdout, stderr, exit_code))
                return self
        self.responses.append((pattern, deque([ExecutionResult(stdout, stderr, exit_code)])))
        return self

    def execute(self, command, timeout=None, max_output_bytes=None):
        self.commands.append(command)
        for pattern, results in self.responses:
            if pattern in command:
                return results.popleft() if len(results) > 1 else results[0]
        return ExecutionResult("", "", 0)

    def ran(self, pattern):
        return [command for command in self.commands if pattern in command]


def load_fixture(name):
    with open(os.path.join(FIXTURES, name), encoding="utf-8") as f:
        return f.read()


def inventory(*devices, runtime="com.apple.CoreSimulator.SimRuntime.iOS-17-2"):
    """simctl JSON for (udid, name, state) tuples in a single runtime"""
    return json.dumps({"devices": {runtime: [
        {"udid": udid, "name": name, "state": state, "isAvailable": True}
        for udid, name, state in devices
    ]}})


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def devices_json():
    return load_fixture("devices.json")


@pytest.fixture
def log_manager(tmp_path):
    return LogManager(str(tmp_path / "logs"))


@pytest.fixture
def allowed_dir(tmp_path, monkeypatch):
    root = tmp_path / "projects"
    root.mkdir()
    monkeypatch.setattr(security, "ALLOWED_FOLDERS", {str(root), os.path.realpath(str(root))})
    return root


@pytest.fixture
def project(allowed_dir):
    path = allowed_dir / "MyApp.xcodeproj"
    path.mkdir()
    return str(path)


@pytest.fixture
def workspace(allowed_dir):
    path = allowed_dir / "MyApp.xcworkspace"
    path.mkdir()
    return str(path)


@pytest.fixture
def wired(executor, log_manager, monkeypatch):
    """Route every factory-built collaborator through the fake executor"""
    monkeypatch.setattr(factories, "get_executor", lambda: executor)
    monkeypatch.setattr(factories, "get_log_manager", lambda: log_manager)
    return executor
