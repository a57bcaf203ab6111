import datetime
import json
import os

import pytest

from mcp_xcode import __main__ as cli
from mcp_xcode import config, security, server
from mcp_xcode.adapters.executor import CommandExecutor, TIMEOUT_EXIT_CODE
from mcp_xcode.utils.logs import LogManager


class TestLogManager:
    def test_save_log_with_metadata(self, log_manager):
        path = log_manager.save_log("build", "line 1\nline 2", "My App", {"scheme": "MyApp", "exitCode": 0})
        assert os.path.dirname(path).endswith(datetime.date.today().isoformat())
        assert os.path.basename(path).endswith("-build-My_App.log")
        with open(path, encoding="utf-8") as f:
            text = f.read()
        assert text.startswith("=== Log Metadata ===\n")
        assert '"scheme": "MyApp"' in text
        assert text.endswith("=== End Metadata ===\n\nline 1\nline 2")

    def test_latest_link_points_at_newest_log(self, log_manager):
        log_manager.save_log("test", "first", "A")
        newest = log_manager.save_log("test", "second", "B")
        link = os.path.join(log_manager.log_dir, "latest-test.log")
        assert os.path.realpath(link) == os.path.realpath(newest)

    def test_save_debug_data(self, log_manager):
        path = log_manager.save_debug_data("install-app-success", {"app": "MyApp.app"}, "MyApp.app")
        assert path.endswith("-install-app-success-MyApp.app-debug.json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f) == {"app": "MyApp.app"}

    def test_unwritable_log_dir(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert LogManager(str(blocker)).save_log("build", "output") is None

    def test_cleanup_old_logs(self, log_manager):
        log_manager.save_log("build", "today")
        old = os.path.join(log_manager.log_dir, (datetime.date.today() - datetime.timedelta(days=8)).isoformat())
        recent = os.path.join(log_manager.log_dir, (datetime.date.today() - datetime.timedelta(days=2)).isoformat())
        unrelated = os.path.join(log_manager.log_dir, "notes")
        for folder in (old, recent, unrelated):
            os.makedirs(folder)

        log_manager.cleanup_old_logs()

        assert not os.path.exists(old)
        assert os.path.isdir(recent)
        assert os.path.isdir(unrelated)
        assert os.path.isdir(os.path.join(log_manager.log_dir, datetime.date.today().isoformat()))

    def test_cleanup_without_log_dir(self, tmp_path):
        LogManager(str(tmp_path / "missing")).cleanup_old_logs()


class TestCommandExecutor:
    def test_captures_output_and_exit_code(self):
        result = CommandExecutor().execute("echo out; echo err >&2; exit 3")
        assert result.stdout == "out\n"
        assert result.stderr == "err\n"
        assert result.exit_code == 3
        assert not result.ok

    def test_pipefail_keeps_first_exit_code(self):
        assert CommandExecutor().execute("set -o pipefail && false | cat").exit_code == 1

    def test_timeout(self):
        result = CommandExecutor().execute("sleep 5", timeout=1)
        assert result.exit_code == TIMEOUT_EXIT_CODE
        assert "timed out after 1s" in result.stderr

    def test_output_keeps_tail_when_truncated(self):
        result = CommandExecutor().execute("printf 'abcdefghij'", max_output_bytes=4)
        assert result.stdout == "ghij"

    def test_truncation_limit_counts_bytes(self):
        # "aé€" is 6 bytes; the last 4 split "é" and keep "€"
        result = CommandExecutor().execute("printf 'aé€'", max_output_bytes=4)
        assert result.stdout == "€"

    def test_multibyte_output_within_limit_is_untouched(self):
        result = CommandExecutor().execute("printf 'aé€'", max_output_bytes=6)
        assert result.stdout == "aé€"

    def test_missing_shell(self):
        result = CommandExecutor(shell="/nonexistent/shell").execute("true")
        assert result.exit_code == 127


class TestConfig:
    def test_forced_setting_wins(self, monkeypatch):
        monkeypatch.setattr(config, "BUILD_WARNINGS_ENABLED", True)
        monkeypatch.setattr(config, "BUILD_WARNINGS_FORCED", None)
        assert config.should_include_warnings() is True
        assert config.should_include_warnings(False) is False

        config.set_build_warnings_enabled(False, forced=True)
        assert config.should_include_warnings(True) is False

    def test_timeout_must_be_positive(self, monkeypatch):
        monkeypatch.setattr(config, "COMMAND_TIMEOUT", 600)
        with pytest.raises(ValueError):
            config.set_command_timeout(0)
        config.set_command_timeout(30)
        assert config.COMMAND_TIMEOUT == 30


class TestAllowedFolders:
    def test_env_and_command_line(self, tmp_path, monkeypatch):
        first, second = tmp_path / "a", tmp_path / "b"
        first.mkdir()
        second.mkdir()
        monkeypatch.setenv("XCODEMCP_ALLOWED_FOLDERS", f"{first}:relative/path:{tmp_path}/../x")
        folders = security.get_allowed_folders([str(second) + "/", str(tmp_path / "missing")])
        assert folders == {str(first), str(second)}

    def test_default_is_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("XCODEMCP_ALLOWED_FOLDERS", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert security.get_allowed_folders() == {str(tmp_path)}

    def test_path_must_be_inside_allowed_folder(self, monkeypatch):
        monkeypatch.setattr(security, "ALLOWED_FOLDERS", {"/Users/dev/projects"})
        assert security.is_path_allowed("/Users/dev/projects/App/App.xcodeproj")
        assert not security.is_path_allowed("/Users/dev/projects-old/App.xcodeproj")


class TestMain:
    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        for name in ("LOG_LEVEL", "COMMAND_TIMEOUT", "BUILD_WARNINGS_ENABLED", "BUILD_WARNINGS_FORCED"):
            monkeypatch.setattr(config, name, getattr(config, name))
        monkeypatch.setattr(config, "LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setattr(security, "ALLOWED_FOLDERS", set())
        monkeypatch.delenv("XCODEMCP_ALLOWED_FOLDERS", raising=False)
        runs = []
        monkeypatch.setattr(server.mcp, "run", lambda: runs.append(True))
        return runs

    def test_starts_server(self, tmp_path, isolated):
        cli.main(["--allowed", str(tmp_path), "--timeout", "120", "--always-include-build-warnings"])
        assert isolated == [True]
        assert security.ALLOWED_FOLDERS == {str(tmp_path)}
        assert config.COMMAND_TIMEOUT == 120
        assert config.BUILD_WARNINGS_FORCED is True

    def test_exits_without_valid_folders(self, tmp_path, monkeypatch, capsys, isolated):
        monkeypatch.setenv("HOME", str(tmp_path / "missing-home"))
        with pytest.raises(SystemExit) as exc:
            cli.main(["--allowed", "relative/path"])
        assert exc.value.code == 1
        assert "No valid allowed folders" in capsys.readouterr().err
        assert isolated == []

    def test_rejects_non_positive_timeout(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.main(["--allowed", str(tmp_path), "--timeout", "0"])

    def test_warning_flags_are_exclusive(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--no-build-warnings", "--always-include-build-warnings"])
