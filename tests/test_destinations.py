import pytest

from mcp_xcode.adapters.commands import make_build_command, make_test_command, make_clean_command
from mcp_xcode.adapters.destinations import (
    ArchitectureDetector,
    BuildDestinationMapper,
    MappedDestination,
)
from mcp_xcode.domain.enums import BuildDestination


@pytest.fixture
def mapper(executor):
    executor.on("sysctl -n hw.optional.arm64", stdout="1\n")
    return BuildDestinationMapper(ArchitectureDetector(executor))


class TestArchitectureDetector:
    def test_apple_silicon(self, executor):
        executor.on("sysctl", stdout="1\n")
        assert ArchitectureDetector(executor).current_architecture() == "arm64"

    def test_intel(self, executor):
        executor.on("sysctl", stdout="0\n")
        assert ArchitectureDetector(executor).current_architecture() == "x86_64"

    def test_falls_back_to_uname(self, executor):
        executor.on("sysctl", stderr="unknown oid", exit_code=1)
        executor.on("uname -m", stdout="arm64\n")
        detector = ArchitectureDetector(executor)
        assert detector.is_apple_silicon()
        assert executor.ran("uname -m")

    def test_cached(self, executor):
        executor.on("sysctl", stdout="1\n")
        detector = ArchitectureDetector(executor)
        detector.current_architecture()
        detector.current_architecture()
        assert len(executor.commands) == 1


class TestBuildDestinationMapper:
    def test_simulator_uses_host_architecture(self, mapper):
        mapped = mapper.map(BuildDestination.IOS_SIMULATOR)
        assert mapped.destination == "generic/platform=iOS Simulator"
        assert mapped.additional_settings == ["ARCHS=arm64", "ONLY_ACTIVE_ARCH=YES"]
        assert "Simulator" in mapped.describe()
        assert "arm64,x86_64" not in mapped.describe()

    def test_universal_simulator_builds_all_architectures(self, mapper):
        mapped = mapper.map(BuildDestination.IOS_SIMULATOR_UNIVERSAL)
        assert mapped.destination == "generic/platform=iOS Simulator"
        assert "arm64,x86_64" in mapped.describe()
        assert "ONLY_ACTIVE_ARCH=NO" in mapped.additional_settings

    def test_device(self, mapper):
        mapped = mapper.map(BuildDestination.TVOS_DEVICE)
        assert mapped.destination == "generic/platform=tvOS"
        assert mapped.additional_settings == []

    def test_vision_os_uses_xros(self, mapper):
        assert mapper.map(BuildDestination.VISIONOS_SIMULATOR).destination == "generic/platform=xrOS Simulator"
        assert mapper.map(BuildDestination.VISIONOS_DEVICE).destination == "generic/platform=xrOS"

    def test_macos(self, mapper):
        assert mapper.map(BuildDestination.MACOS).destination == "platform=macOS"
        universal = mapper.map(BuildDestination.MACOS_UNIVERSAL)
        assert universal.destination == "platform=macOS"
        assert "arm64,x86_64" in universal.describe()

    def test_specific_simulator_by_uuid(self, mapper):
        mapped = mapper.map(BuildDestination.IOS_SIMULATOR, "a1b2c3d4-1111-2222-3333-444455556666")
        assert mapped.destination == "platform=iOS Simulator,id=a1b2c3d4-1111-2222-3333-444455556666"

    def test_specific_simulator_by_name(self, mapper):
        mapped = mapper.map(BuildDestination.WATCHOS_SIMULATOR, "Apple Watch Series 9 (45mm)")
        assert mapped.destination == "platform=watchOS Simulator,name=Apple Watch Series 9 (45mm)"

    def test_macos_ignores_device_id(self, mapper):
        assert mapper.map(BuildDestination.MACOS, "My Mac").destination == "platform=macOS"


class TestCommands:
    destination = MappedDestination("generic/platform=iOS Simulator", ["ARCHS=arm64", "ONLY_ACTIVE_ARCH=YES"], ["arm64"])

    def test_build_command(self):
        command = make_build_command("/p/MyApp.xcodeproj", False, "MyApp", "Debug", self.destination, "/dd")
        assert command == (
            'set -o pipefail && xcodebuild -project "/p/MyApp.xcodeproj" -scheme "MyApp" '
            "-configuration \"Debug\" -destination 'generic/platform=iOS Simulator' "
            'ARCHS=arm64 ONLY_ACTIVE_ARCH=YES -derivedDataPath "/dd" build 2>&1 | xcbeautify'
        )

    def test_workspace_flag(self):
        command = make_build_command("/p/MyApp.xcworkspace", True, "MyApp", "Release", self.destination)
        assert '-workspace "/p/MyApp.xcworkspace"' in command
        assert "-derivedDataPath" not in command

    def test_universal_settings_are_quoted(self):
        universal = MappedDestination("generic/platform=iOS Simulator", ["ONLY_ACTIVE_ARCH=NO", "ARCHS=arm64 x86_64"])
        command = make_build_command("/p/A.xcodeproj", False, "A", "Debug", universal)
        assert '"ARCHS=arm64 x86_64"' in command

    def test_test_command(self):
        command = make_test_command("/p/A.xcodeproj", False, None, "Debug", self.destination,
                                    "/dd/Logs/Test/run.xcresult", test_target="ATests",
                                    test_filter="ATests/LoginTests/testLogin")
        assert "-scheme" not in command
        assert "-only-testing:ATests -only-testing:ATests/LoginTests/testLogin" in command
        assert "-parallel-testing-enabled NO" in command
        assert command.endswith('-resultBundlePath "/dd/Logs/Test/run.xcresult" test 2>&1 | xcbeautify')

    def test_clean_command(self):
        assert make_clean_command("/p/A.xcodeproj", False, "A", "Debug") == \
            'xcodebuild -project "/p/A.xcodeproj" -scheme "A" -configuration "Debug" clean'
