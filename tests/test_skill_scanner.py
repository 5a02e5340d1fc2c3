"""Tests for the SkillScanner CLI wrapper."""

import json
import sys
import time
from collections.abc import Callable
from pathlib import Path

import pytest

from scorecard.models.model_scanner import ScanErrorType
from scorecard.scanner.skill_scanner import ScannerOutputError, SkillScanner


class TestParseScannerOutput:
    """Tests for scanner JSON parsing."""

    @pytest.fixture
    def mock_scanner_output(self) -> str:
        """Sample scanner JSON output."""
        return json.dumps(
            {
                "findings": [
                    {"severity": "CRITICAL", "rule": "shell-injection"},
                    {"severity": "high", "rule": "eval"},
                    {"severity": "High", "rule": "network-exfil"},
                    {"severity": "medium"},
                    {"severity": "LOW"},
                    {"rule": "no-severity"},
                    {"severity": "informational"},
                ]
            }
        )

    def test_parse_scanner_output(self, mock_scanner_output: str) -> None:
        """Test severities are counted case-insensitively."""
        issues, findings = SkillScanner()._parse_scanner_output(mock_scanner_output)

        assert issues.critical == 1
        assert issues.high == 2
        assert issues.medium == 1
        # missing severity counts as low, unknown severity is ignored
        assert issues.low == 2
        assert len(findings) == 7

    def test_parse_no_findings_key(self) -> None:
        """Test output without findings yields zero counts."""
        issues, findings = SkillScanner()._parse_scanner_output(json.dumps({"version": "1.0"}))

        assert issues.total == 0
        assert findings == []

    def test_parse_invalid_json(self) -> None:
        """Test invalid JSON raises ScannerOutputError."""
        with pytest.raises(ScannerOutputError):
            SkillScanner()._parse_scanner_output("not valid json")

    def test_parse_non_object(self) -> None:
        """Test a top-level JSON array is rejected."""
        with pytest.raises(ScannerOutputError):
            SkillScanner()._parse_scanner_output("[]")


posix_only = pytest.mark.skipif(sys.platform == "win32", reason="scanner scripts use /bin/sh")


@pytest.fixture
def make_scanner_script(tmp_path: Path) -> Callable[[str], str]:
    """Factory writing an executable shell script that stands in for the scanner."""

    def _make(body: str) -> str:
        script = tmp_path / "fake-skill-scanner"
        script.write_text("#!/bin/sh\n" + body + "\n")
        script.chmod(0o755)
        return str(script)

    return _make


class TestSkillScanner:
    """Tests for SkillScanner.scan_path."""

    def test_build_command(self) -> None:
        """Test the scanner is invoked with JSON output."""
        scanner = SkillScanner(scanner_path="/opt/bin/skill-scanner")
        assert scanner._build_command(Path("/skills/weather")) == [
            "/opt/bin/skill-scanner",
            "scan",
            "/skills/weather",
            "--format",
            "json",
        ]

    @pytest.mark.asyncio
    async def test_missing_executable(self, tmp_path: Path) -> None:
        """Test a missing scanner is reported as not installed."""
        scanner = SkillScanner(scanner_path=str(tmp_path / "does-not-exist"))

        result = await scanner.scan_path(tmp_path)

        assert not result.success
        assert result.error_type == ScanErrorType.NOT_INSTALLED
        assert not result.scanner_available
        assert result.issues is None

    def test_is_installed_false_for_missing(self, tmp_path: Path) -> None:
        """Test is_installed for a path that does not exist."""
        assert not SkillScanner(scanner_path=str(tmp_path / "does-not-exist")).is_installed()

    @posix_only
    @pytest.mark.asyncio
    async def test_successful_scan(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test a clean exit with JSON findings."""
        scanner_path = make_scanner_script(
            "cat <<'EOF'\n"
            '{"findings": [{"severity": "HIGH"}, {"severity": "low"}]}\n'
            "EOF"
        )

        result = await SkillScanner(scanner_path=scanner_path, timeout=30).scan_path(tmp_path)

        assert result.success
        assert result.issues is not None
        assert result.issues.high == 1
        assert result.issues.low == 1
        assert result.target_path == str(tmp_path)
        assert result.scanner_available

    @posix_only
    @pytest.mark.asyncio
    async def test_scanner_receives_target_and_format(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test the scanner is called with scan <path> --format json."""
        args_file = tmp_path / "args.txt"
        scanner_path = make_scanner_script(f'echo "$@" > "{args_file}"\necho "{{}}"')

        result = await SkillScanner(scanner_path=scanner_path, timeout=30).scan_path(tmp_path)

        assert result.success
        assert args_file.read_text().strip() == f"scan {tmp_path} --format json"

    @posix_only
    @pytest.mark.asyncio
    async def test_nonzero_exit(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test a non-zero exit code is a scanner failure."""
        scanner_path = make_scanner_script('echo "bad flag" >&2\nexit 2')

        result = await SkillScanner(scanner_path=scanner_path, timeout=30).scan_path(tmp_path)

        assert not result.success
        assert result.error_type == ScanErrorType.NONZERO_EXIT
        assert "code 2" in result.error
        assert "bad flag" in result.error

    @posix_only
    @pytest.mark.asyncio
    async def test_timeout_kills_scanner_and_children(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test a hanging scanner whose child holds the pipes is killed at the timeout."""
        scanner_path = make_scanner_script("sleep 30")

        started = time.monotonic()
        result = await SkillScanner(scanner_path=scanner_path, timeout=1).scan_path(tmp_path)
        elapsed = time.monotonic() - started

        assert not result.success
        assert result.error_type == ScanErrorType.TIMEOUT
        assert elapsed < 10

    @posix_only
    @pytest.mark.asyncio
    async def test_endless_output_stops_at_cap(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test a scanner that never stops writing is cut off at the byte cap."""
        scanner_path = make_scanner_script("yes AAAAAAAAAAAAAAAAAAAAAAAAAAAAAA")

        started = time.monotonic()
        result = await SkillScanner(
            scanner_path=scanner_path, timeout=30, max_output_bytes=1000
        ).scan_path(tmp_path)
        elapsed = time.monotonic() - started

        assert not result.success
        assert result.error_type == ScanErrorType.OUTPUT_TOO_LARGE
        assert not result.scanner_available
        assert elapsed < 10

    @posix_only
    @pytest.mark.asyncio
    async def test_large_finite_output_rejected(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test output just over the cap is rejected even when the scanner exits cleanly."""
        scanner_path = make_scanner_script("head -c 5000 /dev/zero")

        result = await SkillScanner(
            scanner_path=scanner_path, timeout=30, max_output_bytes=1000
        ).scan_path(tmp_path)

        assert result.error_type == ScanErrorType.OUTPUT_TOO_LARGE

    @posix_only
    @pytest.mark.asyncio
    async def test_unparseable_output(
        self, tmp_path: Path, make_scanner_script: Callable[[str], str]
    ) -> None:
        """Test garbled output is a parse error, with the scanner still available."""
        scanner_path = make_scanner_script('echo "Scanning... done"')

        result = await SkillScanner(scanner_path=scanner_path, timeout=30).scan_path(tmp_path)

        assert not result.success
        assert result.error_type == ScanErrorType.PARSE_ERROR
        assert result.error == "Scanner output parsing failed"
        assert result.scanner_available
