"""Skill scanner CLI wrapper for static security analysis of a skill directory."""

import asyncio
import contextlib
import json
import logging
import os
import shutil
import signal
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from scorecard.consts import (
    SCANNER_DEFAULT_PATH,
    SCANNER_DEFAULT_TIMEOUT,
    SCANNER_KILL_GRACE_SECONDS,
    SCANNER_MAX_OUTPUT_BYTES,
    SCANNER_READ_CHUNK_BYTES,
    SCANNER_STDERR_KEEP_BYTES,
)
from scorecard.models.model_scanner import ScanErrorType, ScanResult
from scorecard.models.model_score import SeverityCounts

logger = logging.getLogger(__name__)

SEVERITIES = ("critical", "high", "medium", "low")


class ScannerOutputError(ValueError):
    """Scanner output was not the JSON document we expect."""


class ScannerOutputTooLargeError(Exception):
    """Scanner wrote more to stdout than we accept."""


async def _read_capped(stream: asyncio.StreamReader, limit: int) -> bytes:
    """Read a stream to EOF, raising as soon as more than ``limit`` bytes arrive."""
    chunks: list[bytes] = []
    size = 0
    while chunk := await stream.read(SCANNER_READ_CHUNK_BYTES):
        size += len(chunk)
        if size > limit:
            raise ScannerOutputTooLargeError(f"more than {limit} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def _read_head(stream: asyncio.StreamReader, keep: int) -> bytes:
    """Read a stream to EOF, keeping only the first ``keep`` bytes."""
    head = bytearray()
    while chunk := await stream.read(SCANNER_READ_CHUNK_BYTES):
        if len(head) < keep:
            head.extend(chunk[: keep - len(head)])
    return bytes(head)


class SkillScanner:
    """Wraps the skill scanner CLI for scanning a local directory.

    The scanner runs in its own process group, so a timeout or an oversized
    output kills the scanner together with any children it spawned.
    """

    def __init__(
        self,
        scanner_path: str = SCANNER_DEFAULT_PATH,
        timeout: float = SCANNER_DEFAULT_TIMEOUT,
        max_output_bytes: int = SCANNER_MAX_OUTPUT_BYTES,
    ):
        """Initialize SkillScanner.

        Args:
            scanner_path: Path to scanner executable (default: "skill-scanner")
            timeout: Scan timeout in seconds
            max_output_bytes: Largest stdout accepted from the scanner
        """
        self.scanner_path = scanner_path
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes

    def is_installed(self) -> bool:
        """Check if the scanner is installed and accessible."""
        return shutil.which(self.scanner_path) is not None

    def _build_command(self, target_path: Path | str) -> list[str]:
        return [self.scanner_path, "scan", str(target_path), "--format", "json"]

    def _failure(
        self,
        target_path: Path | str,
        error: str,
        error_type: ScanErrorType,
        start_time: float,
    ) -> ScanResult:
        return ScanResult(
            success=False,
            issues=None,
            scan_date=datetime.now(UTC),
            error=error,
            scan_duration_seconds=time.monotonic() - start_time,
            target_path=str(target_path),
            error_type=error_type,
        )

    async def _collect_output(self, process: asyncio.subprocess.Process) -> tuple[bytes, bytes]:
        """Read stdout (capped) and stderr (head only), then wait for exit.

        Raises:
            ScannerOutputTooLargeError: If stdout exceeds max_output_bytes
        """
        stderr_task = asyncio.ensure_future(_read_head(process.stderr, SCANNER_STDERR_KEEP_BYTES))
        try:
            stdout = await _read_capped(process.stdout, self.max_output_bytes)
            stderr = await stderr_task
        finally:
            if not stderr_task.done():
                stderr_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await stderr_task
        await process.wait()
        return stdout, stderr

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        """Kill the scanner's process group and reap it.

        Pipes are drained after the kill so their transports see EOF; the
        whole cleanup is bounded by SCANNER_KILL_GRACE_SECONDS.
        """
        try:
            if hasattr(os, "killpg"):
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass

        async def drain_and_wait() -> None:
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    while await stream.read(SCANNER_READ_CHUNK_BYTES):
                        pass
            await process.wait()

        try:
            await asyncio.wait_for(drain_and_wait(), timeout=SCANNER_KILL_GRACE_SECONDS)
        except TimeoutError:
            logger.warning(f"Scanner process {process.pid} did not exit after kill")

    async def scan_path(self, target_path: Path | str) -> ScanResult:
        """Scan a skill directory.

        Never raises for an unavailable or misbehaving scanner: every failure
        comes back as an unsuccessful ScanResult with an error_type.

        Args:
            target_path: Directory to scan

        Returns:
            ScanResult with severity counts on success
        """
        start_time = time.monotonic()
        cmd = self._build_command(target_path)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except FileNotFoundError:
            logger.debug(f"Scanner not found: {self.scanner_path}")
            return self._failure(
                target_path,
                f"Scanner executable not found: {self.scanner_path}",
                ScanErrorType.NOT_INSTALLED,
                start_time,
            )
        except OSError as e:
            logger.debug(f"Scanner could not be started: {e}")
            return self._failure(
                target_path,
                f"Scanner could not be started: {str(e)[:1000]}",
                ScanErrorType.NOT_INSTALLED,
                start_time,
            )

        try:
            stdout, stderr = await asyncio.wait_for(
                self._collect_output(process), timeout=self.timeout
            )
        except TimeoutError:
            await self._kill(process)
            return self._failure(
                target_path,
                f"Scan timeout ({self.timeout}s)",
                ScanErrorType.TIMEOUT,
                start_time,
            )
        except ScannerOutputTooLargeError:
            await self._kill(process)
            return self._failure(
                target_path,
                f"Scanner output exceeded {self.max_output_bytes} bytes",
                ScanErrorType.OUTPUT_TOO_LARGE,
                start_time,
            )

        if process.returncode != 0:
            error_msg = stderr.decode("utf-8", errors="replace")
            logger.debug(f"Scanner exited with code {process.returncode}: {error_msg}")
            return self._failure(
                target_path,
                f"Scanner error (code {process.returncode}): {error_msg[:1000]}",
                ScanErrorType.NONZERO_EXIT,
                start_time,
            )

        output = stdout.decode("utf-8", errors="replace")
        try:
            issues, findings = self._parse_scanner_output(output)
        except ScannerOutputError as e:
            logger.warning(f"Failed to parse scanner output for {target_path}: {e}")
            return self._failure(
                target_path,
                "Scanner output parsing failed",
                ScanErrorType.PARSE_ERROR,
                start_time,
            )

        return ScanResult(
            success=True,
            issues=issues,
            scan_date=datetime.now(UTC),
            error=None,
            scan_duration_seconds=time.monotonic() - start_time,
            target_path=str(target_path),
            findings=findings,
        )

    def _parse_scanner_output(
        self, json_output: str
    ) -> tuple[SeverityCounts, list[dict[str, Any]]]:
        """Parse scanner JSON output into severity counts.

        Expected structure: {"findings": [{"severity": "HIGH", ...}, ...]}.
        Severity is matched case-insensitively; unrecognized values are ignored,
        a missing severity counts as low.

        Args:
            json_output: JSON output from the scanner

        Returns:
            Severity counts and the raw findings list

        Raises:
            ScannerOutputError: If the output is not a JSON object
        """
        try:
            data = json.loads(json_output)
        except json.JSONDecodeError as e:
            raise ScannerOutputError(str(e)) from e

        if not isinstance(data, dict):
            raise ScannerOutputError(f"expected a JSON object, got {type(data).__name__}")

        counts = dict.fromkeys(SEVERITIES, 0)
        findings = data.get("findings")
        if not isinstance(findings, list):
            return SeverityCounts(), []

        findings = [finding for finding in findings if isinstance(finding, dict)]
        for finding in findings:
            severity = str(finding.get("severity") or "low").lower()
            if severity in counts:
                counts[severity] += 1

        return SeverityCounts(**counts), findings


async def main():
    """Example usage of SkillScanner."""
    import sys

    scanner = SkillScanner()

    if not scanner.is_installed():
        print(f"Error: {scanner.scanner_path} is not installed")
        return

    target = sys.argv[1] if len(sys.argv) > 1 else "."
    print(f"Scanning {target}...")

    result = await scanner.scan_path(target)

    print("\nScan result:")
    print(f"  Success: {result.success}")
    print(f"  Duration: {result.scan_duration_seconds:.2f}s")

    if result.success and result.issues:
        print("  Findings:")
        print(f"    Critical: {result.issues.critical}")
        print(f"    High: {result.issues.high}")
        print(f"    Medium: {result.issues.medium}")
        print(f"    Low: {result.issues.low}")
    elif result.error:
        print(f"  Error: {result.error}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
