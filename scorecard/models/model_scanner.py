"""Data models for the external scanner and reputation lookups."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from scorecard.models.model_score import ReputationStatus, SeverityCounts


class ScanErrorType(Enum):
    """Why a scanner run did not produce findings."""

    # Scanner could not be run at all
    NOT_INSTALLED = "not_installed"
    TIMEOUT = "timeout"
    NONZERO_EXIT = "nonzero_exit"
    OUTPUT_TOO_LARGE = "output_too_large"

    # Scanner ran but its output was unusable
    PARSE_ERROR = "parse_error"


@dataclass
class ScanResult:
    """Result of a single scanner run."""

    success: bool
    issues: SeverityCounts | None
    scan_date: datetime
    error: str | None
    scan_duration_seconds: float
    target_path: str
    error_type: ScanErrorType | None = None
    findings: list[dict[str, Any]] = field(default_factory=list)

    @property
    def scanner_available(self) -> bool:
        """The scanner executed and exited cleanly, even if its output was garbled."""
        return self.success or self.error_type == ScanErrorType.PARSE_ERROR


@dataclass
class ReputationResult:
    """Result of a single reputation lookup."""

    status: ReputationStatus
    score: int
    error: str | None = None
