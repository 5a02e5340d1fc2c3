"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from scorecard.models.model_score import (
    Breakdown,
    CodeQualityDetails,
    CodeQualityScore,
    CommentsCheck,
    DocFileCheck,
    DocumentationDetails,
    DocumentationScore,
    ErrorHandlingCheck,
    GitCheck,
    LastCommitCheck,
    MaintenanceDetails,
    MaintenanceScore,
    NamingCheck,
    ReputationCheck,
    ReputationStatus,
    ScannerCheck,
    SecurityDetails,
    SecurityScore,
    VersionCheck,
)

LONG_SKILL_MD = (
    "# Weather skill\n\n"
    "Fetches the current forecast for a city and summarizes it in plain language. "
    "The skill wraps a public weather API, caches responses for ten minutes and "
    "reports temperatures in the user's preferred unit system. It never stores "
    "location history and only issues read-only requests.\n\n"
    "## Examples\n\n"
    "Ask for the weather in Lisbon tomorrow morning, or compare two cities side "
    "by side. The skill answers with a short summary followed by the hourly "
    "breakdown when the user asks for details. Rain probability is rounded to the "
    "nearest ten percent to keep summaries readable.\n"
)


@pytest.fixture
def skill_md_text() -> str:
    """SKILL.md body longer than 500 characters with an examples section."""
    assert len(LONG_SKILL_MD) > 500
    return LONG_SKILL_MD


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed 'now' for recency checks."""
    return datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def make_skill(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a skill directory from a {relative_path: content} mapping."""

    def _make(files: dict[str, str] | None = None, name: str = "weather") -> Path:
        skill_dir = tmp_path / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        for relative_path, content in (files or {}).items():
            file_path = skill_dir / relative_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def perfect_breakdown(fixed_now: datetime) -> Breakdown:
    """A breakdown in which every recommendation rule is satisfied."""
    return Breakdown(
        security=SecurityScore(
            score=40,
            details=SecurityDetails(
                reputation=ReputationCheck(status=ReputationStatus.BENIGN, score=20),
                scanner=ScannerCheck(score=20, scanner_available=True),
            ),
        ),
        documentation=DocumentationScore(
            score=20,
            details=DocumentationDetails(
                skill_md=DocFileCheck(exists=True, length=800, sufficient=True),
                readme_md=DocFileCheck(exists=True, length=400, sufficient=True),
                examples=True,
                references=True,
            ),
        ),
        code_quality=CodeQualityScore(
            score=20,
            details=CodeQualityDetails(
                analyzed_files=2,
                total_files=3,
                error_handling=ErrorHandlingCheck(files_with_handling=2, ratio=100),
                comments=CommentsCheck(average_density=25.0),
                naming=NamingCheck(files_with_good_naming=2, ratio=100),
            ),
        ),
        maintenance=MaintenanceScore(
            score=20,
            details=MaintenanceDetails(
                git=GitCheck(exists=True),
                last_commit=LastCommitCheck(
                    exists=True,
                    date=fixed_now - timedelta(days=3),
                    days_ago=3,
                    is_recent=True,
                ),
                version=VersionCheck(exists=True, version="1.2.0", source="package.json"),
            ),
        ),
    )
