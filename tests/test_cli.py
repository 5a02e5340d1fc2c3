"""Tests for CLI interface."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from scorecard.cli import _get_score_color, app
from scorecard.models.model_score import (
    Breakdown,
    CodeQualityScore,
    DocumentationScore,
    Grade,
    MaintenanceScore,
    ScoreResult,
    SecurityScore,
)

runner = CliRunner()


@pytest.fixture
def passing_result(perfect_breakdown: Breakdown) -> ScoreResult:
    """Create a grade A scorecard."""
    return ScoreResult(
        skill="weather",
        path="/skills/weather",
        scan_duration_ms=42,
        overall_score=100,
        grade=Grade.A,
        breakdown=perfect_breakdown,
    )


@pytest.fixture
def failing_result() -> ScoreResult:
    """Create a grade F scorecard with recommendations."""
    return ScoreResult(
        skill="shady",
        path="/skills/shady",
        overall_score=20,
        grade=Grade.F,
        breakdown=Breakdown(
            security=SecurityScore(score=10),
            documentation=DocumentationScore(score=0),
            code_quality=CodeQualityScore(score=10),
            maintenance=MaintenanceScore.fallback("git exploded"),
        ),
        recommendations=(
            "⚠️ CRITICAL: Skill flagged as malicious by the reputation service - DO NOT USE",
            "Add SKILL.md file with usage documentation",
        ),
    )


def _mock_engine(result: ScoreResult) -> MagicMock:
    engine_cls = MagicMock()
    engine_cls.return_value.score = AsyncMock(return_value=result)
    return engine_cls


class TestCLI:
    """Tests for the score command."""

    def test_help(self) -> None:
        """Test help output lists options and the scoring summary."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--json" in result.output
        assert "--name" in result.output
        assert "Scoring:" in result.output

    def test_no_args_shows_help(self) -> None:
        """Test running without a path prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_text_output(self, make_skill: Callable[..., Path], passing_result: ScoreResult) -> None:
        """Test the human-readable report."""
        with patch("scorecard.cli.ScoringEngine", _mock_engine(passing_result)):
            result = runner.invoke(app, [str(make_skill())])

        assert result.exit_code == 0
        assert "SKILL SCORECARD: weather" in result.output
        assert "Overall Score: 100/100" in result.output
        assert "Grade: A" in result.output
        assert "Code Quality" in result.output

    def test_json_output(self, make_skill: Callable[..., Path], passing_result: ScoreResult) -> None:
        """Test --json prints a parseable camelCase document."""
        with patch("scorecard.cli.ScoringEngine", _mock_engine(passing_result)):
            result = runner.invoke(app, [str(make_skill()), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["skill"] == "weather"
        assert data["overallScore"] == 100
        assert data["grade"] == "A"
        assert data["breakdown"]["codeQuality"]["max"] == 20

    def test_failing_grade_exit_code(
        self, make_skill: Callable[..., Path], failing_result: ScoreResult
    ) -> None:
        """Test grade F exits 1 and shows recommendations and analyzer errors."""
        with patch("scorecard.cli.ScoringEngine", _mock_engine(failing_result)):
            result = runner.invoke(app, [str(make_skill())])

        assert result.exit_code == 1
        assert "Recommendations:" in result.output
        assert "CRITICAL" in result.output
        assert "• Add SKILL.md file with usage documentation" in result.output
        assert "git exploded" in result.output

    def test_name_and_options_passed_through(
        self, make_skill: Callable[..., Path], passing_result: ScoreResult
    ) -> None:
        """Test --name and config options reach the engine."""
        engine_cls = _mock_engine(passing_result)
        skill_dir = make_skill()

        with patch("scorecard.cli.ScoringEngine", engine_cls):
            result = runner.invoke(
                app,
                [
                    str(skill_dir),
                    "--name",
                    "weather-pro",
                    "--scanner-path",
                    "/opt/skill-scanner",
                    "--reputation-endpoint",
                    "http://rep.local/skill",
                ],
            )

        assert result.exit_code == 0
        config = engine_cls.call_args.args[0]
        assert config.scanner_path == "/opt/skill-scanner"
        assert config.reputation_endpoint == "http://rep.local/skill/"
        engine_cls.return_value.score.assert_awaited_once_with(skill_dir, "weather-pro")

    def test_invalid_path(self, tmp_path: Path) -> None:
        """Test a missing directory is an error with exit code 1."""
        result = runner.invoke(app, [str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "does not exist" in result.output


class TestScoreColor:
    """Tests for score color thresholds."""

    def test_colors(self) -> None:
        assert _get_score_color(40, 40) == "green"
        assert _get_score_color(16, 20) == "green"
        assert _get_score_color(12, 20) == "yellow"
        assert _get_score_color(5, 20) == "red"
        assert _get_score_color(0, 0) == "red"
