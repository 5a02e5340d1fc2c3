"""Scoring engine orchestrating all analyzers into one scorecard."""

import asyncio
import logging
import os
import time
from datetime import UTC, datetime
from pathlib import Path

from scorecard.analyzers.base import BaseAnalyzer
from scorecard.analyzers.code_quality import CodeQualityAnalyzer
from scorecard.analyzers.documentation import DocumentationAnalyzer
from scorecard.analyzers.maintenance import MaintenanceAnalyzer
from scorecard.analyzers.security import SecurityAnalyzer
from scorecard.models.model_config import ScorecardConfig
from scorecard.models.model_score import (
    Breakdown,
    Category,
    ScoreComponent,
    ScoreResult,
    SkillTarget,
)
from scorecard.reputation.client import ReputationClient
from scorecard.scanner.skill_scanner import SkillScanner
from scorecard.scoring.grading import calculate_grade
from scorecard.scoring.isolation import IsolatedAnalyzer, isolate
from scorecard.scoring.recommendations import generate_recommendations

logger = logging.getLogger(__name__)


class TargetResolutionError(ValueError):
    """The skill path does not resolve to a readable directory."""


def resolve_target_path(target: Path | str) -> Path:
    """Resolve a skill path, raising TargetResolutionError if it is unusable."""
    path = Path(target).expanduser().resolve()
    if not path.exists():
        raise TargetResolutionError(f"Path does not exist: {path}")
    if not path.is_dir():
        raise TargetResolutionError(f"Path is not a directory: {path}")
    if not os.access(path, os.R_OK | os.X_OK):
        raise TargetResolutionError(f"Directory is not readable: {path}")
    return path


def build_default_analyzers(config: ScorecardConfig) -> dict[Category, BaseAnalyzer]:
    """Create the four standard analyzers wired to the given configuration."""
    reputation_client = ReputationClient(
        endpoint=config.reputation_endpoint,
        timeout=config.reputation_timeout,
    )
    scanner = SkillScanner(
        scanner_path=config.scanner_path,
        timeout=config.scanner_timeout,
        max_output_bytes=config.scanner_max_output_bytes,
    )
    return {
        Category.SECURITY: SecurityAnalyzer(reputation_client, scanner),
        Category.DOCUMENTATION: DocumentationAnalyzer(),
        Category.CODE_QUALITY: CodeQualityAnalyzer(),
        Category.MAINTENANCE: MaintenanceAnalyzer(git_timeout=config.git_timeout),
    }


class ScoringEngine:
    """Runs all analyzers concurrently and merges their results.

    The engine handles:
    - Resolving the skill path (the only failure that reaches the caller)
    - Running the four analyzers concurrently, each isolated from the others
    - Summing category scores and grading the total
    - Deriving recommendations from the merged breakdown
    """

    def __init__(
        self,
        config: ScorecardConfig | None = None,
        analyzers: dict[Category, BaseAnalyzer] | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            config: Endpoints and timeouts (defaults to ScorecardConfig())
            analyzers: Analyzer per category; missing categories use the defaults
        """
        self.config = config or ScorecardConfig()
        merged = build_default_analyzers(self.config)
        if analyzers:
            merged.update(analyzers)

        self.analyzers: dict[Category, IsolatedAnalyzer] = {
            category: isolate(merged[category], timeout=self.config.analyzer_timeout)
            for category in Category
        }

    async def score(self, target: Path | str, name: str | None = None) -> ScoreResult:
        """Score a skill directory.

        Args:
            target: Path to the skill directory
            name: Skill name override (defaults to the directory name)

        Returns:
            Immutable ScoreResult

        Raises:
            TargetResolutionError: If the path is not a readable directory
        """
        skill_path = resolve_target_path(target)
        skill = SkillTarget(name=name or skill_path.name, path=skill_path)

        scanned_at = datetime.now(UTC)
        start_time = time.monotonic()
        logger.info(f"Analyzing {skill.name}...")

        components: list[ScoreComponent] = await asyncio.gather(
            *(self.analyzers[category].analyze(skill) for category in Category)
        )
        results = dict(zip(Category, components, strict=True))

        breakdown = Breakdown(
            security=results[Category.SECURITY],
            documentation=results[Category.DOCUMENTATION],
            code_quality=results[Category.CODE_QUALITY],
            maintenance=results[Category.MAINTENANCE],
        )
        overall_score = breakdown.total
        elapsed_ms = int((time.monotonic() - start_time) * 1000)

        result = ScoreResult(
            skill=skill.name,
            path=str(skill_path),
            scanned_at=scanned_at,
            scan_duration_ms=elapsed_ms,
            overall_score=overall_score,
            grade=calculate_grade(overall_score),
            breakdown=breakdown,
            recommendations=tuple(generate_recommendations(breakdown)),
        )

        logger.info(
            f"Scored {skill.name}: {result.overall_score}/{result.max_score} "
            f"(grade {result.grade.value}) in {elapsed_ms}ms"
        )
        return result


async def score_skill(
    target: Path | str,
    name: str | None = None,
    config: ScorecardConfig | None = None,
) -> ScoreResult:
    """Score one skill with the default analyzers."""
    return await ScoringEngine(config).score(target, name)


async def main() -> None:
    """Score a skill directory and print the breakdown."""
    import sys

    target = sys.argv[1] if len(sys.argv) > 1 else "."
    result = await score_skill(target)

    print(f"Scorecard: {result.skill}")
    print("=" * 50)
    print(f"  Overall: {result.overall_score}/{result.max_score} (grade {result.grade.value})")
    for category, component in result.breakdown.items():
        print(f"  {category.value:<14} {component.score}/{component.max}")
    if result.recommendations:
        print("\nRecommendations:")
        for recommendation in result.recommendations:
            print(f"  - {recommendation}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
