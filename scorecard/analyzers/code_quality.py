"""Code quality analyzer: secrets, error handling, comments and naming."""

import asyncio
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from scorecard.consts import (
    CODE_EXTENSIONS,
    COMMENT_DENSITY_MIN,
    COMMENT_PREFIXES,
    COMMENTS_POINTS,
    DOC_EXTENSIONS,
    ERROR_HANDLING_MIN_RATIO,
    ERROR_HANDLING_PATTERNS,
    ERROR_HANDLING_POINTS,
    NAMING_MIN_RATIO,
    NAMING_POINTS,
    NO_SECRETS_POINTS,
    SECRET_PATTERNS,
    SECRET_SAMPLE_LIMIT,
    SKIPPED_DIRECTORIES,
)
from scorecard.models.model_score import (
    Category,
    CodeQualityDetails,
    CodeQualityScore,
    CommentsCheck,
    ErrorHandlingCheck,
    NamingCheck,
    SecretsCheck,
    SkillTarget,
)

logger = logging.getLogger(__name__)

# Naming heuristics: JS-style declarations and Python definitions/assignments
JS_NAMED_DECLARATION = re.compile(r"(?:const|let|var|function)\s+[a-z][a-zA-Z0-9]*")
JS_SINGLE_LETTER = re.compile(r"(?:const|let|var)\s+[a-z]\s*=")
JS_DECLARATION = re.compile(r"(?:const|let|var)\s+")
PY_NAMED_DEFINITION = re.compile(r"^\s*(?:async\s+)?def\s+[a-z_][a-z0-9_]*\s*\(", re.MULTILINE)
PY_SINGLE_LETTER = re.compile(r"^\s*[a-z]\s*=(?!=)", re.MULTILINE)
PY_ASSIGNMENT = re.compile(r"^\s*[a-z_][a-zA-Z0-9_]*\s*=(?!=)", re.MULTILINE)


def collect_files(root: Path) -> list[Path]:
    """Recursively list files with recognized extensions.

    Dependency, build and VCS directories are pruned. Unreadable directories
    are skipped silently (os.walk ignores errors by default).
    """
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES)
        for filename in sorted(filenames):
            if Path(filename).suffix.lower() in CODE_EXTENSIONS:
                files.append(Path(dirpath) / filename)
    return files


def find_hardcoded_secrets(content: str) -> list[str]:
    findings: list[str] = []
    for pattern in SECRET_PATTERNS:
        findings.extend(match.group(0) for match in pattern.finditer(content))
    return findings


def mask_secret(secret: str) -> str:
    """Keep only a short prefix of a detected secret for reporting."""
    return secret[:6] + "..." if len(secret) > 6 else "***"


def has_error_handling(content: str) -> bool:
    return any(pattern.search(content) for pattern in ERROR_HANDLING_PATTERNS)


def calculate_comment_density(content: str) -> float:
    """Percentage of lines that are comments."""
    lines = content.split("\n")
    comment_lines = [line for line in lines if line.strip().startswith(COMMENT_PREFIXES)]
    return len(comment_lines) / len(lines) * 100 if lines else 0.0


def follows_naming_conventions(content: str, suffix: str) -> bool:
    """Descriptive names present and fewer than half of assignments single-letter."""
    if suffix == ".py":
        has_named = PY_NAMED_DEFINITION.search(content) or PY_ASSIGNMENT.search(content)
        single_letter = PY_SINGLE_LETTER.findall(content)
        total = PY_ASSIGNMENT.findall(content)
    else:
        has_named = JS_NAMED_DECLARATION.search(content)
        single_letter = JS_SINGLE_LETTER.findall(content)
        total = JS_DECLARATION.findall(content)

    single_letter_ratio = len(single_letter) / len(total) if total else 0.0
    return bool(has_named) and single_letter_ratio < 0.5


@dataclass
class _FileStats:
    analyzed: int = 0
    secrets: list[str] = field(default_factory=list)
    with_error_handling: int = 0
    comment_density_total: float = 0.0
    with_good_naming: int = 0


def _percent(count: int, total: int) -> float | None:
    return count / total * 100 if total else None


class CodeQualityAnalyzer:
    """Scores code quality out of 20.

    Algorithm:
        no hardcoded secrets:                 10
        >= 30% of files handle errors:         5
        average comment density >= 10%:        3
        >= 50% of files follow naming rules:   2

    Markdown files are walked and counted but not analyzed. With no
    analyzable files only the secrets check passes (score 10) and the
    ratios are reported as None.
    """

    category = Category.CODE_QUALITY

    async def analyze(self, target: SkillTarget) -> CodeQualityScore:
        return await asyncio.to_thread(self.analyze_path, target.path)

    def analyze_path(self, skill_path: Path) -> CodeQualityScore:
        files = collect_files(skill_path)
        stats = _FileStats()

        for file_path in files:
            suffix = file_path.suffix.lower()
            if suffix in DOC_EXTENSIONS:
                continue
            try:
                content = file_path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                logger.debug(f"Skipping unreadable file {file_path}: {e}")
                continue

            stats.analyzed += 1
            stats.secrets.extend(find_hardcoded_secrets(content))
            if has_error_handling(content):
                stats.with_error_handling += 1
            stats.comment_density_total += calculate_comment_density(content)
            if follows_naming_conventions(content, suffix):
                stats.with_good_naming += 1

        return self._score(stats, total_files=len(files))

    def _score(self, stats: _FileStats, total_files: int) -> CodeQualityScore:
        score = 0

        if not stats.secrets:
            score += NO_SECRETS_POINTS
        else:
            logger.warning(f"Found {len(stats.secrets)} possible hardcoded secret(s)")

        error_handling_ratio = _percent(stats.with_error_handling, stats.analyzed)
        if error_handling_ratio is not None and error_handling_ratio >= ERROR_HANDLING_MIN_RATIO:
            score += ERROR_HANDLING_POINTS

        average_density = (
            stats.comment_density_total / stats.analyzed if stats.analyzed else None
        )
        if average_density is not None and average_density >= COMMENT_DENSITY_MIN:
            score += COMMENTS_POINTS

        naming_ratio = _percent(stats.with_good_naming, stats.analyzed)
        if naming_ratio is not None and naming_ratio >= NAMING_MIN_RATIO:
            score += NAMING_POINTS

        return CodeQualityScore(
            score=score,
            details=CodeQualityDetails(
                analyzed_files=stats.analyzed,
                total_files=total_files,
                secrets=SecretsCheck(
                    found=len(stats.secrets),
                    clean=not stats.secrets,
                    samples=[mask_secret(s) for s in stats.secrets[:SECRET_SAMPLE_LIMIT]],
                ),
                error_handling=ErrorHandlingCheck(
                    files_with_handling=stats.with_error_handling,
                    ratio=round(error_handling_ratio) if error_handling_ratio is not None else None,
                ),
                comments=CommentsCheck(
                    average_density=round(average_density, 1) if average_density is not None else None,
                ),
                naming=NamingCheck(
                    files_with_good_naming=stats.with_good_naming,
                    ratio=round(naming_ratio) if naming_ratio is not None else None,
                ),
            ),
        )
