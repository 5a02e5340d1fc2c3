"""Documentation analyzer for SKILL.md / README.md quality."""

import asyncio
import logging
from pathlib import Path

from scorecard.consts import (
    EXAMPLES_PATTERNS,
    EXAMPLES_POINTS,
    PRIMARY_DOC_FILE,
    PRIMARY_DOC_MIN_LENGTH,
    PRIMARY_DOC_POINTS,
    REFERENCES_PATTERNS,
    REFERENCES_POINTS,
    SECONDARY_DOC_FILE,
    SECONDARY_DOC_MIN_LENGTH,
    SECONDARY_DOC_POINTS,
)
from scorecard.models.model_score import (
    Category,
    DocFileCheck,
    DocumentationDetails,
    DocumentationScore,
    SkillTarget,
)

logger = logging.getLogger(__name__)


def read_text_safe(path: Path) -> str | None:
    """Read a text file, returning None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def has_examples(content: str) -> bool:
    return any(pattern.search(content) for pattern in EXAMPLES_PATTERNS)


def has_references(content: str) -> bool:
    return any(pattern.search(content) for pattern in REFERENCES_PATTERNS)


def check_doc_file(path: Path, min_length: int) -> tuple[DocFileCheck, str | None]:
    """Check one doc file for presence and length (strictly above min_length)."""
    exists = path.is_file()
    content = read_text_safe(path) if exists else None
    length = len(content) if content else 0
    return DocFileCheck(exists=exists, length=length, sufficient=length > min_length), content


class DocumentationAnalyzer:
    """Scores documentation out of 20.

    Algorithm:
        SKILL.md longer than 500 chars:   10
        README.md longer than 300 chars:   5
        examples/usage section:            3
        references/links section:          2

    Section checks run over SKILL.md and README.md combined.
    """

    category = Category.DOCUMENTATION

    async def analyze(self, target: SkillTarget) -> DocumentationScore:
        return await asyncio.to_thread(self.analyze_path, target.path)

    def analyze_path(self, skill_path: Path) -> DocumentationScore:
        """Score the documentation of a skill directory.

        Args:
            skill_path: Skill directory

        Returns:
            DocumentationScore with per-file and section details
        """
        skill_md, skill_content = check_doc_file(skill_path / PRIMARY_DOC_FILE, PRIMARY_DOC_MIN_LENGTH)
        readme_md, readme_content = check_doc_file(
            skill_path / SECONDARY_DOC_FILE, SECONDARY_DOC_MIN_LENGTH
        )

        score = 0
        if skill_md.sufficient:
            score += PRIMARY_DOC_POINTS
        if readme_md.sufficient:
            score += SECONDARY_DOC_POINTS

        combined = (skill_content or "") + "\n" + (readme_content or "")
        examples = has_examples(combined)
        references = has_references(combined)
        if examples:
            score += EXAMPLES_POINTS
        if references:
            score += REFERENCES_POINTS

        logger.debug(
            f"Documentation for {skill_path}: SKILL.md={skill_md.length} chars, "
            f"README.md={readme_md.length} chars, examples={examples}, references={references}"
        )

        return DocumentationScore(
            score=score,
            details=DocumentationDetails(
                skill_md=skill_md,
                readme_md=readme_md,
                examples=examples,
                references=references,
            ),
        )
