"""Prioritized remediation advice derived from a score breakdown.

Rules are evaluated in a fixed order and the output keeps that order, so the
position of a recommendation is itself a severity signal:

1. reputation flags the skill as malicious (critical)
2. scanner critical / high findings
3. SKILL.md missing, or present but too short
4. examples section missing
5. references section missing
6. hardcoded secrets (critical)
7. error handling coverage too low
8. comment density too low
9. no git repository
10. last commit outside the recency window
11. no version/changelog artifact

Rules for a category whose analyzer crashed are skipped, since nothing was
observed there.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from scorecard.consts import (
    COMMENT_DENSITY_MIN,
    CRITICAL_MARKER,
    ERROR_HANDLING_MIN_RATIO,
    PRIMARY_DOC_FILE,
    PRIMARY_DOC_MIN_LENGTH,
    RECENCY_WINDOW_DAYS,
)
from scorecard.models.model_score import Breakdown, Category, ReputationStatus


@dataclass(frozen=True)
class RecommendationRule:
    """One (predicate, message) pair applied to a category's details."""

    category: Category
    applies: Callable[[Any], bool]
    message: Callable[[Any], str]
    critical: bool = False

    def render(self, details: Any) -> str:
        text = self.message(details)
        return f"{CRITICAL_MARKER} {text}" if self.critical else text


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    # Security
    RecommendationRule(
        Category.SECURITY,
        lambda d: d.reputation.status == ReputationStatus.MALICIOUS,
        lambda d: "CRITICAL: Skill flagged as malicious by the reputation service - DO NOT USE",
        critical=True,
    ),
    RecommendationRule(
        Category.SECURITY,
        lambda d: d.scanner.issues.critical > 0,
        lambda d: f"Fix {d.scanner.issues.critical} critical security issue(s)",
    ),
    RecommendationRule(
        Category.SECURITY,
        lambda d: d.scanner.issues.high > 0,
        lambda d: f"Address {d.scanner.issues.high} high-severity issue(s)",
    ),
    # Documentation
    RecommendationRule(
        Category.DOCUMENTATION,
        lambda d: not d.skill_md.exists,
        lambda d: f"Add {PRIMARY_DOC_FILE} file with usage documentation",
    ),
    RecommendationRule(
        Category.DOCUMENTATION,
        lambda d: d.skill_md.exists and not d.skill_md.sufficient,
        lambda d: (
            f"Expand {PRIMARY_DOC_FILE} content (currently {d.skill_md.length} characters, "
            f"needs more than {PRIMARY_DOC_MIN_LENGTH})"
        ),
    ),
    RecommendationRule(
        Category.DOCUMENTATION,
        lambda d: not d.examples,
        lambda d: "Add examples or usage section to documentation",
    ),
    RecommendationRule(
        Category.DOCUMENTATION,
        lambda d: not d.references,
        lambda d: "Add references section with related links/resources",
    ),
    # Code quality
    RecommendationRule(
        Category.CODE_QUALITY,
        lambda d: d.secrets.found > 0,
        lambda d: f"Remove {d.secrets.found} hardcoded secret(s)",
        critical=True,
    ),
    RecommendationRule(
        Category.CODE_QUALITY,
        lambda d: d.error_handling.ratio is not None
        and d.error_handling.ratio < ERROR_HANDLING_MIN_RATIO,
        lambda d: f"Improve error handling coverage in code ({d.error_handling.ratio}% of files)",
    ),
    RecommendationRule(
        Category.CODE_QUALITY,
        lambda d: d.comments.average_density is not None
        and d.comments.average_density < COMMENT_DENSITY_MIN,
        lambda d: "Add more code comments and documentation",
    ),
    # Maintenance
    RecommendationRule(
        Category.MAINTENANCE,
        lambda d: not d.git.exists,
        lambda d: "Initialize git repository for version control",
    ),
    RecommendationRule(
        Category.MAINTENANCE,
        lambda d: d.last_commit.days_ago is not None
        and d.last_commit.days_ago > RECENCY_WINDOW_DAYS,
        lambda d: f"Update repository (last commit {d.last_commit.days_ago} days ago)",
    ),
    RecommendationRule(
        Category.MAINTENANCE,
        lambda d: not d.version.exists,
        lambda d: "Add version information (package.json, pyproject.toml, CHANGELOG, or VERSION file)",
    ),
)


def generate_recommendations(
    breakdown: Breakdown,
    rules: tuple[RecommendationRule, ...] = RECOMMENDATION_RULES,
) -> list[str]:
    """Build the ordered recommendation list for a breakdown.

    Args:
        breakdown: Merged category components
        rules: Ordered rules to evaluate (defaults to RECOMMENDATION_RULES)

    Returns:
        Recommendations in rule order; empty if every rule is satisfied
    """
    recommendations: list[str] = []
    for rule in rules:
        component = breakdown.get(rule.category)
        if component.failed:
            continue
        if rule.applies(component.details):
            recommendations.append(rule.render(component.details))
    return recommendations


def is_critical(recommendation: str) -> bool:
    return recommendation.startswith(CRITICAL_MARKER)
