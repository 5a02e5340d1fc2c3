"""Score models: per-category components, breakdown and the final result."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import Field, model_validator

from scorecard.consts import (
    CODE_QUALITY_MAX,
    DOCUMENTATION_MAX,
    MAINTENANCE_MAX,
    OVERALL_MAX,
    PASSING_GRADES,
    REPUTATION_MAX,
    SCANNER_MAX,
    SECURITY_MAX,
)
from scorecard.models.common import ScorecardModel, _utc_now


class Category(str, Enum):
    """Top-level scoring dimensions, in breakdown order."""

    SECURITY = "security"
    DOCUMENTATION = "documentation"
    CODE_QUALITY = "code_quality"
    MAINTENANCE = "maintenance"


class Grade(str, Enum):
    """Letter grade derived from the overall score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"

    @property
    def is_passing(self) -> bool:
        return self.value in PASSING_GRADES


class ReputationStatus(str, Enum):
    """Trust tier reported by the reputation service."""

    BENIGN = "benign"
    UNKNOWN = "unknown"
    MALICIOUS = "malicious"
    ERROR = "error"


class SkillTarget(ScorecardModel):
    """What every analyzer receives: display/lookup name and resolved directory."""

    name: str = Field(description="Skill name used for reputation lookups and display")
    path: Path = Field(description="Resolved skill directory")


class SeverityCounts(ScorecardModel):
    """Scanner finding counts by severity."""

    critical: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low


# Details models. Every field has a default so a crashed analyzer can still
# report a complete (if empty) details object alongside its error.


class ComponentDetails(ScorecardModel):
    """Sub-findings of one category."""

    error: str | None = Field(default=None, description="Set when the analyzer itself failed")


class ReputationCheck(ScorecardModel):
    status: ReputationStatus = ReputationStatus.UNKNOWN
    score: int = Field(default=0, ge=0, le=REPUTATION_MAX)
    max: int = REPUTATION_MAX
    error: str | None = None


class ScannerCheck(ScorecardModel):
    score: int = Field(default=0, ge=0, le=SCANNER_MAX)
    max: int = SCANNER_MAX
    issues: SeverityCounts = Field(default_factory=SeverityCounts)
    error: str | None = None
    scanner_available: bool = False
    findings: list[dict[str, Any]] = Field(
        default_factory=list, description="Raw scanner findings, schema owned by the scanner"
    )


class SecurityDetails(ComponentDetails):
    reputation: ReputationCheck = Field(default_factory=ReputationCheck)
    scanner: ScannerCheck = Field(default_factory=ScannerCheck)


class DocFileCheck(ScorecardModel):
    exists: bool = False
    length: int = Field(default=0, ge=0)
    sufficient: bool = False


class DocumentationDetails(ComponentDetails):
    skill_md: DocFileCheck = Field(default_factory=DocFileCheck)
    readme_md: DocFileCheck = Field(default_factory=DocFileCheck)
    examples: bool = False
    references: bool = False


class SecretsCheck(ScorecardModel):
    found: int = Field(default=0, ge=0)
    clean: bool = True
    samples: list[str] = Field(default_factory=list)


class ErrorHandlingCheck(ScorecardModel):
    files_with_handling: int = Field(default=0, ge=0)
    ratio: int | None = Field(default=None, description="Percent of analyzed files, None if none")


class CommentsCheck(ScorecardModel):
    average_density: float | None = Field(
        default=None, description="Average percent of comment lines, None if no files"
    )


class NamingCheck(ScorecardModel):
    files_with_good_naming: int = Field(default=0, ge=0)
    ratio: int | None = Field(default=None, description="Percent of analyzed files, None if none")


class CodeQualityDetails(ComponentDetails):
    analyzed_files: int = Field(default=0, ge=0)
    total_files: int = Field(default=0, ge=0)
    secrets: SecretsCheck = Field(default_factory=SecretsCheck)
    error_handling: ErrorHandlingCheck = Field(default_factory=ErrorHandlingCheck)
    comments: CommentsCheck = Field(default_factory=CommentsCheck)
    naming: NamingCheck = Field(default_factory=NamingCheck)


class GitCheck(ScorecardModel):
    exists: bool = False


class LastCommitCheck(ScorecardModel):
    exists: bool = False
    date: datetime | None = None
    days_ago: int | None = None
    is_recent: bool = False


class VersionCheck(ScorecardModel):
    exists: bool = False
    version: str | None = None
    source: str | None = None


class MaintenanceDetails(ComponentDetails):
    git: GitCheck = Field(default_factory=GitCheck)
    last_commit: LastCommitCheck = Field(default_factory=LastCommitCheck)
    version: VersionCheck = Field(default_factory=VersionCheck)


class ScoreComponent(ScorecardModel):
    """Result of one analyzer.

    ``score`` is clamped into ``[0, max]`` on construction, so a component is
    always a valid addend for the overall score.
    """

    category: ClassVar[Category]

    score: int = 0
    max: int
    details: ComponentDetails = Field(default_factory=ComponentDetails)

    @model_validator(mode="before")
    @classmethod
    def clamp_score(cls, data: Any) -> Any:
        """Clamp score to the category ceiling."""
        if not isinstance(data, dict) or "score" not in data:
            return data
        ceiling = data.get("max")
        if ceiling is None:
            ceiling = cls.model_fields["max"].default
        return {**data, "score": min(max(int(data["score"]), 0), ceiling)}

    @property
    def failed(self) -> bool:
        """True when the analyzer crashed and this is a fallback component."""
        return self.details.error is not None

    @classmethod
    def fallback(cls, message: str) -> Self:
        """Zero-score component carrying ``message`` as the failure cause."""
        details_cls = cls.model_fields["details"].annotation
        return cls(score=0, details=details_cls(error=message))


class SecurityScore(ScoreComponent):
    category: ClassVar[Category] = Category.SECURITY

    max: int = SECURITY_MAX
    details: SecurityDetails = Field(default_factory=SecurityDetails)


class DocumentationScore(ScoreComponent):
    category: ClassVar[Category] = Category.DOCUMENTATION

    max: int = DOCUMENTATION_MAX
    details: DocumentationDetails = Field(default_factory=DocumentationDetails)


class CodeQualityScore(ScoreComponent):
    category: ClassVar[Category] = Category.CODE_QUALITY

    max: int = CODE_QUALITY_MAX
    details: CodeQualityDetails = Field(default_factory=CodeQualityDetails)


class MaintenanceScore(ScoreComponent):
    category: ClassVar[Category] = Category.MAINTENANCE

    max: int = MAINTENANCE_MAX
    details: MaintenanceDetails = Field(default_factory=MaintenanceDetails)


COMPONENT_TYPES: dict[Category, type[ScoreComponent]] = {
    Category.SECURITY: SecurityScore,
    Category.DOCUMENTATION: DocumentationScore,
    Category.CODE_QUALITY: CodeQualityScore,
    Category.MAINTENANCE: MaintenanceScore,
}


class Breakdown(ScorecardModel):
    """The four category components. All four are always present."""

    security: SecurityScore
    documentation: DocumentationScore
    code_quality: CodeQualityScore
    maintenance: MaintenanceScore

    def get(self, category: Category) -> ScoreComponent:
        return getattr(self, category.value)

    def items(self) -> list[tuple[Category, ScoreComponent]]:
        """(category, component) pairs in breakdown order."""
        return [(category, self.get(category)) for category in Category]

    @property
    def total(self) -> int:
        return sum(component.score for _, component in self.items())


class ScoreResult(ScorecardModel):
    """Scorecard for one skill. Built once per scan and never mutated."""

    skill: str
    path: str
    scanned_at: datetime = Field(default_factory=_utc_now, description="Scan start (UTC)")
    scan_duration_ms: int = Field(default=0, ge=0)
    overall_score: int = Field(ge=0, le=OVERALL_MAX)
    max_score: int = OVERALL_MAX
    grade: Grade
    breakdown: Breakdown
    recommendations: tuple[str, ...] = ()

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys (overallScore, codeQuality, ...)."""
        return self.model_dump(mode="json", by_alias=True)
