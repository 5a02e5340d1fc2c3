"""Pydantic models for Skill Scorecard."""

from scorecard.models.model_config import ScorecardConfig
from scorecard.models.model_scanner import ReputationResult, ScanErrorType, ScanResult
from scorecard.models.model_score import (
    COMPONENT_TYPES,
    Breakdown,
    Category,
    CodeQualityDetails,
    CodeQualityScore,
    CommentsCheck,
    ComponentDetails,
    DocFileCheck,
    DocumentationDetails,
    DocumentationScore,
    ErrorHandlingCheck,
    GitCheck,
    Grade,
    LastCommitCheck,
    MaintenanceDetails,
    MaintenanceScore,
    NamingCheck,
    ReputationCheck,
    ReputationStatus,
    ScannerCheck,
    ScoreComponent,
    ScoreResult,
    SecretsCheck,
    SecurityDetails,
    SecurityScore,
    SeverityCounts,
    SkillTarget,
    VersionCheck,
)

__all__ = [
    # Enums
    "Category",
    "Grade",
    "ReputationStatus",
    # Inputs
    "ScorecardConfig",
    "SkillTarget",
    # Components
    "COMPONENT_TYPES",
    "ScoreComponent",
    "SecurityScore",
    "DocumentationScore",
    "CodeQualityScore",
    "MaintenanceScore",
    # Details
    "ComponentDetails",
    "SecurityDetails",
    "ReputationCheck",
    "ScannerCheck",
    "SeverityCounts",
    "DocumentationDetails",
    "DocFileCheck",
    "CodeQualityDetails",
    "SecretsCheck",
    "ErrorHandlingCheck",
    "CommentsCheck",
    "NamingCheck",
    "MaintenanceDetails",
    "GitCheck",
    "LastCommitCheck",
    "VersionCheck",
    # Results
    "Breakdown",
    "ScoreResult",
    # External lookups
    "ReputationResult",
    "ScanErrorType",
    "ScanResult",
]
