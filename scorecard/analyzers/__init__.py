"""Analyzers scoring a skill on four independent categories.

- Security (reputation lookup + static scanner), max 40
- Documentation (SKILL.md, README.md, sections), max 20
- Code quality (secrets, error handling, comments, naming), max 20
- Maintenance (git, commit recency, versioning), max 20

Every analyzer implements BaseAnalyzer: async analyze(SkillTarget) -> component.
"""

from scorecard.analyzers.base import BaseAnalyzer
from scorecard.analyzers.code_quality import CodeQualityAnalyzer
from scorecard.analyzers.documentation import DocumentationAnalyzer
from scorecard.analyzers.maintenance import MaintenanceAnalyzer
from scorecard.analyzers.security import SecurityAnalyzer

__all__ = [
    # Protocol
    "BaseAnalyzer",
    # Individual analyzers
    "SecurityAnalyzer",
    "DocumentationAnalyzer",
    "CodeQualityAnalyzer",
    "MaintenanceAnalyzer",
]
