"""Aggregation of analyzer results into a graded scorecard."""

from scorecard.scoring.engine import (
    ScoringEngine,
    TargetResolutionError,
    build_default_analyzers,
    resolve_target_path,
    score_skill,
)
from scorecard.scoring.grading import calculate_grade, exit_code_for_grade
from scorecard.scoring.isolation import IsolatedAnalyzer, isolate
from scorecard.scoring.recommendations import (
    RECOMMENDATION_RULES,
    RecommendationRule,
    generate_recommendations,
    is_critical,
)

__all__ = [
    # Engine
    "ScoringEngine",
    "TargetResolutionError",
    "build_default_analyzers",
    "resolve_target_path",
    "score_skill",
    # Isolation
    "IsolatedAnalyzer",
    "isolate",
    # Grading
    "calculate_grade",
    "exit_code_for_grade",
    # Recommendations
    "RECOMMENDATION_RULES",
    "RecommendationRule",
    "generate_recommendations",
    "is_critical",
]
