"""Letter grades and exit codes derived from the overall score."""

from scorecard.consts import GRADE_THRESHOLDS
from scorecard.models.model_score import Grade


def calculate_grade(score: int) -> Grade:
    """Map an overall score onto a letter grade.

    Thresholds (inclusive): A >= 90, B >= 80, C >= 70, D >= 60, else F.

    Args:
        score: Overall score (0-100)

    Returns:
        Letter grade
    """
    for letter, threshold in GRADE_THRESHOLDS:
        if score >= threshold:
            return Grade(letter)
    return Grade.F


def exit_code_for_grade(grade: Grade) -> int:
    """0 for passing grades (A, B, C), 1 otherwise."""
    return 0 if grade.is_passing else 1
