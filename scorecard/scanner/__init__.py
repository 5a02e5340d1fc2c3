"""Static scanner module wrapping the external skill scanner CLI."""

from scorecard.scanner.skill_scanner import SkillScanner

__all__ = [
    "SkillScanner",
]
