"""Skill Scorecard - quality and security assessment for skill packages."""

__version__ = "0.1.0"
