"""Reputation lookup against the external skill reputation service."""

from scorecard.reputation.client import ReputationClient

__all__ = [
    "ReputationClient",
]
