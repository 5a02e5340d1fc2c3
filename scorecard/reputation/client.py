"""HTTP client for the skill reputation service."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from scorecard.consts import (
    REPUTATION_DEFAULT_ENDPOINT,
    REPUTATION_DEFAULT_TIMEOUT,
    REPUTATION_SCORE_BENIGN,
    REPUTATION_SCORE_ERROR,
    REPUTATION_SCORE_MALICIOUS,
    REPUTATION_SCORE_UNKNOWN,
)
from scorecard.models.model_scanner import ReputationResult
from scorecard.models.model_score import ReputationStatus

logger = logging.getLogger(__name__)

# Service status strings mapped onto our trust tiers
STATUS_ALIASES = {
    "benign": ReputationStatus.BENIGN,
    "safe": ReputationStatus.BENIGN,
    "clean": ReputationStatus.BENIGN,
    "unknown": ReputationStatus.UNKNOWN,
    "malicious": ReputationStatus.MALICIOUS,
    "dangerous": ReputationStatus.MALICIOUS,
}

TIER_SCORES = {
    ReputationStatus.BENIGN: REPUTATION_SCORE_BENIGN,
    ReputationStatus.UNKNOWN: REPUTATION_SCORE_UNKNOWN,
    ReputationStatus.MALICIOUS: REPUTATION_SCORE_MALICIOUS,
    ReputationStatus.ERROR: REPUTATION_SCORE_ERROR,
}


def parse_status(raw_status: Any) -> ReputationStatus:
    """Map a raw service status onto a trust tier. Unrecognized values are unknown."""
    if not isinstance(raw_status, str):
        return ReputationStatus.UNKNOWN
    return STATUS_ALIASES.get(raw_status.strip().lower(), ReputationStatus.UNKNOWN)


class ReputationClient:
    """Looks up a skill by name and classifies it into a trust tier.

    One GET per lookup, no retries. Network errors, non-2xx responses and
    malformed bodies all degrade to a mid-tier score instead of raising.
    """

    def __init__(
        self,
        endpoint: str = REPUTATION_DEFAULT_ENDPOINT,
        timeout: float = REPUTATION_DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize ReputationClient.

        Args:
            endpoint: Base URL; the URL-quoted skill name is appended to it
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    def url_for(self, skill_name: str) -> str:
        return f"{self.endpoint}{quote(skill_name, safe='')}"

    async def check(self, skill_name: str) -> ReputationResult:
        """Query the reputation service for a skill.

        Args:
            skill_name: Name of the skill

        Returns:
            ReputationResult with tier, score and optional error
        """
        url = self.url_for(skill_name)
        logger.debug(f"Reputation lookup: {url}")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json"},
                transport=self.transport,
            ) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Reputation lookup failed for {skill_name}: {e}")
            return ReputationResult(
                status=ReputationStatus.ERROR,
                score=TIER_SCORES[ReputationStatus.ERROR],
                error=str(e) or type(e).__name__,
            )

        if not response.is_success:
            logger.info(f"Reputation lookup for {skill_name} returned HTTP {response.status_code}")
            return ReputationResult(
                status=ReputationStatus.UNKNOWN,
                score=TIER_SCORES[ReputationStatus.UNKNOWN],
                error=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Reputation response for {skill_name} is not JSON: {e}")
            return ReputationResult(
                status=ReputationStatus.ERROR,
                score=TIER_SCORES[ReputationStatus.ERROR],
                error="Malformed reputation response",
            )

        if not isinstance(data, dict):
            data = {}

        status = parse_status(data.get("status"))
        return ReputationResult(status=status, score=TIER_SCORES[status])
