"""Security analyzer combining the reputation lookup and the static scanner."""

import asyncio
import logging

from scorecard.consts import (
    PENALTY_CRITICAL,
    PENALTY_HIGH,
    PENALTY_LOW,
    PENALTY_MEDIUM,
    SCANNER_MAX,
    SCANNER_PARSE_ERROR_SCORE,
    SCANNER_UNAVAILABLE_SCORE,
)
from scorecard.models.model_scanner import ReputationResult, ScanErrorType, ScanResult
from scorecard.models.model_score import (
    Category,
    ReputationCheck,
    ScannerCheck,
    SecurityDetails,
    SecurityScore,
    SeverityCounts,
    SkillTarget,
)
from scorecard.reputation.client import ReputationClient
from scorecard.scanner.skill_scanner import SkillScanner

logger = logging.getLogger(__name__)


def calculate_scanner_score(issues: SeverityCounts) -> int:
    """Score scanner findings.

    scanner_score = 20 - (critical×10 + high×5 + medium×2 + low×1)
    Minimum: 0
    """
    penalty = (
        issues.critical * PENALTY_CRITICAL
        + issues.high * PENALTY_HIGH
        + issues.medium * PENALTY_MEDIUM
        + issues.low * PENALTY_LOW
    )
    return max(0, SCANNER_MAX - penalty)


def build_scanner_check(result: ScanResult) -> ScannerCheck:
    """Turn a scanner run into the scanner half of the security details.

    Scanner unavailable (missing, crashed, timed out): 10.
    Scanner ran but output unparseable: 15.
    """
    if result.success and result.issues is not None:
        return ScannerCheck(
            score=calculate_scanner_score(result.issues),
            issues=result.issues,
            scanner_available=True,
            findings=result.findings,
        )

    if result.error_type == ScanErrorType.PARSE_ERROR:
        score = SCANNER_PARSE_ERROR_SCORE
    else:
        score = SCANNER_UNAVAILABLE_SCORE

    return ScannerCheck(
        score=score,
        error=result.error,
        scanner_available=result.scanner_available,
    )


def build_reputation_check(result: ReputationResult) -> ReputationCheck:
    return ReputationCheck(status=result.status, score=result.score, error=result.error)


class SecurityAnalyzer:
    """Scores security out of 40.

    reputation (20) + scanner (20), looked up concurrently.
    Reputation tiers: benign=20, unknown=10, malicious=0, lookup error=10.
    """

    category = Category.SECURITY

    def __init__(self, reputation_client: ReputationClient, scanner: SkillScanner) -> None:
        self.reputation_client = reputation_client
        self.scanner = scanner

    async def analyze(self, target: SkillTarget) -> SecurityScore:
        """Calculate security score for a skill.

        Args:
            target: Skill name (for reputation) and path (for the scanner)

        Returns:
            SecurityScore with reputation and scanner details
        """
        reputation_result, scan_result = await asyncio.gather(
            self.reputation_client.check(target.name),
            self.scanner.scan_path(target.path),
        )

        reputation = build_reputation_check(reputation_result)
        scanner = build_scanner_check(scan_result)

        if not scanner.scanner_available:
            logger.warning(f"Scanner unavailable for {target.name}: {scanner.error}")

        return SecurityScore(
            score=reputation.score + scanner.score,
            details=SecurityDetails(reputation=reputation, scanner=scanner),
        )
