"""Partial-failure isolation for analyzers."""

import asyncio
import logging
from collections.abc import Callable

from scorecard.analyzers.base import BaseAnalyzer
from scorecard.models.model_score import COMPONENT_TYPES, Category, ScoreComponent, SkillTarget

logger = logging.getLogger(__name__)


class IsolatedAnalyzer:
    """Analyzer wrapper that never raises.

    Any exception escaping the wrapped analyzer (or an expired timeout) is
    logged and replaced by ``fallback(message)``. Cancellation still
    propagates.
    """

    def __init__(
        self,
        analyzer: BaseAnalyzer,
        fallback: Callable[[str], ScoreComponent],
        timeout: float | None = None,
    ) -> None:
        self.analyzer = analyzer
        self.fallback = fallback
        self.timeout = timeout

    @property
    def category(self) -> Category:
        return self.analyzer.category

    async def analyze(self, target: SkillTarget) -> ScoreComponent:
        try:
            if self.timeout is None:
                return await self.analyzer.analyze(target)
            return await asyncio.wait_for(self.analyzer.analyze(target), timeout=self.timeout)
        except TimeoutError as e:
            if self.timeout is None:
                message = str(e) or type(e).__name__
            else:
                message = f"{self.category.value} analyzer timed out after {self.timeout}s"
            logger.warning(f"{message} ({target.name})")
            return self.fallback(message)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning(f"{self.category.value} analyzer failed for {target.name}: {message}")
            logger.debug("Analyzer traceback", exc_info=True)
            return self.fallback(message)


def isolate(
    analyzer: BaseAnalyzer,
    fallback: Callable[[str], ScoreComponent] | None = None,
    timeout: float | None = None,
) -> IsolatedAnalyzer:
    """Wrap an analyzer so that it always returns a component.

    Args:
        analyzer: Analyzer to wrap
        fallback: Builds the substitute component from a failure message;
            defaults to the zero-score component of the analyzer's category
        timeout: Optional upper bound for one analyze() call, in seconds

    Returns:
        Analyzer with the same contract that never raises
    """
    if fallback is None:
        fallback = COMPONENT_TYPES[analyzer.category].fallback
    return IsolatedAnalyzer(analyzer, fallback, timeout=timeout)
