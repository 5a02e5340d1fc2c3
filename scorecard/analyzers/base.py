"""Base analyzer protocol defining the contract for all analyzers."""

from typing import Protocol

from scorecard.models.model_score import Category, ScoreComponent, SkillTarget


class BaseAnalyzer(Protocol):
    """Protocol defining the analyzer contract.

    All analyzers must implement this protocol to ensure consistent behavior.
    An analyzer inspects one skill and returns the component for its category.

    Contract:
    - Expected failures (missing files, network errors, missing executables)
      are caught inside the analyzer and reported through ``details`` with a
      documented fallback score, never raised
    - The returned score is within ``[0, max]`` for the category
    - Given the same filesystem and network fixtures, output is deterministic
    - No state is shared with other analyzers
    """

    category: Category

    async def analyze(self, target: SkillTarget) -> ScoreComponent:
        """Analyze the skill on this dimension.

        Args:
            target: Skill name and resolved directory

        Returns:
            Score component for this analyzer's category
        """
        ...
