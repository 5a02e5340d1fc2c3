"""Maintenance analyzer for version control, commit recency and versioning."""

import asyncio
import json
import logging
import tomllib
from datetime import UTC, datetime
from pathlib import Path

from scorecard.consts import (
    CHANGELOG_FILES,
    GIT_DEFAULT_TIMEOUT,
    GIT_DIRECTORY,
    GIT_POINTS,
    RECENCY_WINDOW_DAYS,
    RECENT_COMMIT_POINTS,
    VERSION_FILE,
    VERSION_POINTS,
)
from scorecard.models.model_score import (
    Category,
    GitCheck,
    LastCommitCheck,
    MaintenanceDetails,
    MaintenanceScore,
    SkillTarget,
    VersionCheck,
)

logger = logging.getLogger(__name__)


def is_git_repo(skill_path: Path) -> bool:
    return (skill_path / GIT_DIRECTORY).exists()


def check_version_info(skill_path: Path) -> VersionCheck:
    """Find a version artifact.

    Checked in order: package.json "version", pyproject.toml [project].version,
    changelog files, VERSION file. The first hit wins.
    """
    try:
        package = json.loads((skill_path / "package.json").read_text(encoding="utf-8"))
        if isinstance(package, dict) and package.get("version"):
            return VersionCheck(exists=True, version=str(package["version"]), source="package.json")
    except (OSError, ValueError):
        pass

    try:
        with (skill_path / "pyproject.toml").open("rb") as f:
            pyproject = tomllib.load(f)
        version = pyproject.get("project", {}).get("version")
        if version:
            return VersionCheck(exists=True, version=str(version), source="pyproject.toml")
    except (OSError, ValueError, AttributeError):
        pass

    for filename in CHANGELOG_FILES:
        if (skill_path / filename).exists():
            return VersionCheck(exists=True, source=filename)

    try:
        version = (skill_path / VERSION_FILE).read_text(encoding="utf-8").strip()
    except OSError:
        return VersionCheck(exists=False)
    except ValueError:
        # undecodable contents still count as a version file
        version = ""
    return VersionCheck(exists=True, version=version or None, source=VERSION_FILE)


class MaintenanceAnalyzer:
    """Scores maintenance out of 20.

    Algorithm:
        .git directory present:                     5
        last commit within 180 days (6 months):    10
        version/changelog artifact present:         5
    """

    category = Category.MAINTENANCE

    def __init__(
        self,
        git_timeout: float = GIT_DEFAULT_TIMEOUT,
        current_time: datetime | None = None,
    ) -> None:
        """Initialize MaintenanceAnalyzer.

        Args:
            git_timeout: Timeout for the git history query in seconds
            current_time: Fixed "now" for recency checks (defaults to the real clock)
        """
        self.git_timeout = git_timeout
        self.current_time = current_time

    async def get_last_commit_date(self, skill_path: Path) -> datetime | None:
        """Timestamp of the most recent commit touching the skill directory.

        Returns None if git is missing, the query fails or there are no commits.
        """
        cmd = ["git", "log", "-1", "--format=%ct", "--", "."]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={skill_path})")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=skill_path,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.debug(f"git not available: {e}")
            return None

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.git_timeout)
        except TimeoutError:
            process.kill()
            await process.wait()
            logger.warning(f"git log timed out after {self.git_timeout}s in {skill_path}")
            return None

        if process.returncode != 0:
            return None

        output = stdout.decode("utf-8", errors="replace").strip()
        try:
            return datetime.fromtimestamp(int(output), tz=UTC)
        except (ValueError, OverflowError, OSError):
            return None

    def build_last_commit_check(self, last_commit: datetime | None) -> LastCommitCheck:
        if last_commit is None:
            return LastCommitCheck(exists=False)

        now = self.current_time or datetime.now(UTC)
        days_ago = (now - last_commit).days
        return LastCommitCheck(
            exists=True,
            date=last_commit,
            days_ago=days_ago,
            is_recent=days_ago <= RECENCY_WINDOW_DAYS,
        )

    async def analyze(self, target: SkillTarget) -> MaintenanceScore:
        """Calculate maintenance score for a skill.

        Args:
            target: Skill to analyze (only the path is used)

        Returns:
            MaintenanceScore with git, last commit and version details
        """
        skill_path = target.path
        is_git = is_git_repo(skill_path)
        last_commit = await self.get_last_commit_date(skill_path) if is_git else None
        version = await asyncio.to_thread(check_version_info, skill_path)

        last_commit_check = self.build_last_commit_check(last_commit)

        score = 0
        if is_git:
            score += GIT_POINTS
        if last_commit_check.is_recent:
            score += RECENT_COMMIT_POINTS
        if version.exists:
            score += VERSION_POINTS

        return MaintenanceScore(
            score=score,
            details=MaintenanceDetails(
                git=GitCheck(exists=is_git),
                last_commit=last_commit_check,
                version=version,
            ),
        )
