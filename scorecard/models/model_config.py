"""Runtime configuration injected into the scoring engine."""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scorecard.consts import (
    ENV_REPUTATION_ENDPOINT,
    ENV_REPUTATION_TIMEOUT,
    ENV_SCANNER_PATH,
    ENV_SCANNER_TIMEOUT,
    GIT_DEFAULT_TIMEOUT,
    REPUTATION_DEFAULT_ENDPOINT,
    REPUTATION_DEFAULT_TIMEOUT,
    SCANNER_DEFAULT_PATH,
    SCANNER_DEFAULT_TIMEOUT,
    SCANNER_MAX_OUTPUT_BYTES,
)


class ScorecardConfig(BaseModel):
    """Endpoints, executables and time budgets for one scoring engine.

    Nothing environment-specific is hardcoded in the analyzers; they all read
    from this object, which keeps test doubles trivial to wire in.
    """

    model_config = ConfigDict(frozen=True)

    reputation_endpoint: str = Field(
        default=REPUTATION_DEFAULT_ENDPOINT,
        description="Base URL; the URL-quoted skill name is appended",
    )
    reputation_timeout: float = Field(default=REPUTATION_DEFAULT_TIMEOUT, gt=0)
    scanner_path: str = Field(default=SCANNER_DEFAULT_PATH, description="Scanner executable")
    scanner_timeout: float = Field(default=SCANNER_DEFAULT_TIMEOUT, gt=0)
    scanner_max_output_bytes: int = Field(default=SCANNER_MAX_OUTPUT_BYTES, gt=0)
    git_timeout: float = Field(default=GIT_DEFAULT_TIMEOUT, gt=0)
    analyzer_timeout: float | None = Field(
        default=None, gt=0, description="Upper bound for a whole analyzer, None for no bound"
    )

    @field_validator("reputation_endpoint")
    @classmethod
    def endpoint_has_trailing_slash(cls, value: str) -> str:
        """Ensure the skill name can be appended directly."""
        value = value.strip()
        if not value:
            msg = "reputation_endpoint must not be empty"
            raise ValueError(msg)
        return value if value.endswith("/") else value + "/"

    @classmethod
    def from_env(cls, **overrides: object) -> "ScorecardConfig":
        """Build config from SCORECARD_* environment variables.

        Resolution order: explicit override > env var > default. Overrides
        that are None are ignored so CLI options can be passed straight in.
        """
        values: dict[str, object] = {}

        env_map = {
            "reputation_endpoint": ENV_REPUTATION_ENDPOINT,
            "reputation_timeout": ENV_REPUTATION_TIMEOUT,
            "scanner_path": ENV_SCANNER_PATH,
            "scanner_timeout": ENV_SCANNER_TIMEOUT,
        }
        for field_name, env_name in env_map.items():
            env_value = os.getenv(env_name, "").strip()
            if env_value:
                values[field_name] = env_value

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
