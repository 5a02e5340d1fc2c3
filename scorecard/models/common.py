from datetime import datetime, UTC

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


class ScorecardModel(BaseModel):
    """Base for scorecard models: immutable, camelCase keys when dumped by alias."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
