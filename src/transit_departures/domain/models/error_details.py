"""Presentation model for a classified transit API failure."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetails(BaseModel):
    """What the departures view shows when a fetch fails.

    Built from a ``TransitApiError`` (or a cancellation) by the departures
    service; ``reason`` is the message displayed to the user.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int | None = Field(
        default=None, description="Upstream HTTP status, set only for server errors"
    )
    reason: str = Field(description="Human-readable failure message")
