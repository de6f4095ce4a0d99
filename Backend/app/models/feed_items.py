from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DataPoint(BaseModel):
    """One bar of a breakdown series (time-tracking only)."""

    label: str
    value: Union[int, float]


class FeedItem(BaseModel):
    """
    Canonical item every source adapter converges to.

    ``title`` and ``url`` are always serialized (possibly as ``""``);
    optional fields are dropped from the JSON instead of being sent as null.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""
    sub: Optional[str] = None
    image_url: Optional[str] = None
    data: Optional[List[DataPoint]] = Field(
        default=None,
        description="Breakdown series; only emitted by the time-tracking source.",
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SourceStatus(BaseModel):
    source: str
    configured: bool
