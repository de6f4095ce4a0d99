"""
RescueTime daily summaries as per-category percentage bars.

For each day the busiest category is 100 and every other category is
scaled against it, so days with very different totals stay comparable.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import httpx

from app.config import RescuetimeCredentials
from app.models.feed_items import DataPoint, FeedItem
from app.models.upstream import RescuetimeDay
from services.base_source_service import BaseSourceService

DAILY_SUMMARY_URL = "https://www.rescuetime.com/anapi/daily_summary_feed"

CATEGORIES: Tuple[str, ...] = (
    "software_development",
    "communication_and_scheduling",
    "social_networking",
    "reference_and_learning",
    "design_and_composition",
    "entertainment",
    "news",
    "shopping",
    "utilities",
    "business",
    "uncategorized",
)


def category_hours(day: RescuetimeDay, categories: Sequence[str] = CATEGORIES) -> List[Tuple[str, float]]:
    return [(category, float(getattr(day, f"{category}_hours") or 0.0)) for category in categories]


def scale_factor(hours: Sequence[float]) -> float:
    """100 / max, or 0 for an all-zero day."""
    peak = max(hours, default=0.0)
    if peak <= 0:
        return 0.0
    return 100 / peak


def breakdown(day: RescuetimeDay) -> List[DataPoint]:
    pairs = category_hours(day)
    scale = scale_factor([value for _, value in pairs])
    return [
        DataPoint(label=category.replace("_", " "), value=round(value * scale))
        for category, value in pairs
    ]


def day_to_item(day: RescuetimeDay) -> FeedItem:
    return FeedItem(
        title=day.date,
        sub=day.total_duration_formatted or None,
        url="",
        data=breakdown(day),
    )


class RescuetimeService(BaseSourceService):
    source = "rescuetime"

    def __init__(self, credentials: RescuetimeCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def fetch_items(self, subject: str = "self", report_type: str = "daily") -> List[FeedItem]:
        payload = await self.fetch_payload(DAILY_SUMMARY_URL, params={"key": self._credentials.key})
        items = self.map_items(self.expect_list(payload), RescuetimeDay, day_to_item)
        self._log.info("rescuetime_fetch_success", items_returned=len(items))
        return items
