"""
Strava activities and athlete stats.

The subject is whoever owns the configured access token; there is no
user segment in these routes.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from app.config import StravaCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import StravaActivity, StravaAthlete
from services.base_source_service import MAX_ITEMS, BaseSourceService

STRAVA_API_BASE = "https://www.strava.com/api/v3"
STRAVA_WEB_BASE = "https://www.strava.com"


# -------- Unit conversion ----------------------------------------------------

def format_duration(seconds: float) -> str:
    """3725 -> '01:02:05'. Hours are not wrapped at 24."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def meters_to_km(meters: float) -> float:
    return round(meters / 1000, 2)


def mps_to_kmh(speed: float) -> float:
    return round(speed * 3.6, 2)


def activity_to_item(activity: StravaActivity, thumbnail_template: str) -> FeedItem:
    sub = " · ".join(
        [
            f"{meters_to_km(activity.distance)} km",
            format_duration(activity.moving_time),
            f"{mps_to_kmh(activity.average_speed)} km/h",
        ]
    )
    return FeedItem(
        title=activity.name,
        sub=sub,
        url=f"{STRAVA_WEB_BASE}/activities/{activity.id}",
        image_url=thumbnail_template.format(activity_id=activity.id),
    )


class StravaService(BaseSourceService):
    source = "strava"

    def __init__(
        self,
        credentials: StravaCredentials,
        *,
        client: httpx.AsyncClient,
        thumbnail_template: str,
    ) -> None:
        super().__init__(client=client)
        self._credentials = credentials
        self._thumbnail_template = thumbnail_template

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._credentials.access_token}"}

    async def fetch_items(self, subject: str = "athlete", report_type: str = "activities") -> List[FeedItem]:
        payload = await self.fetch_payload(
            f"{STRAVA_API_BASE}/athlete/activities",
            params={"per_page": MAX_ITEMS},
            headers=self._auth_headers(),
        )
        items = self.map_items(
            self.expect_list(payload),
            StravaActivity,
            lambda activity: activity_to_item(activity, self._thumbnail_template),
        )
        self._log.info("strava_activities_fetch_success", items_returned=len(items))
        return items

    async def _athlete_id(self) -> int:
        if self._credentials.athlete_id is not None:
            return self._credentials.athlete_id
        payload = await self.fetch_payload(f"{STRAVA_API_BASE}/athlete", headers=self._auth_headers())
        return self.parse_item(StravaAthlete, payload).id

    async def fetch_stats(self) -> Dict[str, Any]:
        """Athlete totals, returned exactly as Strava sends them."""
        athlete_id = await self._athlete_id()
        payload = await self.fetch_payload(
            f"{STRAVA_API_BASE}/athletes/{athlete_id}/stats",
            headers=self._auth_headers(),
        )
        stats = self.expect_mapping(payload)
        self._log.info("strava_stats_fetch_success", athlete_id=athlete_id)
        return stats
