"""
Last.fm scrobbles and weekly charts.

Each report type reads a different collection and each collection has a
different entry shape, so the report table pairs an extraction path with
its own schema and mapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel

from app.config import LastfmCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import (
    LastfmChartAlbum,
    LastfmChartArtist,
    LastfmChartTrack,
    LastfmRecentTrack,
)
from services.base_source_service import MAX_ITEMS, BaseSourceService
from services.field_extractor import ExtractionPath, extract, path

LASTFM_API_URL = "https://ws.audioscrobbler.com/2.0/"


class LastfmReportType(str, Enum):
    RECENT_TRACKS = "getRecentTracks"
    WEEKLY_TRACK_CHART = "getWeeklyTrackChart"
    WEEKLY_ALBUM_CHART = "getWeeklyAlbumChart"
    WEEKLY_ARTIST_CHART = "getWeeklyArtistChart"

    @classmethod
    def parse(cls, value: str) -> Optional["LastfmReportType"]:
        try:
            return cls(value)
        except ValueError:
            return None


def _plays(playcount: Any) -> str:
    return f"{playcount} plays"


def _largest_image(track: LastfmRecentTrack) -> Optional[str]:
    # Last.fm lists sizes small -> extralarge
    for image in reversed(track.image):
        if image.text.strip():
            return image.text
    return None


def recent_track_to_item(track: LastfmRecentTrack) -> FeedItem:
    return FeedItem(
        title=track.name,
        sub=track.artist.text or None,
        url=track.url,
        image_url=_largest_image(track),
    )


def chart_track_to_item(track: LastfmChartTrack) -> FeedItem:
    return FeedItem(
        title=f"{track.artist.text} - {track.name}",
        sub=_plays(track.playcount),
        url=track.url,
    )


def chart_album_to_item(album: LastfmChartAlbum) -> FeedItem:
    return FeedItem(
        title=f"{album.artist.text} - {album.name}",
        sub=_plays(album.playcount),
        url=album.url,
    )


def chart_artist_to_item(artist: LastfmChartArtist) -> FeedItem:
    return FeedItem(title=artist.name, url=artist.url)


@dataclass(frozen=True)
class LastfmReport:
    items_path: ExtractionPath
    schema: Type[BaseModel]
    mapper: Callable[[Any], FeedItem]


REPORTS: Dict[LastfmReportType, LastfmReport] = {
    LastfmReportType.RECENT_TRACKS: LastfmReport(
        path("recenttracks", "track"), LastfmRecentTrack, recent_track_to_item
    ),
    LastfmReportType.WEEKLY_TRACK_CHART: LastfmReport(
        path("weeklytrackchart", "track"), LastfmChartTrack, chart_track_to_item
    ),
    LastfmReportType.WEEKLY_ALBUM_CHART: LastfmReport(
        path("weeklyalbumchart", "album"), LastfmChartAlbum, chart_album_to_item
    ),
    LastfmReportType.WEEKLY_ARTIST_CHART: LastfmReport(
        path("weeklyartistchart", "artist"), LastfmChartArtist, chart_artist_to_item
    ),
}

_missing = set(LastfmReportType) - set(REPORTS)
if _missing:
    raise RuntimeError(f"last.fm report types without mapping: {sorted(m.value for m in _missing)}")


def _entries(payload: Any, items_path: ExtractionPath) -> List[Any]:
    value = extract(payload, items_path)
    # A chart with exactly one entry comes back as an object, not a list.
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        return value
    return []


class LastfmService(BaseSourceService):
    source = "lastfm"

    def __init__(self, credentials: LastfmCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def fetch_items(self, subject: str, report_type: str) -> List[FeedItem]:
        kind = LastfmReportType.parse(report_type)
        if kind is None:
            self._log.warning("lastfm_unknown_report_type", user=subject, report=report_type)
            return []

        report = REPORTS[kind]
        payload = await self.fetch_payload(
            LASTFM_API_URL,
            params={
                "method": f"user.{kind.value}",
                "user": subject,
                "api_key": self._credentials.apikey,
                "format": "json",
                "limit": MAX_ITEMS,
            },
        )
        items = self.map_items(_entries(payload, report.items_path), report.schema, report.mapper)
        self._log.info("lastfm_fetch_success", user=subject, report=kind.value, items_returned=len(items))
        return items
