# Backend/api/routers/feeds.py
from __future__ import annotations

from typing import Any, Dict, List

import httpx
from fastapi import APIRouter, Depends, Path

from app.config import (
    FeedsConfig,
    GithubCredentials,
    GoodreadsCredentials,
    InstagramCredentials,
    LastfmCredentials,
    RescuetimeCredentials,
    SetlistfmCredentials,
    Settings,
    StravaCredentials,
    TwitterCredentials,
)
from app.deps.feeds import get_feeds_config, get_http_client, get_settings, require_credentials
from app.models.feed_items import FeedItem, SourceStatus
from services.github_service import GithubService
from services.goodreads_service import GoodreadsService
from services.instagram_service import InstagramService
from services.lastfm_service import LastfmService
from services.medium_service import MediumService
from services.rescuetime_service import RescuetimeService
from services.setlistfm_service import SetlistfmService
from services.strava_service import StravaService
from services.twitter_service import TwitterService

router = APIRouter(tags=["feeds"])

# Every feed answers 201 on success; clients depend on it.
FEED_STATUS = 201

_feed_route = dict(
    status_code=FEED_STATUS,
    response_model=List[FeedItem],
    response_model_exclude_none=True,
)

# Sources that need no credential block
_OPEN_SOURCES = ("medium",)


@router.get("/sources", response_model=List[SourceStatus])
async def list_sources(config: FeedsConfig = Depends(get_feeds_config)):
    """Which sources are configured. Never returns the credentials themselves."""
    configured = set(config.configured_sources())
    statuses = [SourceStatus(source=name, configured=True) for name in _OPEN_SOURCES]
    statuses.extend(
        SourceStatus(source=name, configured=name in configured)
        for name in FeedsConfig.source_names()
    )
    return statuses


@router.get("/medium/{user}/{report_type}", **_feed_route)
async def medium_feed(
    user: str = Path(..., description="Medium handle, with or without @"),
    report_type: str = Path(..., description="Profile tab, e.g. latest"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await MediumService(client=client).fetch_items(user, report_type)


@router.get("/github/{user}/{report_type}", **_feed_route)
async def github_feed(
    user: str = Path(...),
    report_type: str = Path(..., description="Accepted but unused: always repos by last push"),
    credentials: GithubCredentials = Depends(require_credentials("github")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await GithubService(credentials, client=client).fetch_items(user, report_type)


@router.get("/twitter/{user}/{report_type}", **_feed_route)
async def twitter_feed(
    user: str = Path(...),
    report_type: str = Path(..., description="favorites, anything else reads the timeline"),
    credentials: TwitterCredentials = Depends(require_credentials("twitter")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await TwitterService(credentials, client=client).fetch_items(user, report_type)


@router.get("/lastfm/{user}/{report_type}", **_feed_route)
async def lastfm_feed(
    user: str = Path(...),
    report_type: str = Path(
        ...,
        description="getRecentTracks, getWeeklyTrackChart, getWeeklyAlbumChart or getWeeklyArtistChart",
    ),
    credentials: LastfmCredentials = Depends(require_credentials("lastfm")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await LastfmService(credentials, client=client).fetch_items(user, report_type)


@router.get("/instagram/{user}/{report_type}", **_feed_route)
async def instagram_feed(
    user: str = Path(...),
    report_type: str = Path(...),
    credentials: InstagramCredentials = Depends(require_credentials("instagram")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await InstagramService(credentials, client=client).fetch_items(user, report_type)


@router.get("/goodreads/{user}/{report_type}", **_feed_route)
async def goodreads_feed(
    user: str = Path(..., description="Goodreads user id"),
    report_type: str = Path(..., description="Shelf name, e.g. read or currently-reading"),
    credentials: GoodreadsCredentials = Depends(require_credentials("goodreads")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await GoodreadsService(credentials, client=client).fetch_items(user, report_type)


@router.get("/setlistfm/{user}", **_feed_route)
async def setlistfm_feed(
    user: str = Path(...),
    credentials: SetlistfmCredentials = Depends(require_credentials("setlistfm")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await SetlistfmService(credentials, client=client).fetch_items(user)


@router.get("/strava/activities", **_feed_route)
async def strava_activities(
    credentials: StravaCredentials = Depends(require_credentials("strava")),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    service = StravaService(
        credentials,
        client=client,
        thumbnail_template=settings.STRAVA_THUMBNAIL_URL_TEMPLATE,
    )
    return await service.fetch_items()


@router.get("/strava/stats", status_code=FEED_STATUS, response_model=Dict[str, Any])
async def strava_stats(
    credentials: StravaCredentials = Depends(require_credentials("strava")),
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Raw Strava athlete stats; not a list of feed items."""
    service = StravaService(
        credentials,
        client=client,
        thumbnail_template=settings.STRAVA_THUMBNAIL_URL_TEMPLATE,
    )
    return await service.fetch_stats()


@router.get("/rescuetime/daily", **_feed_route)
async def rescuetime_daily(
    credentials: RescuetimeCredentials = Depends(require_credentials("rescuetime")),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await RescuetimeService(credentials, client=client).fetch_items()
