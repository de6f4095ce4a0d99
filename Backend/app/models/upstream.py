"""
Per-source upstream payload schemas.

These describe only the fields the adapters read. Unknown keys are ignored
so upstream additions never break a feed; a missing required field is a
payload-shape failure for that source.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---- GitHub -----------------------------------------------------------------

class GithubRepo(UpstreamModel):
    full_name: str
    html_url: str


# ---- Twitter ----------------------------------------------------------------

class TwitterUser(UpstreamModel):
    screen_name: str
    profile_image_url_https: Optional[str] = None


class Tweet(UpstreamModel):
    id_str: str
    text: Optional[str] = None
    full_text: Optional[str] = None
    user: TwitterUser


class TwitterToken(UpstreamModel):
    token_type: str
    access_token: str


# ---- Last.fm ----------------------------------------------------------------

class LastfmText(UpstreamModel):
    """Last.fm wraps plain values as ``{"#text": ..., "mbid": ...}``."""

    text: str = Field(default="", alias="#text")


class LastfmImage(UpstreamModel):
    text: str = Field(default="", alias="#text")
    size: Optional[str] = None


class LastfmRecentTrack(UpstreamModel):
    name: str
    url: str = ""
    artist: LastfmText = Field(default_factory=LastfmText)
    album: Optional[LastfmText] = None
    image: List[LastfmImage] = Field(default_factory=list)


class LastfmChartTrack(UpstreamModel):
    name: str
    url: str = ""
    artist: LastfmText = Field(default_factory=LastfmText)
    playcount: Union[int, str] = 0


class LastfmChartAlbum(UpstreamModel):
    name: str
    url: str = ""
    artist: LastfmText = Field(default_factory=LastfmText)
    playcount: Union[int, str] = 0


class LastfmChartArtist(UpstreamModel):
    name: str
    url: str = ""
    playcount: Union[int, str] = 0


# ---- Medium -----------------------------------------------------------------

class MediumPost(UpstreamModel):
    title: str = ""
    unique_slug: str = Field(alias="uniqueSlug")


# ---- Instagram --------------------------------------------------------------

class InstagramCaption(UpstreamModel):
    text: Optional[str] = None


class InstagramMedia(UpstreamModel):
    link: str = ""
    caption: Optional[InstagramCaption] = None
    # kept loose: image variants are looked up by path and may be absent
    images: Optional[Dict[str, Any]] = None


# ---- setlist.fm -------------------------------------------------------------

class SetlistArtist(UpstreamModel):
    name: str = ""


class SetlistCity(UpstreamModel):
    name: str = ""


class SetlistVenue(UpstreamModel):
    name: str = ""
    city: Optional[SetlistCity] = None


class Setlist(UpstreamModel):
    artist: SetlistArtist
    venue: SetlistVenue
    event_date: str = Field(default="", alias="eventDate")
    url: str = ""


# ---- Strava -----------------------------------------------------------------

class StravaActivity(UpstreamModel):
    id: int
    name: str = ""
    distance: float = 0.0          # meters
    moving_time: int = 0           # seconds
    average_speed: float = 0.0     # m/s
    type: Optional[str] = None


class StravaAthlete(UpstreamModel):
    id: int


# ---- RescueTime -------------------------------------------------------------

class RescuetimeDay(UpstreamModel):
    date: str
    total_duration_formatted: Optional[str] = None
    software_development_hours: Optional[float] = 0.0
    communication_and_scheduling_hours: Optional[float] = 0.0
    social_networking_hours: Optional[float] = 0.0
    reference_and_learning_hours: Optional[float] = 0.0
    design_and_composition_hours: Optional[float] = 0.0
    entertainment_hours: Optional[float] = 0.0
    news_hours: Optional[float] = 0.0
    shopping_hours: Optional[float] = 0.0
    utilities_hours: Optional[float] = 0.0
    business_hours: Optional[float] = 0.0
    uncategorized_hours: Optional[float] = 0.0
