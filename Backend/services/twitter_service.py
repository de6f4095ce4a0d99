"""
Twitter timelines and favorites (API v1.1, app-only auth).

Every request exchanges the consumer key/secret for an app-only bearer
token first, then reads the timeline. Nothing is cached across requests.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

import httpx

from app.config import TwitterCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import Tweet, TwitterToken
from services.base_source_service import MAX_ITEMS, BaseSourceService
from services.source_errors import PayloadShapeError

TWITTER_API_BASE = "https://api.twitter.com"
TOKEN_URL = f"{TWITTER_API_BASE}/oauth2/token"


class TwitterReportType(str, Enum):
    TIMELINE = "timeline"
    FAVORITES = "favorites"

    @classmethod
    def parse(cls, value: str) -> "TwitterReportType":
        # Anything that is not "favorites" is the user's own timeline.
        return cls.FAVORITES if value == cls.FAVORITES.value else cls.TIMELINE


ENDPOINTS: Dict[TwitterReportType, str] = {
    TwitterReportType.TIMELINE: f"{TWITTER_API_BASE}/1.1/statuses/user_timeline.json",
    TwitterReportType.FAVORITES: f"{TWITTER_API_BASE}/1.1/favorites/list.json",
}

_missing = set(TwitterReportType) - set(ENDPOINTS)
if _missing:
    raise RuntimeError(f"twitter report types without endpoint: {sorted(m.value for m in _missing)}")


def tweet_to_item(tweet: Tweet) -> FeedItem:
    # Favorites belong to other authors: link through the tweet's own author.
    handle = tweet.user.screen_name
    return FeedItem(
        title=tweet.full_text or tweet.text or "",
        url=f"https://twitter.com/{handle}/status/{tweet.id_str}",
        image_url=tweet.user.profile_image_url_https or None,
    )


class TwitterService(BaseSourceService):
    source = "twitter"

    def __init__(self, credentials: TwitterCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def _bearer_token(self) -> str:
        payload = await self.post_payload(
            TOKEN_URL,
            data={"grant_type": "client_credentials"},
            auth=(self._credentials.key, self._credentials.secret),
        )
        token = self.parse_item(TwitterToken, payload)
        if token.token_type.lower() != "bearer":
            raise PayloadShapeError(self.source, f"unexpected token type '{token.token_type}'")
        return token.access_token

    async def fetch_items(self, subject: str, report_type: str = "timeline") -> List[FeedItem]:
        kind = TwitterReportType.parse(report_type)
        token = await self._bearer_token()
        payload = await self.fetch_payload(
            ENDPOINTS[kind],
            params={"screen_name": subject, "count": MAX_ITEMS, "tweet_mode": "extended"},
            headers={"Authorization": f"Bearer {token}"},
        )
        items = self.map_items(self.expect_list(payload), Tweet, tweet_to_item)
        self._log.info("twitter_fetch_success", user=subject, report=kind.value, items_returned=len(items))
        return items
