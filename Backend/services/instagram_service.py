from __future__ import annotations

from typing import List

import httpx

from app.config import InstagramCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import InstagramMedia
from services.base_source_service import MAX_ITEMS, BaseSourceService
from services.field_extractor import extract_list, extract_text, path

INSTAGRAM_API_BASE = "https://api.instagram.com/v1"
MEDIA_PATH = path("data")
LOW_RES_IMAGE_PATH = path("low_resolution", "url")


def media_to_item(media: InstagramMedia) -> FeedItem:
    return FeedItem(
        title=(media.caption.text if media.caption else None) or "",
        url=media.link,
        image_url=extract_text(media.images or {}, LOW_RES_IMAGE_PATH),
    )


class InstagramService(BaseSourceService):
    source = "instagram"

    def __init__(self, credentials: InstagramCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def fetch_items(self, subject: str, report_type: str = "recent") -> List[FeedItem]:
        payload = await self.fetch_payload(
            f"{INSTAGRAM_API_BASE}/users/{subject}/media/recent/",
            params={"access_token": self._credentials.access_token, "count": MAX_ITEMS},
        )
        media = extract_list(self.expect_mapping(payload), MEDIA_PATH)
        items = self.map_items(media, InstagramMedia, media_to_item)
        self._log.info("instagram_fetch_success", user=subject, items_returned=len(items))
        return items
