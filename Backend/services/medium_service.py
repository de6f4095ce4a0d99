"""Medium posts for a user (guarded JSON)."""

from __future__ import annotations

from typing import List

import httpx

from app.models.feed_items import FeedItem
from app.models.upstream import MediumPost
from services.base_source_service import BaseSourceService
from services.field_extractor import extract_mapping, path
from services.payload_unwrappers import PayloadFormat

MEDIUM_BASE = "https://medium.com"
POSTS_PATH = path("payload", "references", "Post")


class MediumService(BaseSourceService):
    source = "medium"
    payload_format = PayloadFormat.GUARDED_JSON

    def __init__(self, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)

    async def fetch_items(self, subject: str, report_type: str = "latest") -> List[FeedItem]:
        handle = subject.lstrip("@")
        payload = await self.fetch_payload(
            f"{MEDIUM_BASE}/@{handle}/{report_type}",
            params={"format": "json"},
            headers={"Accept": "application/json"},
        )

        # references.Post is keyed by post id; insertion order is the feed order
        posts = extract_mapping(payload, POSTS_PATH).values()

        def _to_item(post: MediumPost) -> FeedItem:
            return FeedItem(title=post.title, url=f"{MEDIUM_BASE}/@{handle}/{post.unique_slug}")

        items = self.map_items(posts, MediumPost, _to_item)
        self._log.info("medium_fetch_success", user=handle, items_returned=len(items))
        return items
