"""
Goodreads shelves (XML API v2).

The XML is converted to the attributes/text-node tree, so every child
element is a list and leaf values sit at index 0.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from app.config import GoodreadsCredentials
from app.models.feed_items import FeedItem
from services.base_source_service import MAX_ITEMS, BaseSourceService, truncate
from services.field_extractor import MISSING, ExtractionPath, extract, extract_list, path
from services.payload_unwrappers import XML_TEXT_KEY, PayloadFormat
from services.source_errors import PayloadShapeError

GOODREADS_BASE = "https://www.goodreads.com"
REVIEWS_PATH = path("GoodreadsResponse", "reviews", 0, "review")
BOOK_PATH = path("book", 0)
TITLE_PATH = path("title", 0)
LINK_PATH = path("link", 0)
IMAGE_PATH = path("image_url", 0)
AUTHOR_PATH = path("authors", 0, "author", 0, "name", 0)


def _text_node(node: Any, node_path: ExtractionPath) -> Optional[str]:
    value = extract(node, node_path)
    # elements that carry attributes keep their text under "_"
    if isinstance(value, dict):
        value = value.get(XML_TEXT_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class GoodreadsService(BaseSourceService):
    source = "goodreads"
    payload_format = PayloadFormat.XML

    def __init__(self, credentials: GoodreadsCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    def review_to_item(self, review: Any) -> FeedItem:
        book = extract(review, BOOK_PATH)
        title = _text_node(book, TITLE_PATH)
        if book is MISSING or title is None:
            raise PayloadShapeError(self.source, "goodreads review without book title")
        return FeedItem(
            title=title,
            sub=_text_node(book, AUTHOR_PATH),
            url=_text_node(book, LINK_PATH) or "",
            image_url=_text_node(book, IMAGE_PATH),
        )

    async def fetch_items(self, subject: str, report_type: str = "read") -> List[FeedItem]:
        payload = await self.fetch_payload(
            f"{GOODREADS_BASE}/review/list/{subject}.xml",
            params={
                "key": self._credentials.key,
                "v": 2,
                "shelf": report_type,
                "per_page": MAX_ITEMS,
                "sort": "date_updated",
            },
        )
        reviews = extract_list(payload, REVIEWS_PATH)
        items = truncate(self.review_to_item(review) for review in reviews)
        self._log.info("goodreads_fetch_success", user=subject, shelf=report_type, items_returned=len(items))
        return items
