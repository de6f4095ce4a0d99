from __future__ import annotations

from typing import List

import httpx

from app.config import SetlistfmCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import Setlist
from services.base_source_service import BaseSourceService
from services.field_extractor import extract_list, path

SETLISTFM_API_BASE = "https://api.setlist.fm/rest/1.0"
SETLISTS_PATH = path("setlist")


def setlist_to_item(setlist: Setlist) -> FeedItem:
    return FeedItem(
        title=f"{setlist.artist.name} @ {setlist.venue.name} / {setlist.event_date}",
        url=setlist.url,
    )


class SetlistfmService(BaseSourceService):
    """Concerts a setlist.fm user attended, newest first."""

    source = "setlistfm"

    def __init__(self, credentials: SetlistfmCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def fetch_items(self, subject: str, report_type: str = "attended") -> List[FeedItem]:
        payload = await self.fetch_payload(
            f"{SETLISTFM_API_BASE}/user/{subject}/attended",
            params={"p": 1},
            headers={"x-api-key": self._credentials.apikey, "Accept": "application/json"},
        )
        setlists = extract_list(payload, SETLISTS_PATH)
        items = self.map_items(setlists, Setlist, setlist_to_item)
        self._log.info("setlistfm_fetch_success", user=subject, items_returned=len(items))
        return items
