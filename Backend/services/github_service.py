"""
GitHub repositories, most recently pushed first.

The ``{type}`` path segment is accepted for URL symmetry with the other
sources but every value maps to the same report.
"""

from __future__ import annotations

from typing import List

import httpx

from app.config import GithubCredentials
from app.models.feed_items import FeedItem
from app.models.upstream import GithubRepo
from services.base_source_service import MAX_ITEMS, BaseSourceService

GITHUB_API_BASE = "https://api.github.com"


def _repo_to_item(repo: GithubRepo) -> FeedItem:
    return FeedItem(title=repo.full_name, url=repo.html_url)


class GithubService(BaseSourceService):
    source = "github"

    def __init__(self, credentials: GithubCredentials, *, client: httpx.AsyncClient) -> None:
        super().__init__(client=client)
        self._credentials = credentials

    async def fetch_items(self, subject: str, report_type: str = "repos") -> List[FeedItem]:
        payload = await self.fetch_payload(
            f"{GITHUB_API_BASE}/users/{subject}/repos",
            params={"sort": "pushed", "per_page": MAX_ITEMS},
            headers={
                "Authorization": f"token {self._credentials.token}",
                "Accept": "application/vnd.github+json",
            },
        )
        items = self.map_items(self.expect_list(payload), GithubRepo, _repo_to_item)
        self._log.info("github_fetch_success", user=subject, items_returned=len(items))
        return items
