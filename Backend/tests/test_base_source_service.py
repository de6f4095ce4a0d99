from __future__ import annotations

import httpx
import pytest

from app.models.feed_items import FeedItem
from app.models.upstream import GithubRepo
from services.base_source_service import MAX_ITEMS, BaseSourceService, truncate
from services.source_errors import PayloadShapeError, UpstreamError


class _ProbeService(BaseSourceService):
    source = "probe"


def _items(n: int):
    for i in range(n):
        yield FeedItem(title=str(i))


def test_truncate_keeps_first_items_in_order():
    assert [item.title for item in truncate(_items(25))] == [str(i) for i in range(MAX_ITEMS)]
    assert len(truncate(_items(3))) == 3
    assert truncate(_items(5), limit=0) == []


def test_truncate_does_not_pull_past_the_limit():
    pulled = []

    def tracking():
        for item in _items(20):
            pulled.append(item)
            yield item

    truncate(tracking())
    assert len(pulled) == MAX_ITEMS


@pytest.mark.asyncio
async def test_map_items_stops_at_limit_before_validating():
    raw = [{"full_name": f"o/r{i}", "html_url": "u"} for i in range(MAX_ITEMS)] + [{"broken": True}]

    async with httpx.AsyncClient() as client:
        items = _ProbeService(client=client).map_items(raw, GithubRepo, lambda repo: FeedItem(title=repo.full_name))

    assert len(items) == MAX_ITEMS


@pytest.mark.asyncio
async def test_shape_checks_name_the_source():
    async with httpx.AsyncClient() as client:
        service = _ProbeService(client=client)
        with pytest.raises(PayloadShapeError) as excinfo:
            service.expect_list({"not": "a list"})
        assert excinfo.value.source == "probe"
        with pytest.raises(PayloadShapeError):
            service.expect_mapping([])


@pytest.mark.asyncio
async def test_timeout_is_upstream_error(httpx_mock):
    httpx_mock.add_exception(httpx.ReadTimeout("slow"), url="https://probe.example.test/feed")

    async with httpx.AsyncClient() as client:
        with pytest.raises(UpstreamError) as excinfo:
            await _ProbeService(client=client).fetch_payload("https://probe.example.test/feed")

    assert excinfo.value.upstream_status is None
    assert excinfo.value.to_payload() == {
        "detail": "probe upstream unreachable: ReadTimeout",
        "error_kind": "upstream_transport",
        "source": "probe",
    }
