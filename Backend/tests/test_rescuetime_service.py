from __future__ import annotations

import re

import httpx
import pytest

from app.config import RescuetimeCredentials
from app.models.upstream import RescuetimeDay
from fixtures import make_rescuetime_day
from services.rescuetime_service import CATEGORIES, RescuetimeService, breakdown, day_to_item, scale_factor

DAILY_URL = re.compile(r"https://www\.rescuetime\.com/anapi/daily_summary_feed\?key=rt-key")


def test_scale_factor():
    assert scale_factor([4.0, 2.0, 0.0]) == 25
    assert scale_factor([0.0, 0.0]) == 0.0
    assert scale_factor([]) == 0.0


def test_busiest_category_is_one_hundred():
    day = RescuetimeDay.model_validate(
        make_rescuetime_day(software_development_hours=4.0, communication_and_scheduling_hours=2.0)
    )
    points = {point.label: point.value for point in breakdown(day)}

    assert len(points) == len(CATEGORIES)
    assert points["software development"] == 100
    assert points["communication and scheduling"] == 50
    assert points["news"] == 0


def test_all_zero_day_has_zero_bars():
    day = RescuetimeDay.model_validate(make_rescuetime_day())
    assert [point.value for point in breakdown(day)] == [0] * len(CATEGORIES)


def test_null_hours_count_as_zero():
    day = RescuetimeDay.model_validate(make_rescuetime_day(news_hours=None, utilities_hours=1.5))
    points = {point.label: point.value for point in breakdown(day)}
    assert points["utilities"] == 100
    assert points["news"] == 0


@pytest.mark.asyncio
async def test_daily_summary_items(httpx_mock):
    httpx_mock.add_response(
        url=DAILY_URL,
        json=[
            make_rescuetime_day("2024-03-02", software_development_hours=3.0, entertainment_hours=1.0),
            make_rescuetime_day("2024-03-01", business_hours=2.0),
        ],
    )

    async with httpx.AsyncClient() as client:
        items = await RescuetimeService(RescuetimeCredentials(key="rt-key"), client=client).fetch_items()

    first = items[0].to_payload()
    assert first["title"] == "2024-03-02"
    assert first["url"] == ""
    assert first["sub"] == "6h 0m"
    assert {"label": "entertainment", "value": 33} in first["data"]
    assert items[1].data[CATEGORIES.index("business")].value == 100


def test_breakdown_values_serialize_as_integers():
    day = RescuetimeDay.model_validate(
        make_rescuetime_day(software_development_hours=4.0, communication_and_scheduling_hours=2.0)
    )
    payload = day_to_item(day).to_payload()
    assert {"label": "software development", "value": 100} in payload["data"]
    assert all(type(point["value"]) is int for point in payload["data"])
