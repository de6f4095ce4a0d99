# Backend/tests/fixtures/__init__.py
"""
Upstream payload factories for the source adapter tests.

Factory functions return plain dicts shaped like the real API answers:
- make_repo()
- make_tweet()
- make_lastfm_track() / make_lastfm_album() / make_lastfm_artist()
- make_medium_body()
- make_instagram_media()
- make_setlist()
- make_strava_activity()
- make_rescuetime_day()
- make_goodreads_xml()
"""

from typing import Any, Dict, List, Optional
import json

from services.payload_unwrappers import JSON_GUARD_PREFIX


def make_repo(owner: str = "octocat", name: str = "hello-world") -> Dict[str, Any]:
    return {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "html_url": f"https://github.com/{owner}/{name}",
        "pushed_at": "2024-01-26T19:06:43Z",
        "private": False,
    }


def make_tweet(
    tweet_id: str = "1050118621198921728",
    text: str = "Hallo wereld",
    screen_name: str = "alice",
    avatar: Optional[str] = "https://pbs.twimg.com/profile_images/1/alice_normal.jpg",
) -> Dict[str, Any]:
    user: Dict[str, Any] = {"id_str": "6253282", "screen_name": screen_name}
    if avatar is not None:
        user["profile_image_url_https"] = avatar
    return {
        "created_at": "Wed Oct 10 20:19:24 +0000 2018",
        "id": int(tweet_id),
        "id_str": tweet_id,
        "text": text,
        "user": user,
    }


def _lastfm_images(base: str) -> List[Dict[str, str]]:
    return [
        {"#text": f"{base}/34s.png", "size": "small"},
        {"#text": f"{base}/64s.png", "size": "medium"},
        {"#text": f"{base}/174s.png", "size": "large"},
        {"#text": f"{base}/300x300.png", "size": "extralarge"},
    ]


def make_lastfm_recent_track(name: str = "Bohemian Rhapsody", artist: str = "Queen") -> Dict[str, Any]:
    return {
        "name": name,
        "url": f"https://www.last.fm/music/{artist}/_/{name}",
        "artist": {"#text": artist, "mbid": ""},
        "album": {"#text": "A Night at the Opera", "mbid": ""},
        "image": _lastfm_images("https://lastfm.freetls.fastly.net/i/u"),
        "date": {"uts": "1700000000", "#text": "14 Nov 2023, 22:13"},
    }


def make_lastfm_track(name: str = "Everlong", artist: str = "Foo Fighters", playcount: str = "12") -> Dict[str, Any]:
    return {
        "name": name,
        "url": f"https://www.last.fm/music/{artist}/_/{name}",
        "artist": {"#text": artist, "mbid": ""},
        "playcount": playcount,
        "@attr": {"rank": "1"},
    }


def make_lastfm_album(name: str = "Abbey Road", artist: str = "The Beatles", playcount: str = "7") -> Dict[str, Any]:
    return {
        "name": name,
        "url": f"https://www.last.fm/music/{artist}/{name}",
        "artist": {"#text": artist, "mbid": ""},
        "playcount": playcount,
        "@attr": {"rank": "1"},
    }


def make_lastfm_artist(name: str = "Radiohead", playcount: str = "42") -> Dict[str, Any]:
    return {
        "name": name,
        "url": f"https://www.last.fm/music/{name}",
        "mbid": "",
        "playcount": playcount,
        "@attr": {"rank": "1"},
    }


def make_medium_body(posts: List[Dict[str, str]], *, guarded: bool = True) -> str:
    references = {
        f"post{i}": {"id": f"post{i}", "title": post["title"], "uniqueSlug": post["slug"]}
        for i, post in enumerate(posts)
    }
    body = json.dumps({"success": True, "payload": {"references": {"Post": references}}})
    return f"{JSON_GUARD_PREFIX}{body}" if guarded else body


def make_instagram_media(
    media_id: str = "1",
    caption: Optional[str] = "Zonsondergang",
    low_res: Optional[str] = "https://scontent.cdninstagram.com/low.jpg",
) -> Dict[str, Any]:
    images: Dict[str, Any] = {
        "thumbnail": {"url": "https://scontent.cdninstagram.com/thumb.jpg", "width": 150, "height": 150},
    }
    if low_res is not None:
        images["low_resolution"] = {"url": low_res, "width": 320, "height": 320}
    return {
        "id": media_id,
        "link": f"https://www.instagram.com/p/{media_id}/",
        "caption": {"text": caption} if caption is not None else None,
        "images": images,
    }


def make_setlist(
    artist: str = "Pearl Jam",
    venue: str = "Ziggo Dome",
    date: str = "25-06-2022",
) -> Dict[str, Any]:
    return {
        "id": "63de4613",
        "eventDate": date,
        "artist": {"mbid": "83b9cbe7", "name": artist},
        "venue": {"id": "4bd6ca6e", "name": venue, "city": {"name": "Amsterdam"}},
        "url": f"https://www.setlist.fm/setlist/{artist.lower().replace(' ', '-')}/2022/63de4613.html",
    }


def make_strava_activity(
    activity_id: int = 154504250376823,
    name: str = "Ochtendloop",
    distance: float = 10500.0,
    moving_time: int = 3725,
    average_speed: float = 5.0,
) -> Dict[str, Any]:
    return {
        "id": activity_id,
        "name": name,
        "distance": distance,
        "moving_time": moving_time,
        "elapsed_time": moving_time + 60,
        "average_speed": average_speed,
        "type": "Run",
        "start_date": "2024-03-01T07:00:00Z",
    }


def make_rescuetime_day(date: str = "2024-03-01", **hours: float) -> Dict[str, Any]:
    day: Dict[str, Any] = {
        "id": 1709251200,
        "date": date,
        "productivity_pulse": 71,
        "total_hours": sum(value or 0.0 for value in hours.values()),
        "total_duration_formatted": "6h 0m",
    }
    for key, value in hours.items():
        day[key] = value
    return day


def make_goodreads_xml(books: List[Dict[str, str]]) -> str:
    reviews = "".join(
        f"""
        <review>
          <id>{i}</id>
          <book>
            <id type="integer">{i}</id>
            <title>{book['title']}</title>
            <image_url>{book.get('image_url', '')}</image_url>
            <link><![CDATA[{book['link']}]]></link>
            <authors>
              <author><id>1</id><name>{book.get('author', '')}</name></author>
            </authors>
          </book>
        </review>"""
        for i, book in enumerate(books, start=1)
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<GoodreadsResponse>
  <Request><authentication>true</authentication><key><![CDATA[abc]]></key></Request>
  <reviews start="1" end="{len(books)}" total="{len(books)}">{reviews}
  </reviews>
</GoodreadsResponse>
"""
