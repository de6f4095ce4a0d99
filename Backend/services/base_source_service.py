from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.core.logging import get_logger
from app.models.feed_items import FeedItem
from services.payload_unwrappers import PayloadFormat, unwrap
from services.source_errors import PayloadShapeError, UpstreamError

logger = get_logger()

MAX_ITEMS = 10

M = TypeVar("M", bound=BaseModel)


def truncate(items: Iterable[FeedItem], limit: int = MAX_ITEMS) -> List[FeedItem]:
    out: List[FeedItem] = []
    if limit <= 0:
        return out
    for item in items:
        out.append(item)
        if len(out) >= limit:
            break
    return out


class BaseSourceService:
    """
    Shared base class for upstream source adapters.

    Owns nothing but a reference to the shared ``httpx.AsyncClient``; the
    client's lifecycle belongs to the application. Subclasses set
    ``source`` and ``payload_format`` and implement ``fetch_items``.
    """

    source: str = "unknown"
    payload_format: PayloadFormat = PayloadFormat.JSON

    def __init__(self, *, client: httpx.AsyncClient) -> None:
        self._client = client
        self._log = logger.bind(module=f"{self.source}_service")

    async def fetch_items(self, subject: str, report_type: str) -> List[FeedItem]:  # pragma: no cover - interface
        raise NotImplementedError

    # ---- HTTP -------------------------------------------------------------

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            self._log.warning(
                "upstream_request_failed",
                url=url,
                method=method,
                status_code=status,
            )
            raise UpstreamError(
                self.source,
                f"{self.source} upstream answered {status}",
                upstream_status=status,
            ) from exc
        except httpx.HTTPError as exc:
            self._log.warning(
                "upstream_request_failed",
                url=url,
                method=method,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise UpstreamError(self.source, f"{self.source} upstream unreachable: {type(exc).__name__}") from exc
        return response

    async def fetch_payload(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        payload_format: Optional[PayloadFormat] = None,
    ) -> Any:
        """GET ``url`` and return the unwrapped body."""
        response = await self._send("GET", url, params=params, headers=headers)
        return unwrap(response.text, payload_format or self.payload_format, source=self.source)

    async def post_payload(
        self,
        url: str,
        *,
        data: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[httpx.Auth | tuple] = None,
    ) -> Any:
        response = await self._send("POST", url, data=data, headers=headers, auth=auth)
        return unwrap(response.text, PayloadFormat.JSON, source=self.source)

    # ---- Shape checks -----------------------------------------------------

    def parse_item(self, schema: Type[M], raw: Any) -> M:
        try:
            return schema.model_validate(raw)
        except ValidationError as exc:
            raise PayloadShapeError(
                self.source,
                f"unexpected {schema.__name__} shape from {self.source}: {exc.error_count()} error(s)",
            ) from exc

    def map_items(self, raw_items: Iterable[Any], schema: Type[M], mapper: Callable[[M], FeedItem]) -> List[FeedItem]:
        """Validate and map at most ``MAX_ITEMS`` raw entries, keeping upstream order."""
        items: List[FeedItem] = []
        for raw in raw_items:
            if len(items) >= MAX_ITEMS:
                break
            items.append(mapper(self.parse_item(schema, raw)))
        return items

    def expect_mapping(self, payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise PayloadShapeError(self.source, f"expected a JSON object from {self.source}, got {type(payload).__name__}")
        return payload

    def expect_list(self, payload: Any) -> List[Any]:
        if not isinstance(payload, list):
            raise PayloadShapeError(self.source, f"expected a JSON array from {self.source}, got {type(payload).__name__}")
        return payload
