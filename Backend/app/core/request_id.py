# Backend/app/core/request_id.py
from __future__ import annotations

import uuid
import contextvars
from typing import Optional

_request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)

REQUEST_ID_HEADER = "X-Request-Id"


def new_request_id() -> str:
    return uuid.uuid4().hex


def set_request_id(request_id: Optional[str]) -> contextvars.Token:
    return _request_id_ctx.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()


def reset_request_id(token: contextvars.Token) -> None:
    """Restore the previous value (usually None) after a request has finished."""
    _request_id_ctx.reset(token)
