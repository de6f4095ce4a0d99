from __future__ import annotations

from typing import Optional


class SourceError(RuntimeError):
    """
    Failure while serving a request from an upstream source.

    Every subclass maps to one error kind and one HTTP status so the API
    layer can answer with a structured body instead of hanging or leaking
    a bare 500.
    """

    kind = "source_error"
    status_code = 502

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source

    def to_payload(self) -> dict:
        return {"detail": str(self), "error_kind": self.kind, "source": self.source}


class UpstreamError(SourceError):
    """Network failure or non-2xx answer from the upstream API."""

    kind = "upstream_transport"

    def __init__(self, source: str, message: str, *, upstream_status: Optional[int] = None):
        super().__init__(source, message)
        self.upstream_status = upstream_status

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.upstream_status is not None:
            payload["upstream_status"] = self.upstream_status
        return payload


class PayloadShapeError(SourceError):
    """The upstream answered, but not with something we can map."""

    kind = "payload_shape"


class CredentialsError(SourceError):
    """No credential block configured for the requested source."""

    kind = "credentials_missing"
    status_code = 500
