# pandora_client/exceptions.py
from __future__ import annotations


class PandoraError(Exception):
    def __init__(self, detail: str = "", status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.sent: int | None = None    # points ingested before a batched post failed


class InvalidArgument(PandoraError, ValueError):
    """Raised before any I/O when a caller passes a value the SDK cannot encode."""


class BadRequest(PandoraError):
    pass


class Unauthorized(PandoraError):
    pass


class NotFound(PandoraError):
    pass


class Conflict(PandoraError):
    pass


class ServerError(PandoraError):
    pass


class TransportError(PandoraError):
    pass
