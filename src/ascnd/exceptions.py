"""Error hierarchy raised by the Ascnd client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import grpc


class AscndError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AscndError, ValueError):
    """Invalid client options or a missing required argument."""


class ClientClosedError(AscndError, RuntimeError):
    """An RPC was attempted on a client that has already been closed."""

    def __init__(self) -> None:
        super().__init__("AscndClient is closed")


class AscndApiError(AscndError):
    """The Ascnd API returned an error or the transport failed.

    status_code is the HTTP equivalent of the gRPC status, detail is the
    message supplied by the server and grpc_status is the raw gRPC code
    (None when the failure did not come from gRPC).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        detail: str,
        grpc_status: grpc.StatusCode | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
        self.grpc_status = grpc_status
