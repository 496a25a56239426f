"""Endpoint URL validation and gRPC target resolution."""

from dataclasses import dataclass
from urllib.parse import urlsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Endpoint:
    """A validated service endpoint, ready to open a channel against."""

    host: str
    port: int
    secure: bool

    @property
    def target(self) -> str:
        """host:port string in the form gRPC channel constructors expect."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"


def parse_endpoint(url: str) -> Endpoint:
    """Parse an absolute http(s) URL into an Endpoint.

    Raises ValueError for blank values, non-http(s) schemes, a missing host
    or a malformed port.
    """
    stripped = url.strip()
    if not stripped:
        raise ValueError("base_url is required.")

    parts = urlsplit(stripped)
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise ValueError("base_url must be a valid HTTP or HTTPS URL.")

    try:
        port = parts.port
    except ValueError as e:
        raise ValueError("base_url must be a valid HTTP or HTTPS URL.") from e

    return Endpoint(
        host=parts.hostname,
        port=port if port is not None else _DEFAULT_PORTS[scheme],
        secure=scheme == "https",
    )
