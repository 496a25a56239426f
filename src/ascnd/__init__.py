"""Client library for the Ascnd leaderboard API.

Requests travel over gRPC (service ascnd.v1.AscndService) with MessagePack
payloads, see ascnd.messaging. That encoding is not wire-compatible with the
protobuf messages served by the hosted API at https://api.ascnd.gg, so the
default base_url is http://localhost:50051; point ASCND_BASE_URL at a service
that speaks MessagePack.
"""

from ascnd.client import AscndClient
from ascnd.exceptions import AscndApiError, AscndError, ClientClosedError, ConfigurationError
from ascnd.models import (
    AnticheatResult,
    AnticheatViolation,
    BracketInfo,
    GetLeaderboardRequest,
    GetLeaderboardResponse,
    GetPlayerRankRequest,
    GetPlayerRankResponse,
    LeaderboardEntry,
    SubmitScoreRequest,
    SubmitScoreResponse,
    ViewInfo,
)
from ascnd.settings import AscndClientOptions, load_options
from ascnd.status import http_status_for

__all__ = [
    "AnticheatResult",
    "AnticheatViolation",
    "AscndApiError",
    "AscndClient",
    "AscndClientOptions",
    "AscndError",
    "BracketInfo",
    "ClientClosedError",
    "ConfigurationError",
    "GetLeaderboardRequest",
    "GetLeaderboardResponse",
    "GetPlayerRankRequest",
    "GetPlayerRankResponse",
    "LeaderboardEntry",
    "SubmitScoreRequest",
    "SubmitScoreResponse",
    "ViewInfo",
    "http_status_for",
    "load_options",
]
