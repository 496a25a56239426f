"""Request and response messages exchanged with the Ascnd service.

Every model is frozen: a response is built once per call and handed to the
caller. Optional wire fields are modelled as `X | None`.
"""

from pydantic import BaseModel, ConfigDict, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
DEFAULT_LEADERBOARD_LIMIT = 10


class _Message(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================================
# Shared
# ============================================================================


class BracketInfo(_Message):
    """Skill bracket a player was placed in."""

    id: str
    name: str
    color: str | None = None  # hex color, e.g. "#FFD700"


class ViewInfo(_Message):
    """Filtered view of a leaderboard (for example a platform or region)."""

    slug: str
    name: str


# ============================================================================
# SubmitScore
# ============================================================================


class SubmitScoreRequest(_Message):
    leaderboard_id: str
    player_id: str
    score: int = Field(ge=INT64_MIN, le=INT64_MAX)
    metadata: bytes | None = None
    idempotency_key: str | None = None


class AnticheatViolation(_Message):
    flag_type: str
    reason: str


class AnticheatResult(_Message):
    passed: bool
    violations: tuple[AnticheatViolation, ...] = ()
    action: str = ""  # none, flag, shadow_ban or reject


class SubmitScoreResponse(_Message):
    score_id: str
    rank: int
    is_new_best: bool
    was_deduplicated: bool = False
    anticheat: AnticheatResult | None = None


# ============================================================================
# GetLeaderboard
# ============================================================================


class GetLeaderboardRequest(_Message):
    leaderboard_id: str
    limit: int = DEFAULT_LEADERBOARD_LIMIT
    cursor: str | None = None  # next_cursor from a previous page
    period: str | None = None  # "current", "previous" or an ISO timestamp
    view_slug: str | None = None
    # Centre the page on this rank. Windowing is decided by the server.
    around_rank: int | None = None


class LeaderboardEntry(_Message):
    rank: int
    player_id: str
    score: int
    submitted_at: str
    metadata: bytes | None = None
    bracket: BracketInfo | None = None


class GetLeaderboardResponse(_Message):
    entries: tuple[LeaderboardEntry, ...] = ()
    total_entries: int = 0
    has_more: bool = False
    next_cursor: str | None = None
    period_start: str | None = None
    period_end: str | None = None
    view: ViewInfo | None = None


# ============================================================================
# GetPlayerRank
# ============================================================================


class GetPlayerRankRequest(_Message):
    leaderboard_id: str
    player_id: str
    period: str | None = None
    view_slug: str | None = None


class GetPlayerRankResponse(_Message):
    """A player's standing. rank is None when the player has never scored."""

    rank: int | None = None
    score: int | None = None
    best_score: int | None = None
    total_entries: int = 0
    percentile: str | None = None  # e.g. "top 5%"
    period_start: str | None = None
    period_end: str | None = None
    global_rank: int | None = None
    bracket: BracketInfo | None = None
    view: ViewInfo | None = None

    @property
    def has_rank(self) -> bool:
        return self.rank is not None
