"""Plain-text rendering of API results, shared by the example programs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ascnd.models import GetLeaderboardResponse, GetPlayerRankResponse, LeaderboardEntry, SubmitScoreResponse

PLAYER_COLUMN_WIDTH = 18
SCORE_COLUMN_WIDTH = 10


def format_submission(result: SubmitScoreResponse) -> list[str]:
    lines = [
        "Score submitted!",
        f"  Rank: #{result.rank}",
        f"  New personal best: {'Yes!' if result.is_new_best else 'No'}",
    ]
    if result.anticheat is not None and not result.anticheat.passed:
        lines.append(f"  Anticheat: {result.anticheat.action}")
        lines.extend(f"    - {v.flag_type}: {v.reason}" for v in result.anticheat.violations)
    return lines


def format_leaderboard_table(page: GetLeaderboardResponse) -> list[str]:
    """Render a page as a fixed-width table with a header and a trailing hint."""
    lines = [
        f"Top {len(page.entries)} Leaderboard ({page.total_entries} total players)",
        "",
        "Rank  | Player             | Score",
        "------+--------------------+------------",
    ]
    for entry in page.entries:
        player = entry.player_id[:PLAYER_COLUMN_WIDTH].ljust(PLAYER_COLUMN_WIDTH)
        lines.append(f"{entry.rank:>4}  | {player} | {entry.score:>{SCORE_COLUMN_WIDTH}}")
    if page.has_more:
        lines.extend(["", "... and more entries"])
    return lines


def format_entry_with_metadata(entry: LeaderboardEntry) -> list[str]:
    lines = [f"#{entry.rank} {entry.player_id}: {entry.score}"]
    if entry.metadata is not None:
        lines.append(f"   Metadata: {entry.metadata.decode('utf-8', errors='replace')}")
    return lines


def format_player_rank(result: GetPlayerRankResponse) -> str:
    if not result.has_rank:
        return "No score recorded yet"
    text = f"#{result.rank} with {result.score}"
    if result.percentile is not None:
        text += f" ({result.percentile})"
    return text
