"""Submit a score with JSON metadata, then read the current period back.

Usage: ASCND_API_KEY=... ASCND_BASE_URL=... LEADERBOARD_ID=... python examples/metadata_periods.py
"""

import asyncio
import json

from _env import require_env

from ascnd import AscndClient, GetLeaderboardRequest, SubmitScoreRequest
from ascnd.formatting import format_entry_with_metadata
from ascnd.logging import setup_logging


async def main() -> None:
    api_key = require_env("ASCND_API_KEY")
    leaderboard_id = require_env("LEADERBOARD_ID")

    metadata = {
        "character": "warrior",
        "level": 15,
        "powerups": ["speed", "shield"],
    }

    async with AscndClient(api_key) as client:
        result = await client.submit_score(
            SubmitScoreRequest(
                leaderboard_id=leaderboard_id,
                player_id="player_meta_001",
                score=75000,
                metadata=json.dumps(metadata).encode(),
            ),
        )
        print(f"Score submitted with metadata! Rank: #{result.rank}\n")

        leaderboard = await client.get_leaderboard(
            GetLeaderboardRequest(leaderboard_id=leaderboard_id, limit=5, period="current"),
        )

    print(f"Current Period: {leaderboard.period_start}")
    if leaderboard.period_end is not None:
        print(f"Ends: {leaderboard.period_end}")
    print("\nTop 5 with metadata:\n")

    for entry in leaderboard.entries:
        for line in format_entry_with_metadata(entry):
            print(line)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
