"""Submit a single score and print the resulting rank.

Usage: ASCND_API_KEY=... ASCND_BASE_URL=... LEADERBOARD_ID=... python examples/submit_score.py
"""

import asyncio

from _env import require_env

from ascnd import AscndClient
from ascnd.formatting import format_submission
from ascnd.logging import setup_logging


async def main() -> None:
    api_key = require_env("ASCND_API_KEY")
    leaderboard_id = require_env("LEADERBOARD_ID")

    async with AscndClient(api_key) as client:
        result = await client.submit(leaderboard_id, "player_example_001", 42500)

    for line in format_submission(result):
        print(line)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
