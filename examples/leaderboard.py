"""Print the top 10 entries of a leaderboard.

Usage: ASCND_API_KEY=... ASCND_BASE_URL=... LEADERBOARD_ID=... python examples/leaderboard.py
"""

import asyncio

from _env import require_env

from ascnd import AscndClient
from ascnd.formatting import format_leaderboard_table
from ascnd.logging import setup_logging


async def main() -> None:
    api_key = require_env("ASCND_API_KEY")
    leaderboard_id = require_env("LEADERBOARD_ID")

    async with AscndClient(api_key) as client:
        leaderboard = await client.fetch_leaderboard(leaderboard_id, limit=10)

    for line in format_leaderboard_table(leaderboard):
        print(line)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
