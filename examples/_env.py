"""Environment helpers shared by the example programs."""

import os
import sys

from dotenv import load_dotenv


def require_env(name: str) -> str:
    """Return an environment variable, exiting with a message when it is unset."""
    load_dotenv()
    value = os.environ.get(name)
    if not value:
        print(f"{name} not set")
        sys.exit(1)
    return value
