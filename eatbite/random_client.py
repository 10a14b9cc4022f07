"""
- HTTP call with clear fallback
Get a shuffled 0..9 sequence from random.org and keep the first 3 digits as
the bot's secret. If anything goes wrong (no internet, timeout, bad response),
we fall back to a local shuffle so the game still works.
"""

import logging
from typing import Optional

import requests

from .config import get_settings
from .engine import generate_random_code, validate_code
from .types import CODE_LENGTH, Code

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/sequences/"


def fetch_code(timeout: Optional[float] = None) -> Code:
    settings = get_settings()
    if not settings.use_random_org:
        return generate_random_code()

    # Parameters to send to random.org: a random permutation of 0..9
    params = {
        "min": 0,
        "max": 9,
        "col": 1,           # one number per line
        "format": "plain",  # plain text response
        "rnd": "new",       # always generate new numbers
    }

    # keep network quick; if it takes too long, we will just fallback
    timeout_seconds = timeout if timeout is not None else settings.random_org_timeout

    try:
        response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
        response.raise_for_status()

        # The body looks like:
        #   4\n0\n9\n...\n
        digits = [int(line) for line in response.text.splitlines() if line.strip() != ""]
        if sorted(digits) != list(range(10)):
            raise ValueError(f"random.org returned {digits!r}, expected a permutation of 0..9.")

        return validate_code(digits[:CODE_LENGTH])

    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable, using local shuffle: %s", exc)
        return generate_random_code()
