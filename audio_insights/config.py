"""Where the OpenAI API key comes from.

Nothing is written to disk: a key typed into the sidebar lives only on the
session's analysis service.
"""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv


API_KEY_ENV_VAR = "OPENAI_API_KEY"


def resolve_api_key(dotenv_path: Optional[str] = None) -> Optional[str]:
    """
    Read the API key from the environment, loading a ``.env`` file first.

    Variables already set in the environment win over the ``.env`` file.

    Args:
        dotenv_path: Explicit ``.env`` location; searched for upwards from the
            working directory when omitted

    Returns:
        The key, or None when it is unset or blank
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    api_key = os.getenv(API_KEY_ENV_VAR, "").strip()
    return api_key or None
