from __future__ import annotations

import os

DEFAULT_TEXT_SEARCH_CONFIG = "english"


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def text_search_config() -> str:
    """PostgreSQL text search configuration used by the full-text predicate."""
    return os.getenv("TEXT_SEARCH_CONFIG") or DEFAULT_TEXT_SEARCH_CONFIG
