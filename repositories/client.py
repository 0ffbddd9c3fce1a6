"""
Supabase client initialization.

This module contains *only* the database connection setup. It exposes a
shared anonymous client (used for auth calls) and a factory for per-operator
clients whose PostgREST requests carry the operator's access token.

Environment variables required:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase anon (public) API key; row access is granted by
  the operator's token, not by this key
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, create_client  # type: ignore[import-not-found]

# Load environment variables from .env file in the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def get_supabase_settings() -> Tuple[str, str]:
    """Read credentials from the environment to avoid hard-coding secrets in code."""

    supabase_url = os.getenv("SUPABASE_URL")
    supabase_key = os.getenv("SUPABASE_KEY")

    if not supabase_url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not supabase_key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    return supabase_url, supabase_key


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Shared client for auth calls (sign-in, user lookup, sign-out)."""

    url, key = get_supabase_settings()
    return create_client(url, key)


def create_operator_client(access_token: str) -> Client:
    """
    Build a client whose table queries run as the signed-in operator.

    The shared client from get_supabase() never carries an operator token.
    """

    url, key = get_supabase_settings()
    client = create_client(url, key)
    client.postgrest.auth(access_token)
    return client


def close_operator_client(client: Client) -> None:
    """Close the PostgREST connections of a client from create_operator_client()."""

    client.postgrest.session.close()


__all__ = [
    "get_supabase",
    "get_supabase_settings",
    "create_operator_client",
    "close_operator_client",
]
