"""Supabase client for the order store."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.info("Supabase credentials not configured; orders are stored on disk")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Expected table layout:
#
# create table orders (
#     id text primary key,
#     customer_name text not null,
#     delivery_address text not null,
#     latitude double precision,
#     longitude double precision,
#     status text not null,
#     created_at timestamptz not null default now()
# );
