# core/supabase_client.py
# Supabase client for the analytics mirror

import logging

from django.conf import settings
from supabase import create_client

logger = logging.getLogger("portal")

_supabase_client = None


def get_supabase_client():
    """
    Get the Supabase client instance (singleton pattern).
    Uses service_role key for admin access.

    Returns None when credentials are not configured, so callers can treat
    the managed backend as optional.
    """
    global _supabase_client

    if _supabase_client is None:
        url = getattr(settings, "SUPABASE_URL", None)
        key = getattr(settings, "SUPABASE_SERVICE_ROLE_KEY", None)

        if not url or not key:
            logger.debug("Supabase credentials not configured")
            return None

        try:
            _supabase_client = create_client(url, key)
            logger.info("Supabase client initialized")
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            return None

    return _supabase_client


def reset_supabase_client():
    """Drop the cached client (used when settings change, e.g. in tests)."""
    global _supabase_client
    _supabase_client = None


def push_user_claims(external_id, role, department=None) -> bool:
    """
    Write role/department into the identity provider's app_metadata so
    the next token it issues carries them.

    Returns False when there is nothing to push to (no client or the user
    never signed in through the provider). Provider failures raise.
    """
    client = get_supabase_client()
    if not client or not external_id:
        return False

    client.auth.admin.update_user_by_id(
        external_id,
        {"app_metadata": {"role": role, "department": department}},
    )
    logger.info(f"Pushed claims to Supabase user {external_id}: role={role}, department={department}")
    return True
