"""
Supabase client factory.
Clients are built per use and passed explicitly to the services that need them.
"""

from supabase import create_client, Client

from finance_app.config import get_settings


def create_user_client(access_token: str) -> Client:
    """
    Client acting as the caller.

    Row-level security applies to every query made with it.
    """
    settings = get_settings()
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    client.postgrest.auth(access_token)
    return client


def create_service_client() -> Client:
    """Service-role client used for storage writes."""
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_service_key)
