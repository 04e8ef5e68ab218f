from supabase import Client, create_client


def create_supabase(url: str, key: str) -> Client:
    if not url or not key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set in your .env file")
    return create_client(url, key)
