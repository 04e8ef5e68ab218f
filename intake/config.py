import os
from dataclasses import dataclass

from dotenv import load_dotenv

from intake.expiry import EXPIRY_WINDOW_DAYS
from intake.store import FormStore, LocalFormStore, SupabaseFormStore

DEFAULT_STORE_PATH = "data/forms_store.json"


@dataclass
class Settings:
    store: str = "local"
    store_path: str = DEFAULT_STORE_PATH
    supabase_url: str = ""
    supabase_key: str = ""
    window_days: int = EXPIRY_WINDOW_DAYS


def load_settings() -> Settings:
    """Read settings from the environment, after loading .env if present."""
    load_dotenv()

    window = os.getenv("EXPIRY_WINDOW_DAYS", str(EXPIRY_WINDOW_DAYS))
    try:
        window_days = int(window)
    except ValueError:
        raise RuntimeError(f"EXPIRY_WINDOW_DAYS must be an integer, got {window!r}")

    return Settings(
        store=os.getenv("FORMS_STORE", "local").lower(),
        store_path=os.getenv("FORMS_STORE_PATH", DEFAULT_STORE_PATH),
        supabase_url=os.getenv("SUPABASE_URL", ""),
        supabase_key=os.getenv("SUPABASE_KEY", ""),
        window_days=window_days,
    )


def build_store(settings: Settings) -> FormStore:
    if settings.store == "local":
        return LocalFormStore(settings.store_path)

    if settings.store == "supabase":
        from intake.supabase_client import create_supabase

        return SupabaseFormStore(create_supabase(settings.supabase_url, settings.supabase_key))

    raise RuntimeError(f"FORMS_STORE must be 'local' or 'supabase', got {settings.store!r}")
