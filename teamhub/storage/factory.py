from teamhub.config.settings import AppSettings
from .base_store import BaseStore
from .json_store import JsonFileStore
from .supabase_client import SupabaseStore


def create_store(settings: AppSettings) -> BaseStore:
    """Builds the store selected by ``storage_backend``."""
    if settings.storage_backend == "supabase":
        return SupabaseStore(key=settings.storage_key, table=settings.supabase_table)
    return JsonFileStore(path=settings.storage_path, key=settings.storage_key)
