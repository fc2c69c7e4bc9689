# teamhub/storage/supabase_client.py
from typing import Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client

from teamhub.config.settings import settings
from teamhub.models.collection import TeamCollection
from .base_store import BaseStore, StorageError


class SupabaseStore(BaseStore):
    """Keeps the serialized collection in a Supabase key/value table.

    Expected table layout: ``key text primary key, value jsonb``.
    """

    def __init__(
        self,
        key: str,
        table: Optional[str] = None,
        client: Optional[AsyncClient] = None,
    ):
        super().__init__(key)
        self.table = table or settings.supabase_table
        self._client = client

    async def _get_client(self) -> AsyncClient:
        if self._client:
            return self._client

        if not settings.supabase_url or not settings.supabase_key:
            logger.critical("Supabase URL or Key not configured in settings.")
            raise StorageError("Supabase configuration missing.")

        logger.debug(
            f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
        )
        self._client = await create_async_client(
            settings.supabase_url, settings.supabase_key
        )
        logger.success("Async Supabase client initialized successfully.")
        return self._client

    async def load(self) -> TeamCollection:
        client = await self._get_client()
        try:
            response: APIResponse = (
                await client.table(self.table)
                .select("value")
                .eq("key", self.key)
                .execute()
            )
        except APIError as e:
            logger.error(f"Supabase API error loading '{self.key}': {e.message}")
            return TeamCollection()

        if not response.data:
            logger.info(f"No saved teams under '{self.key}' in {self.table}.")
            return TeamCollection()

        try:
            collection = TeamCollection.from_blob(response.data[0]["value"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Stored blob under '{self.key}' is unreadable: {e}")
            return TeamCollection()
        logger.info(f"Loaded {len(collection)} team(s) from Supabase table {self.table}")
        return collection

    async def save(self, collection: TeamCollection) -> bool:
        client = await self._get_client()
        row = {"key": self.key, "value": collection.to_blob()}
        try:
            await client.table(self.table).upsert(row).execute()
        except APIError as e:
            logger.error(f"Error during async upsert to {self.table}: {e.message}")
            logger.debug(f"Full APIError details: {e}")
            return False
        logger.success(f"Successfully saved {len(collection)} team(s) to {self.table}.")
        return True

    async def clear(self) -> bool:
        client = await self._get_client()
        try:
            await client.table(self.table).delete().eq("key", self.key).execute()
        except APIError as e:
            logger.error(f"Error clearing '{self.key}' from {self.table}: {e.message}")
            return False
        logger.info(f"Cleared stored teams under '{self.key}'")
        return True
