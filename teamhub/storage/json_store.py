# teamhub/storage/json_store.py
import json
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from teamhub.models.collection import TeamCollection
from .base_store import BaseStore


class JsonFileStore(BaseStore):
    """Key/value store backed by a local JSON file."""

    def __init__(self, path: Path, key: str):
        super().__init__(key)
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # The previous file stays intact until the new one is complete
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        finally:
            tmp_path.unlink(missing_ok=True)

    async def load(self) -> TeamCollection:
        try:
            blob = self._read_all().get(self.key)
            if blob is None:
                return TeamCollection()
            collection = TeamCollection.from_blob(blob)
        except (OSError, ValueError, TypeError) as e:
            # Covers JSONDecodeError and pydantic ValidationError
            logger.error(f"Error loading saved teams from {self.path}: {e}")
            return TeamCollection()
        logger.info(f"Loaded {len(collection)} team(s) from {self.path}")
        return collection

    async def save(self, collection: TeamCollection) -> bool:
        try:
            try:
                data = self._read_all()
            except ValueError:
                logger.warning(f"Overwriting unreadable store file {self.path}")
                data = {}
            data[self.key] = collection.to_blob()
            self._write_all(data)
        except (OSError, TypeError) as e:
            logger.error(f"Failed to write teams to {self.path}: {e}")
            return False
        logger.debug(f"Saved {len(collection)} team(s) to {self.path}")
        return True

    async def clear(self) -> bool:
        try:
            data = self._read_all()
            if data.pop(self.key, None) is not None:
                self._write_all(data)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to clear {self.key} in {self.path}: {e}")
            return False
        logger.info(f"Cleared stored teams under '{self.key}'")
        return True
