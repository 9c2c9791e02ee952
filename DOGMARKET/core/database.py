# file: DOGMARKET/core/database.py

import os
import json
import logging
from typing import Dict, List, Optional

import aiofiles
from fastapi import Request

from DOGMARKET.core.config import COLLECTIONS

logger = logging.getLogger("core.database")


def empty_document() -> Dict[str, List[dict]]:
    return {name: [] for name in COLLECTIONS}


class JsonDocumentStore:
    """
    Whole-document JSON store.

    `data` holds every collection in memory. `read()` reloads it from disk and
    `write()` persists it back. There is no isolation between requests: the
    last writer wins.
    """

    def __init__(self, path: str):
        self.path = path
        self.data: Dict[str, List[dict]] = empty_document()

    def collection(self, name: str) -> List[dict]:
        if name not in COLLECTIONS:
            raise KeyError(f"Unknown collection: {name}")
        return self.data.setdefault(name, [])

    async def read(self) -> Dict[str, List[dict]]:
        if not os.path.exists(self.path):
            self.data = empty_document()
            return self.data

        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()

        try:
            loaded = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError as e:
            logger.exception("Corrupt document store %s: %s", self.path, e)
            raise

        if not isinstance(loaded, dict):
            raise ValueError(f"Document store {self.path} must contain a JSON object")

        for name in COLLECTIONS:
            if not isinstance(loaded.get(name), list):
                loaded[name] = []
        self.data = loaded
        return self.data

    async def write(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        tmp_path = f"{self.path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(self.data, indent=2))
        os.replace(tmp_path, self.path)

    async def init(self) -> None:
        await self.read()
        await self.write()
        logger.info(
            "Document store ready at %s (%s)",
            self.path,
            ", ".join(f"{name}={len(self.data[name])}" for name in COLLECTIONS),
        )


def get_store(request: Request) -> JsonDocumentStore:
    """FastAPI dependency returning the store attached to the running app."""
    store: Optional[JsonDocumentStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store is not configured on app.state")
    return store


__all__ = ["JsonDocumentStore", "empty_document", "get_store"]
