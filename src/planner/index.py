"""ID Index

ストア上の1キーにJSON配列として保存される「順序付きIDの集合」。
更新はすべて 読み出し → 新しい配列の計算 → 配列全体の書き戻し で行う。
ストアにcompare-and-swapが無いため、同じインデックスへの並行更新では
後勝ちとなり追加/削除が失われることがある。
"""

from __future__ import annotations

import json
import logging
from typing import List

from .exceptions import StoreError
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class IdIndex:
    """挿入順を保つIDインデックス"""

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    async def read(self) -> List[str]:
        raw = await self.store.get(self.key)
        if raw is None:
            return []
        try:
            ids = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"Index {self.key} is not valid JSON") from exc
        if not isinstance(ids, list):
            raise StoreError(f"Index {self.key} is not a list")
        return [str(item) for item in ids]

    async def _write(self, ids: List[str]) -> None:
        await self.store.put(self.key, json.dumps(ids))

    async def add(self, entity_id: str) -> List[str]:
        ids = await self.read()
        if entity_id in ids:
            return ids
        ids.append(entity_id)
        await self._write(ids)
        logger.debug("Index %s: added %s (%d entries)", self.key, entity_id, len(ids))
        return ids

    async def remove(self, entity_id: str) -> List[str]:
        ids = await self.read()
        remaining = [item for item in ids if item != entity_id]
        await self._write(remaining)
        logger.debug("Index %s: removed %s (%d entries)", self.key, entity_id, len(remaining))
        return remaining

    async def clear(self) -> None:
        await self.store.delete(self.key)
