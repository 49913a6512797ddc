"""Key-Value Store

プロジェクト/Todoを保存するための文字列キー・文字列値のストア。
複数キーのトランザクションやcompare-and-swapは提供しない。

キー構成:
    project:<projectId>         プロジェクトレコード
    project:list                全プロジェクトIDのインデックス
    project:<projectId>:todos   プロジェクト毎のTodo IDインデックス
    todo:<todoId>               Todoレコード
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import closing
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

PROJECT_INDEX_KEY = "project:list"


def project_key(project_id: str) -> str:
    return f"project:{project_id}"


def project_todos_key(project_id: str) -> str:
    return f"project:{project_id}:todos"


def todo_key(todo_id: str) -> str:
    return f"todo:{todo_id}"


class KeyValueStore(ABC):
    """非同期Key-Value Storeのインターフェース"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """値を取得（存在しない場合はNone）"""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """値を書き込む（既存値は上書き）"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """キーを削除（存在しない場合は何もしない）"""


class InMemoryKeyValueStore(KeyValueStore):
    """dictベースのストア。テストとmemoryバックエンド用。"""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class SQLiteKeyValueStore(KeyValueStore):
    """SQLiteベースのストア。ブロッキング呼び出しは別スレッドで実行する。"""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _initialize(self) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        logger.debug("kv_store initialized at %s", self.db_path)

    def _get_sync(self, key: str) -> Optional[str]:
        with closing(self._connect()) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def _put_sync(self, key: str, value: str) -> None:
        with closing(self._connect()) as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            conn.commit()

    def _delete_sync(self, key: str) -> None:
        with closing(self._connect()) as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get_sync, key)

    async def put(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._put_sync, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._delete_sync, key)

    def keys(self) -> list[str]:
        with closing(self._connect()) as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]
