"""
設定管理モジュール

関連クラス:
  - store.SQLiteKeyValueStore / store.InMemoryKeyValueStore: store設定を使用
  - server.dependencies: 起動時にこの設定を読み込む
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .store import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


@dataclass
class StoreConfig:
    """Key-Value Store設定"""

    backend: str = "sqlite"  # sqlite | memory
    db_path: str = "data/planner.db"


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # ストア設定
    store: StoreConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/planner.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.store is None:
            self.store = StoreConfig()
        env_db_path = os.getenv("PLANNER_DB_PATH")
        if env_db_path:
            self.store.db_path = env_db_path

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（ファイルが無い場合はデフォルト値）
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)
        if not config_path.exists():
            return cls()

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        store_data = yaml_data.get("store", {})
        log_data = yaml_data.get("log", {})

        return cls(
            store=StoreConfig(
                backend=store_data.get("backend", "sqlite"),
                db_path=store_data.get("db_path", "data/planner.db"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/planner.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            store=StoreConfig(
                backend=os.getenv("PLANNER_STORE_BACKEND", "sqlite"),
                db_path=os.getenv("PLANNER_DB_PATH", "data/planner.db"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/planner.log"),
        )

    def resolve_db_path(self) -> Path:
        """相対パスはプロジェクトルート基準で解決する"""
        path = Path(self.store.db_path)
        return path if path.is_absolute() else PROJECT_ROOT / path

    def build_store(self) -> KeyValueStore:
        """設定に応じたKey-Value Storeを生成"""
        if self.store.backend == "memory":
            return InMemoryKeyValueStore()
        if self.store.backend == "sqlite":
            return SQLiteKeyValueStore(self.resolve_db_path())
        raise ValueError(f"Unknown store backend: {self.store.backend}")
