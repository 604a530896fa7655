import os
from pathlib import Path

from storefront.store.basket_store import DEFAULT_STORAGE_KEY
from storefront.store.storage import FileStorage, MemoryStorage, SqlStorage, Storage

BASKET_STORAGE = os.getenv("BASKET_STORAGE", "memory")
BASKET_STORAGE_DIR = os.getenv("BASKET_STORAGE_DIR", "./.storage")
BASKET_STORAGE_KEY = os.getenv("BASKET_STORAGE_KEY", DEFAULT_STORAGE_KEY)
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite+pysqlite:///./storefront.db",
)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_webhook_secret() -> str | None:
    return os.getenv("STRIPE_WEBHOOK_SECRET") or None


def build_storage(kind: str = BASKET_STORAGE) -> Storage:
    if kind == "memory":
        return MemoryStorage()
    if kind == "file":
        return FileStorage(Path(BASKET_STORAGE_DIR))
    if kind == "sql":
        return SqlStorage(DATABASE_URL)
    raise ValueError(f"unknown BASKET_STORAGE {kind!r}, expected memory, file or sql")
