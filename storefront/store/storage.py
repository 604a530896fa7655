import logging
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from sqlalchemy import Column, String, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class StorageError(Exception):
    pass


class Storage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self) -> None:
        self._data = dict[str, str]()

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        # percent-encoded so distinct keys never share a file
        return self.directory / f"{quote(key, safe='')}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"failed to read {path}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".tmp")
            tmp.write_text(value, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StorageError(f"failed to write {path}") from e

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"failed to remove {path}") from e


class StorageOrm(Base):
    __tablename__ = "storage"
    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)


class SqlStorage:
    def __init__(self, database_url: str) -> None:
        self.engine = create_engine(database_url, future=True)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False, future=True)
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to initialise storage table at {database_url}") from e
        logger.info("SQL storage ready at %s", self.engine.url.render_as_string(hide_password=True))

    def get_item(self, key: str) -> str | None:
        try:
            with self.SessionLocal() as session:
                orm = session.get(StorageOrm, key)
                return orm.value if orm is not None else None
        except SQLAlchemyError as e:
            raise StorageError(f"failed to read key {key!r}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self.SessionLocal.begin() as session:
                orm = session.get(StorageOrm, key)
                if orm is None:
                    session.add(StorageOrm(key=key, value=value))
                else:
                    orm.value = value
        except SQLAlchemyError as e:
            raise StorageError(f"failed to write key {key!r}") from e

    def remove_item(self, key: str) -> None:
        try:
            with self.SessionLocal.begin() as session:
                orm = session.get(StorageOrm, key)
                if orm is not None:
                    session.delete(orm)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to remove key {key!r}") from e
