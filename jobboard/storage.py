"""Local key-value persistence and the per-user applied-jobs store.

``LocalStorage`` keeps string values under string keys in one JSON file,
rewritten whole on every write (last write wins, no merge between
processes). ``AppliedJobStore`` is the keyed abstraction the tracker talks
to, so the mechanism behind it can change without touching tracker logic.
"""
from __future__ import annotations

import fcntl
import json
from abc import ABC, abstractmethod
from pathlib import Path

from jobboard.config import DATA_DIR
from jobboard.errors import StorageError
from jobboard.log import get_logger
from jobboard.models import AppliedJob

log = get_logger(__name__)

LOCAL_STORAGE_FILE: Path = DATA_DIR / "local_storage.json"
APPLIED_JOBS_PREFIX = "appliedJobs_"


def _lock(f, exclusive: bool = True) -> None:
    """Advisory file lock (Unix fcntl)."""
    try:
        op = fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH
        fcntl.flock(f.fileno(), op)
    except (OSError, AttributeError):
        pass


def _unlock(f) -> None:
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, AttributeError):
        pass


class MemoryStorage:
    """In-memory storage with the same interface as ``LocalStorage``."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class LocalStorage:
    """String key/value slots persisted to a JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path or LOCAL_STORAGE_FILE)

    def _parse(self, text: str) -> dict[str, str]:
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            log.error("Local storage %s is corrupt, starting empty: %s", self.path.name, exc)
            return {}
        if not isinstance(data, dict):
            log.error("Local storage %s does not hold an object, starting empty", self.path.name)
            return {}
        return data

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            _lock(f, exclusive=False)
            text = f.read()
            _unlock(f)
        return self._parse(text)

    def _update(self, key: str, value: str | None) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a+", encoding="utf-8") as f:
            _lock(f)
            f.seek(0)
            items = self._parse(f.read())
            if value is None:
                items.pop(key, None)
            else:
                items[key] = value
            f.seek(0)
            f.truncate()
            json.dump(items, f, indent=2)
            f.flush()
            _unlock(f)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        self._update(key, value)

    def remove_item(self, key: str) -> None:
        self._update(key, None)

    def keys(self) -> list[str]:
        return list(self._read_all())


class AppliedJobStore(ABC):
    @abstractmethod
    def get(self, user_id: str) -> list[AppliedJob]:
        pass

    @abstractmethod
    def put(self, user_id: str, jobs: list[AppliedJob]) -> None:
        pass


class LocalAppliedJobStore(AppliedJobStore):
    """Applied jobs kept under ``appliedJobs_<userId>`` in a key-value storage."""

    def __init__(self, storage: LocalStorage | MemoryStorage | None = None) -> None:
        self.storage = storage if storage is not None else LocalStorage()

    @staticmethod
    def key_for(user_id: str) -> str:
        return f"{APPLIED_JOBS_PREFIX}{user_id}"

    def get(self, user_id: str) -> list[AppliedJob]:
        raw = self.storage.get_item(self.key_for(user_id))
        if not raw:
            return []
        try:
            return [AppliedJob.from_dict(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as exc:
            log.error("Failed to load applied jobs for user %s: %s", user_id, exc)
            raise StorageError(f"Applied jobs for user {user_id} are unreadable") from exc

    def put(self, user_id: str, jobs: list[AppliedJob]) -> None:
        payload = json.dumps([j.to_dict() for j in jobs])
        self.storage.set_item(self.key_for(user_id), payload)
        log.debug("Persisted %d applied job(s) for user %s", len(jobs), user_id)
