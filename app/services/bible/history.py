"""Recent search terms, kept in client-local key/value storage."""

import json
from pathlib import Path
from typing import Protocol

import structlog

from app.core.config import settings

logger = structlog.get_logger(__name__)

HISTORY_KEY = "bible_search_history"


class HistoryStorage(Protocol):
    """Minimal key/value store holding JSON strings."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Key/value storage that lives as long as the process."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Key/value storage kept in a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except ValueError:
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


class SearchHistory:
    """Most-recent-first list of distinct search terms.

    Each client (user) keeps its own list under ``<key>:<client_id>``; calls
    without a client id use the bare key, which suits single-client callers
    such as the CLI.

    Terms are deduplicated case-insensitively, keeping the casing of the most
    recent save. Unreadable or corrupt storage reads as an empty history and
    write failures are logged; neither is raised to the caller.
    """

    def __init__(
        self,
        storage: HistoryStorage | None = None,
        key: str = HISTORY_KEY,
        max_entries: int | None = None,
    ):
        self.storage = storage if storage is not None else JsonFileStorage(settings.history_file)
        self.key = key
        self.max_entries = max_entries if max_entries is not None else settings.history_max_entries

    def _key(self, client_id: str | None) -> str:
        return f"{self.key}:{client_id}" if client_id else self.key

    def get(self, client_id: str | None = None) -> list[str]:
        """Return up to ``max_entries`` saved terms, most recent first."""
        try:
            raw = self.storage.get(self._key(client_id))
            if not raw:
                return []
            history = json.loads(raw)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("search_history_unreadable", error=str(e))
            return []

        if not isinstance(history, list):
            return []
        return [h for h in history if isinstance(h, str)][: self.max_entries]

    def save(self, term: str, client_id: str | None = None) -> None:
        """Move ``term`` to the front of the history."""
        if not term or not term.strip():
            return
        term = term.strip()

        history = [h for h in self.get(client_id) if h.lower() != term.lower()]
        history.insert(0, term)

        try:
            self.storage.set(self._key(client_id), json.dumps(history[: self.max_entries]))
        except (OSError, TypeError, ValueError) as e:
            logger.error("search_history_save_failed", error=str(e))
