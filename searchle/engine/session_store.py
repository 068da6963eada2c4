"""Persisted session slot.

One logical record per storage key holds the entries, the attempt count and
the fingerprint of the puzzle they belong to. Reads are best effort: anything
that fails to decode, or belongs to another puzzle, is reported as absent.
Writes never raise.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..core.constants import STORAGE_KEY
from ..core.exceptions import PersistenceCorruptError
from ..core.models import SessionRecord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/sessions")


class SessionStore(Protocol):
    """Key-value slot for the current session."""

    def load(self, fingerprint: str) -> Optional[SessionRecord]:
        ...

    def save(self, record: SessionRecord) -> None:
        ...

    def clear(self) -> None:
        ...


def decode_record(raw: str) -> SessionRecord:
    try:
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError("session record must be a JSON object")
        return SessionRecord.from_jsonable(payload)
    except (ValueError, TypeError) as exc:
        raise PersistenceCorruptError(f"Unreadable session record: {exc}") from exc


def encode_record(record: SessionRecord) -> str:
    return json.dumps(record.to_jsonable(), ensure_ascii=False)


def accept_record(raw: Optional[str], fingerprint: str, source: str) -> Optional[SessionRecord]:
    """Decode ``raw`` and keep it only when it belongs to ``fingerprint``."""

    if not raw:
        LOGGER.debug("Session store miss: %s", source)
        return None
    try:
        record = decode_record(raw)
    except PersistenceCorruptError as exc:
        LOGGER.warning("Ignoring corrupt session in %s: %s", source, exc)
        return None
    if record.puzzle_fingerprint != fingerprint:
        LOGGER.info("Stored session in %s belongs to another puzzle", source)
        return None
    LOGGER.debug("Session store hit: %s (%d attempts)", source, record.attempts)
    return record


class MemorySessionStore:
    """In-process store keeping the encoded record, like browser local storage."""

    def __init__(self, storage_key: str = STORAGE_KEY) -> None:
        self.storage_key = storage_key
        self._items: Dict[str, str] = {}

    def load(self, fingerprint: str) -> Optional[SessionRecord]:
        return accept_record(self._items.get(self.storage_key), fingerprint, self.storage_key)

    def save(self, record: SessionRecord) -> None:
        self._items[self.storage_key] = encode_record(record)

    def clear(self) -> None:
        self._items.pop(self.storage_key, None)

    def raw(self) -> Optional[str]:
        return self._items.get(self.storage_key)

    def put_raw(self, text: str) -> None:
        self._items[self.storage_key] = text


class JsonFileSessionStore:
    """Keep the session record as a JSON document on disk."""

    def __init__(
        self,
        store_dir: Path | str = DEFAULT_STORE_DIR,
        storage_key: str = STORAGE_KEY,
        path: Path | str | None = None,
    ) -> None:
        if path is not None:
            self.path = Path(path)
        else:
            slug = re.sub(r"[^A-Za-z0-9_.-]+", "_", storage_key).strip("_") or "session"
            self.path = Path(store_dir) / f"{slug}.json"

    def load(self, fingerprint: str) -> Optional[SessionRecord]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raw = None
        except OSError as exc:
            LOGGER.warning("Session store read error (%s): %s", self.path, exc)
            return None
        return accept_record(raw, fingerprint, self.path.name)

    def save(self, record: SessionRecord) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(encode_record(record), encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("Skipping session save (%s): %s", self.path, exc)

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            LOGGER.warning("Unable to clear session store (%s): %s", self.path, exc)
