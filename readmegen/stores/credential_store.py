"""Persistence for the relay access key reused across generations."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Dict, Optional, Protocol

_STORE_VERSION = 1

RELAY_KEY = "relay_api_key"


class CredentialStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryCredentialStore:
    """Keeps credentials for the lifetime of the process."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonCredentialStore:
    """Stores credentials in a small JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, str]] = {}
        self._load(path)

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if not entry:
            return None
        value = entry.get("value")
        return value if isinstance(value, str) and value else None

    def set(self, key: str, value: str) -> None:
        self._entries[key] = {
            "value": value,
            "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        }
        self._persist()

    # ------------------------------------------------------------------
    # Internal helpers

    def _persist(self) -> None:
        payload = {"version": _STORE_VERSION, "entries": self._entries}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _STORE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str) and isinstance(raw, dict) and isinstance(raw.get("value"), str)
        }


__all__ = ["CredentialStore", "JsonCredentialStore", "MemoryCredentialStore", "RELAY_KEY"]
