"""Tests for credential persistence."""

from __future__ import annotations

import json
from pathlib import Path

from readmegen.stores import RELAY_KEY, JsonCredentialStore, MemoryCredentialStore


def test_json_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "state" / "credentials.json"
    store = JsonCredentialStore(path)
    assert store.get(RELAY_KEY) is None

    store.set(RELAY_KEY, "relay-key")

    assert path.exists()
    assert JsonCredentialStore(path).get(RELAY_KEY) == "relay-key"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    assert data["entries"][RELAY_KEY]["value"] == "relay-key"
    assert data["entries"][RELAY_KEY]["updated_at"].endswith("Z")


def test_json_store_ignores_corrupt_or_foreign_files(tmp_path: Path) -> None:
    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    foreign = tmp_path / "foreign.json"
    foreign.write_text(json.dumps({"version": 99, "entries": {RELAY_KEY: {"value": "x"}}}), encoding="utf-8")

    assert JsonCredentialStore(corrupt).get(RELAY_KEY) is None
    assert JsonCredentialStore(foreign).get(RELAY_KEY) is None


def test_memory_store() -> None:
    store = MemoryCredentialStore({"a": "1"})
    store.set("b", "2")

    assert store.get("a") == "1"
    assert store.get("b") == "2"
    assert store.get("c") is None
