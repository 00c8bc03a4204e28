"""Persistence collaborators for player saves.

Stores deal in the JSON-ready dicts produced by ``PlayerProgress.to_dict()``;
they know nothing about the economy. Failures raise :class:`StoreError` and
are never retried here.
"""
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A save could not be read or written."""


class ProgressStore(ABC):
    """Loads and saves one progress dict per player id."""

    @abstractmethod
    def load(self, player_id: str) -> dict[str, Any] | None: ...

    @abstractmethod
    def save(self, player_id: str, data: dict[str, Any]) -> None: ...

    def save_many(self, records: dict[str, dict[str, Any]]) -> None:
        """Save several players; stores that rewrite everything override this."""
        for player_id, data in records.items():
            self.save(player_id, data)

    @abstractmethod
    def player_ids(self) -> list[str]: ...


class MemoryStore(ProgressStore):
    """Process-local store; keeps deep copies so callers can't alias saves."""

    def __init__(self) -> None:
        self._players: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def load(self, player_id: str) -> dict[str, Any] | None:
        with self._lock:
            data = self._players.get(player_id)
            return copy.deepcopy(data) if data is not None else None

    def save(self, player_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._players[player_id] = copy.deepcopy(data)

    def player_ids(self) -> list[str]:
        with self._lock:
            return list(self._players)


class JsonFileStore(ProgressStore):
    """All saves in one JSON document: ``{"players": {id: progress}}``.

    The file is read once on construction and rewritten on every save through
    a temporary file in the same directory, so a crash mid-write leaves the
    previous document intact. Each write costs the whole document, so batch
    updates go through :meth:`save_many` to write once.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._players: dict[str, dict[str, Any]] = self._read()

    def load(self, player_id: str) -> dict[str, Any] | None:
        with self._lock:
            data = self._players.get(player_id)
            return copy.deepcopy(data) if data is not None else None

    def save(self, player_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            previous = self._players.get(player_id)
            self._players[player_id] = copy.deepcopy(data)
            try:
                self._write()
            except StoreError:
                if previous is None:
                    del self._players[player_id]
                else:
                    self._players[player_id] = previous
                raise

    def save_many(self, records: dict[str, dict[str, Any]]) -> None:
        if not records:
            return
        with self._lock:
            previous = dict(self._players)
            for player_id, data in records.items():
                self._players[player_id] = copy.deepcopy(data)
            try:
                self._write()
            except StoreError:
                self._players = previous
                raise

    def player_ids(self) -> list[str]:
        with self._lock:
            return list(self._players)

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read save file %s: %s", self.path, exc)
            raise StoreError(f"Cannot read {self.path}: {exc}") from exc
        players = doc.get("players") if isinstance(doc, dict) else None
        if not isinstance(players, dict):
            raise StoreError(f"{self.path} has no 'players' object")
        return players

    def _write(self) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump({"players": self._players}, f, indent=2)
                os.replace(tmp, self.path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write save file %s: %s", self.path, exc)
            raise StoreError(f"Cannot write {self.path}: {exc}") from exc
