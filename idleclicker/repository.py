from __future__ import annotations

import logging
import threading
import time
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

from idleclicker.accrual import AccrualPolicy
from idleclicker.economy import Economy
from idleclicker.result import TickResult
from idleclicker.runtime import ProgressionRuntime
from idleclicker.state import PlayerProgress
from idleclicker.store import ProgressStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    player_id: str
    total_earned: float
    prestige_level: int


class PlayerRepository:
    """Owns every player's progress and serializes mutations per player.

    All reads and writes of a player go through :meth:`session`, which holds
    that player's lock for the whole load → mutate → save cycle. Concurrent
    sessions for one player queue; sessions for different players do not
    block each other.
    """

    def __init__(
        self,
        economy: Economy,
        store: ProgressStore,
        policy: AccrualPolicy | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.economy = economy
        self.store = store
        self.policy = policy or AccrualPolicy()
        self.clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, player_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(player_id)
            if lock is None:
                lock = self._locks[player_id] = threading.Lock()
            return lock

    @contextmanager
    def session(
        self, player_id: str, create: bool = True
    ) -> Iterator[ProgressionRuntime]:
        """Lock *player_id*, yield its runtime, and save when the block exits cleanly.

        A player seen for the first time starts from fresh progress stamped
        with the current clock. With ``create=False`` an unknown player raises
        ``KeyError`` instead.
        """
        with self._lock_for(player_id):
            progress = self._load(player_id)
            if progress is None:
                if not create:
                    raise KeyError(player_id)
                progress = PlayerProgress.new(self.economy.definition, self.clock())
                logger.info("Created progress for player %s", player_id)
            runtime = ProgressionRuntime(self.economy, progress, self.policy)
            yield runtime
            self.store.save(player_id, progress.to_dict())

    def get(self, player_id: str) -> PlayerProgress | None:
        """Read-only copy of a player's progress, or None if never seen."""
        with self._lock_for(player_id):
            return self._load(player_id)

    def exists(self, player_id: str) -> bool:
        return self.store.load(player_id) is not None

    def player_ids(self) -> list[str]:
        return self.store.player_ids()

    def tick_all(
        self,
        now: float | None = None,
        player_ids: Iterable[str] | None = None,
    ) -> dict[str, TickResult]:
        """Tick every stored player (or just *player_ids*) up to *now*.

        All the players' locks are taken in sorted order and held until one
        bulk save, so a single-document store is written once per round.
        """
        if now is None:
            now = self.clock()
        ids = sorted(set(player_ids if player_ids is not None else self.player_ids()))
        results: dict[str, TickResult] = {}
        records: dict[str, dict[str, Any]] = {}
        with ExitStack() as stack:
            for pid in ids:
                stack.enter_context(self._lock_for(pid))
            for pid in ids:
                progress = self._load(pid)
                if progress is None:
                    progress = PlayerProgress.new(self.economy.definition, now)
                    logger.info("Created progress for player %s", pid)
                runtime = ProgressionRuntime(self.economy, progress, self.policy)
                results[pid] = runtime.tick(now)
                records[pid] = progress.to_dict()
            self.store.save_many(records)
        return results

    def leaderboard(self, limit: int = 10) -> list[LeaderboardEntry]:
        """Top players by lifetime earnings."""
        entries: list[LeaderboardEntry] = []
        for pid in self.player_ids():
            progress = self.get(pid)
            if progress is None:
                continue
            entries.append(
                LeaderboardEntry(
                    player_id=pid,
                    total_earned=progress.total_earned,
                    prestige_level=progress.prestige_level,
                )
            )
        entries.sort(key=lambda e: (-e.total_earned, e.player_id))
        return entries[: max(0, limit)]

    def _load(self, player_id: str) -> PlayerProgress | None:
        data = self.store.load(player_id)
        if data is None:
            return None
        return PlayerProgress.from_dict(data, self.economy.definition)
