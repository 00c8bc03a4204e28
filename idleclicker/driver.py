from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from idleclicker.repository import PlayerRepository
from idleclicker.result import TickResult

logger = logging.getLogger(__name__)


class TickDriver:
    """Ticks players at a fixed cadence on a background thread.

    The engine doesn't care how often it is ticked; this is only the periodic
    push of the surrounding service. *players* narrows the tick to the live
    set (defaults to every stored player) and *on_tick* receives each round's
    results, e.g. to broadcast snapshots.
    """

    def __init__(
        self,
        repository: PlayerRepository,
        interval: float = 1.0,
        players: Callable[[], Iterable[str]] | None = None,
        on_tick: Callable[[dict[str, TickResult]], None] | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive (got {interval!r})")
        self.repository = repository
        self.interval = interval
        self.players = players
        self.on_tick = on_tick
        self.rounds = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self, now: float | None = None) -> dict[str, TickResult]:
        ids = self.players() if self.players is not None else None
        results = self.repository.tick_all(now, ids)
        self.rounds += 1
        if self.on_tick is not None:
            self.on_tick(results)
        return results

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="idleclicker-tick", daemon=True
        )
        self._thread.start()
        logger.info("Tick driver started (every %.2fs)", self.interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Tick driver stopped after %d rounds", self.rounds)

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.run_once()
            except Exception:
                # One failed round (e.g. a store error) must not kill the loop.
                logger.exception("Tick round failed")
