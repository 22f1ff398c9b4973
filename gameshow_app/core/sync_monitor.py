"""Polling monitor that notices state written by another process.

Every process shares ``gameshowLastUpdate`` (bumped on each save) and keeps
its own ``myLastCheck`` marker in a process-local store, so one screen
syncing never hides an update from another. When the shared marker is newer the monitor
raises an update-available flag; ``sync`` reloads the snapshot and clears it.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from threading import Event, Lock, Thread

from gameshow_app.constants.gameshow_constants import SYNC_INTERVAL_SECONDS
from gameshow_app.constants.storage_constants import LAST_CHECK_KEY, LAST_UPDATE_KEY
from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.storage import InMemoryStore, KeyValueStore
from gameshow_app.utils.clock import epoch_millis

logger = logging.getLogger(__name__)


class SyncMonitor:
    """Scheduled update check with an explicit start/stop lifecycle."""

    def __init__(
        self,
        manager: GameshowManager,
        kv: KeyValueStore | None = None,
        local_kv: KeyValueStore | None = None,
        interval_seconds: float = SYNC_INTERVAL_SECONDS,
        on_update_available: Callable[[], None] | None = None,
        on_render: Callable[[], None] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Sync interval must be positive.")
        self._manager = manager
        self._kv = kv if kv is not None else manager.kv
        self._local_kv = local_kv if local_kv is not None else InMemoryStore()
        if self._local_kv.get(LAST_CHECK_KEY) is None:
            # The manager loaded the snapshot when it was built.
            self._local_kv.set(LAST_CHECK_KEY, str(epoch_millis()))
        self._interval = interval_seconds
        self._on_update_available = on_update_available
        self._on_render = on_render
        self._update_available = False
        self._flag_lock = Lock()
        self._stop_event = Event()
        self._thread: Thread | None = None

    @property
    def update_available(self) -> bool:
        with self._flag_lock:
            return self._update_available

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def check_for_updates(self) -> bool:
        """Compare the shared update marker with this process's last check."""
        last_update = _read_marker(self._kv.get(LAST_UPDATE_KEY))
        last_check = _read_marker(self._local_kv.get(LAST_CHECK_KEY))
        if last_update is None or last_check is None or last_update <= last_check:
            return False

        with self._flag_lock:
            already_flagged = self._update_available
            self._update_available = True
        if not already_flagged:
            logger.info("Gameshow update available (last update %d > last check %d)", last_update, last_check)
        if self._on_update_available is not None:
            self._on_update_available()
        return True

    def sync(self) -> None:
        """Reload the snapshot, stamp the local marker and ask for a re-render."""
        self._manager.reload()
        self._local_kv.set(LAST_CHECK_KEY, str(epoch_millis()))
        with self._flag_lock:
            self._update_available = False
        logger.info("Gameshow state synchronised")
        if self._on_render is not None:
            self._on_render()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._run, name="GameshowSyncMonitor", daemon=True)
        self._thread.start()
        logger.debug("Sync monitor started (every %.1fs)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.check_for_updates()
            except Exception:
                logger.exception("Update check failed")


def _read_marker(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
