"""Owner of the live snapshot and its load/save cycle."""

from __future__ import annotations

import logging

from gameshow_app.constants.storage_constants import LAST_UPDATE_KEY, STATE_KEY
from gameshow_app.core.models import GameshowSnapshot
from gameshow_app.core.storage import (
    KeyValueStore,
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
)
from gameshow_app.utils.clock import epoch_millis

logger = logging.getLogger(__name__)


class GameshowStateStore:
    """Holds the in-memory snapshot that every service reads and mutates.

    Services never cache pieces of the snapshot: ``load`` swaps in a new
    object, so they always go through ``store.snapshot``.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._snapshot = GameshowSnapshot()

    @property
    def kv(self) -> KeyValueStore:
        return self._kv

    @property
    def snapshot(self) -> GameshowSnapshot:
        return self._snapshot

    def load(self) -> GameshowSnapshot:
        raw = self._kv.get(STATE_KEY)
        if raw is None:
            self._snapshot = GameshowSnapshot()
            return self._snapshot
        try:
            self._snapshot = decode_snapshot(raw)
        except SnapshotDecodeError:
            logger.warning("Stored gameshow state could not be decoded; starting empty", exc_info=True)
            self._snapshot = GameshowSnapshot()
        return self._snapshot

    def save(self) -> None:
        self._kv.set(STATE_KEY, encode_snapshot(self._snapshot))
        self._kv.set(LAST_UPDATE_KEY, str(epoch_millis()))

    def reset(self) -> None:
        self._snapshot = GameshowSnapshot()
        self.save()
