"""Generator for the short codes guests type in to join a team."""

from __future__ import annotations

from collections.abc import Callable, Collection
import random
from threading import Lock

from gameshow_app.constants.gameshow_constants import TEAM_CODE_ALPHABET, TEAM_CODE_LENGTH


class TeamCodeGenerator:
    """Draws fixed-length codes uniformly from an alphabet, skipping used ones."""

    def __init__(
        self,
        alphabet: str = TEAM_CODE_ALPHABET,
        length: int = TEAM_CODE_LENGTH,
        rng: random.Random | None = None,
    ) -> None:
        if not alphabet:
            raise ValueError("Alphabet cannot be empty.")
        if length <= 0:
            raise ValueError("Code length must be a positive integer.")
        self._alphabet = alphabet
        self._length = length
        self._rng = rng or random.Random()
        self._lock = Lock()

    def draw(self) -> str:
        with self._lock:
            return "".join(self._rng.choice(self._alphabet) for _ in range(self._length))

    def next_code(self, is_taken: Callable[[str], bool] | Collection[str]) -> str:
        """Return a code not rejected by ``is_taken`` (a predicate or a collection)."""
        taken = is_taken if callable(is_taken) else is_taken.__contains__
        while True:
            code = self.draw()
            if not taken(code):
                return code
