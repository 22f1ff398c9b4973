"""Keys and locations used by the key-value persistence layer."""

from pathlib import Path

STATE_KEY: str = "gameshowState"
LAST_UPDATE_KEY: str = "gameshowLastUpdate"
LAST_CHECK_KEY: str = "myLastCheck"

DEFAULT_STATE_FILE: Path = Path.home() / ".gameshow" / "storage.json"
