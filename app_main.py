"""Application entry point for the gameshow host."""

from __future__ import annotations

from pathlib import Path
import socket
import sys
import time

from gameshow_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from gameshow_app.constants.storage_constants import DEFAULT_STATE_FILE
from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.storage import InMemoryStore, JsonFileStore
from gameshow_app.core.sync_monitor import SyncMonitor
from gameshow_app.server.api_server import start_api_server
from gameshow_app.utils.logging_config import configure_logging


def _determine_display_url(port: int) -> str:
    """Best-effort determination of the local IP for the spectator URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/display"


def main() -> None:
    """Initialize logging, load the saved game, start polling and serve the API."""
    logger = configure_logging()
    state_file = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_STATE_FILE
    logger.info("Starting gameshow with state file %s", state_file)

    manager = GameshowManager(JsonFileStore(state_file))
    monitor = SyncMonitor(manager, local_kv=InMemoryStore())
    monitor.start()
    server_thread = start_api_server(manager, monitor, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Spectator display available at %s", _determine_display_url(DEFAULT_PORT))

    try:
        while server_thread.is_alive():
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        monitor.stop()


if __name__ == "__main__":
    main()
