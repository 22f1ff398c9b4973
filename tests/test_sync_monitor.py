import threading

import pytest

from gameshow_app.constants.storage_constants import LAST_CHECK_KEY, LAST_UPDATE_KEY
from gameshow_app.core.gameshow_manager import GameshowManager
from gameshow_app.core.storage import InMemoryStore, JsonFileStore
from gameshow_app.core.sync_monitor import SyncMonitor


def test_no_update_without_shared_marker(manager):
    local = InMemoryStore({LAST_CHECK_KEY: "1000"})
    monitor = SyncMonitor(manager, local_kv=local)
    assert monitor.check_for_updates() is False
    assert not monitor.update_available


def test_new_monitor_stamps_its_own_check_marker(manager, kv):
    local = InMemoryStore()
    SyncMonitor(manager, local_kv=local)
    assert int(local.get(LAST_CHECK_KEY)) > 0
    assert kv.get(LAST_CHECK_KEY) is None


def test_update_flag_raised_only_when_newer(manager, kv):
    notified = []
    local = InMemoryStore({LAST_CHECK_KEY: "2000"})
    monitor = SyncMonitor(manager, local_kv=local, on_update_available=lambda: notified.append(True))
    kv.set(LAST_UPDATE_KEY, "2000")
    assert monitor.check_for_updates() is False

    local.set(LAST_CHECK_KEY, "1999")
    assert monitor.check_for_updates() is True
    assert monitor.update_available
    assert notified == [True]


def test_sync_reloads_other_writers_state(kv):
    host = GameshowManager(kv)
    screen = GameshowManager(kv)
    rendered = []
    local = InMemoryStore({LAST_CHECK_KEY: "0"})
    monitor = SyncMonitor(screen, local_kv=local, on_render=lambda: rendered.append(True))

    team = host.create_team("Red", "C1")
    assert screen.get_team_by_code(team.code) is None
    assert monitor.check_for_updates()

    monitor.sync()
    assert screen.get_team_by_code(team.code).name == "Red"
    assert not monitor.update_available
    assert int(local.get(LAST_CHECK_KEY)) >= int(kv.get(LAST_UPDATE_KEY))
    assert kv.get(LAST_CHECK_KEY) is None
    assert rendered == [True]


def test_one_screen_syncing_does_not_hide_updates_from_another(tmp_path):
    path = tmp_path / "storage.json"
    host = GameshowManager(JsonFileStore(path))
    screen_a = GameshowManager(JsonFileStore(path))
    screen_b = GameshowManager(JsonFileStore(path))
    monitor_a = SyncMonitor(screen_a, local_kv=InMemoryStore({LAST_CHECK_KEY: "0"}))
    monitor_b = SyncMonitor(screen_b, local_kv=InMemoryStore({LAST_CHECK_KEY: "0"}))

    team = host.create_team("Red", "C1")
    monitor_a.sync()

    assert monitor_b.check_for_updates() is True
    monitor_b.sync()
    assert screen_b.get_team_by_code(team.code).name == "Red"


def test_sync_never_touches_update_marker(manager, kv):
    kv.set(LAST_UPDATE_KEY, "1234")
    SyncMonitor(manager).sync()
    assert kv.get(LAST_UPDATE_KEY) == "1234"


def test_polling_thread_lifecycle(manager, kv):
    seen = threading.Event()
    local = InMemoryStore({LAST_CHECK_KEY: "1000"})
    monitor = SyncMonitor(manager, local_kv=local, interval_seconds=0.01, on_update_available=seen.set)
    kv.set(LAST_UPDATE_KEY, "2000")

    monitor.start()
    monitor.start()
    assert monitor.is_running
    assert seen.wait(2.0)
    monitor.stop(timeout=2.0)
    assert not monitor.is_running


def test_interval_must_be_positive(manager):
    with pytest.raises(ValueError):
        SyncMonitor(manager, interval_seconds=0)
