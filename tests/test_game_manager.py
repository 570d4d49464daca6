"""Tests for GameManager: the documented (5, -3) scenario, tracking, save games."""

from __future__ import annotations

import sys
import os
import threading

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from geocoin.api.game_manager import GameManager
from geocoin.core.enums import CommandStatus, Direction
from geocoin.core.models import LatLng
from geocoin.core.snapshot import dumps
from geocoin.systems.persistence import snapshot
from geocoin.systems.registry import NOTHING_TO_DEPOSIT
from geocoin.systems.storage import MemoryStore
from tests.helpers.game_fixture import TableLuck, make_config, scenario_luck


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def manager(store):
    mgr = GameManager(make_config(), store=store, luck_fn=scenario_luck())
    mgr.start()
    yield mgr
    mgr.stop()


class TestScenario:
    """Cell (5, -3): luck 0.03 spawns it, luck 0.42 gives it 42 coins."""

    def test_spawns_with_42_coins(self, manager):
        cache = manager.session.registry.get("5:-3")
        assert cache is not None and cache.is_visible
        assert cache.coin_value == 42
        assert manager.status() == "No points yet..."

    def test_collect_deposit_save_restore(self, manager, store):
        assert manager.collect("5:-3").coin_value == 41
        assert manager.session.player.points == 1
        assert manager.status() == "1 points accumulated"

        assert manager.deposit("5:-3").coin_value == 42
        assert manager.session.player.points == 0
        assert manager.status() == "0 points accumulated"

        manager.save()
        coin_ids = list(manager.session.registry.get("5:-3").coin_ids)

        other = GameManager(make_config(), store=store, luck_fn=TableLuck())
        other.start()
        restored = other.session.registry.get("5:-3")
        assert restored is not None
        assert restored.coin_value == 42
        assert restored.coin_ids == coin_ids
        assert len(restored.coin_ids) == 42
        other.stop()

    def test_leave_and_return(self, manager):
        for _ in range(3):
            manager.move(Direction.NORTH)
        cache = manager.session.registry.get("5:-3")
        assert cache.is_visible is False
        assert cache.coin_value == 42
        for _ in range(3):
            manager.move(Direction.SOUTH)
        assert manager.session.registry.get("5:-3") is cache
        assert cache.is_visible is True
        assert cache.coin_value == 42

    def test_nothing_to_deposit(self, manager):
        result = manager.deposit("5:-3")
        assert result.status == CommandStatus.NOTHING_TO_DEPOSIT
        assert result.message == NOTHING_TO_DEPOSIT
        assert manager.event_log.latest(1)[0].message == NOTHING_TO_DEPOSIT


class TestTracking:
    def test_fix_ignored_when_not_tracking(self, manager):
        before = manager.session.player.position
        result = manager.push_position(LatLng(10.0, 10.0))
        assert result.status == CommandStatus.NOT_TRACKING
        assert manager.session.player.position == before

    def test_fix_moves_player_while_tracking(self, manager):
        manager.start_tracking()
        result = manager.push_position(LatLng(4.25, -1.25))
        assert result.ok
        assert manager.session.player.position == LatLng(4.25, -1.25)
        assert manager.session.registry.get("5:-3").is_visible is False

    def test_stop_halts_further_moves_without_rollback(self, manager):
        manager.start_tracking()
        manager.push_position(LatLng(3.25, -1.25))
        manager.stop_tracking()
        result = manager.push_position(LatLng(9.0, 9.0))
        assert result.status == CommandStatus.NOT_TRACKING
        assert manager.session.player.position == LatLng(3.25, -1.25)
        assert manager.tracking is False

    def test_concurrent_fixes_are_serialized(self, manager):
        manager.start_tracking()
        fixes = [LatLng(2.75 + 0.5 * (n % 4), -1.25) for n in range(40)]
        threads = [threading.Thread(target=manager.push_position, args=(fix,)) for fix in fixes]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(manager.session.player.trail) == 41
        assert len(manager.session.registry) == 1
        assert manager.session.registry.get("5:-3").coin_value == 42


class TestSaveGames:
    def test_autosave_after_collect(self, store):
        mgr = GameManager(make_config(autosave=True), store=store, luck_fn=scenario_luck())
        mgr.start()
        mgr.collect("5:-3")
        assert '"playerPoints":1' in store.get(mgr.config.save_key)
        mgr.stop()

    def test_start_resumes_saved_game(self, manager, store):
        manager.collect("5:-3")
        manager.move(Direction.EAST)
        manager.save()

        resumed = GameManager(make_config(), store=store, luck_fn=scenario_luck())
        resumed.start()
        assert resumed.session.player.points == 1
        assert resumed.session.player.position == manager.session.player.position
        assert resumed.session.registry.get("5:-3").coin_value == 41
        resumed.stop()

    def test_load_without_save(self, manager):
        result = manager.load()
        assert result.status == CommandStatus.NO_SAVE

    def test_load_reverts_to_saved_state(self, manager):
        manager.save()
        manager.collect("5:-3")
        manager.collect("5:-3")
        assert manager.load().ok
        assert manager.session.player.points == 0
        assert manager.session.registry.get("5:-3").coin_value == 42

    def test_reset_deletes_save(self, manager, store):
        manager.save()
        manager.collect("5:-3")
        manager.reset()
        assert store.get(manager.config.save_key) is None
        assert manager.session.player.points == 0
        assert manager.session.registry.get("5:-3").coin_value == 42
        assert manager.load().status == CommandStatus.NO_SAVE

    def test_new_game_starts_at_origin(self, manager):
        manager.move(Direction.NORTH)
        manager.collect("5:-3")
        manager.new_game()
        player = manager.session.player
        assert player.position == LatLng(2.75, -1.25)
        assert player.trail == [LatLng(2.75, -1.25)]
        assert player.points == 0
        assert manager.session.registry.get("5:-3").is_visible

    def test_new_game_replaces_autosaved_game(self, store):
        mgr = GameManager(make_config(autosave=True), store=store, luck_fn=scenario_luck())
        mgr.start()
        mgr.collect("5:-3")
        mgr.new_game()
        mgr.stop()

        restarted = GameManager(make_config(autosave=True), store=store, luck_fn=scenario_luck())
        restarted.start()
        assert restarted.session.player.points == 0
        assert restarted.session.registry.get("5:-3").coin_value == 42
        assert restarted.status() == "No points yet..."
        restarted.stop()

    def test_load_reports_caches_spawned_by_resync(self, store):
        mgr = GameManager(make_config(autosave=True), store=store, luck_fn=scenario_luck())
        # Saved before anything spawned: the restore's resync creates (5, -3)
        store.set(mgr.config.save_key, dumps(snapshot(mgr.session)))
        mgr.start()

        spawns = [e for e in mgr.event_log.latest() if e.category == "spawn"]
        assert [e.cache_id for e in spawns] == ["5:-3"]
        assert '"id":"5:-3"' in store.get(mgr.config.save_key)
        mgr.stop()

    def test_collect_after_reset_on_stale_id_is_noop(self, manager):
        manager.reset()
        result = manager.collect("0:0")
        assert result.status == CommandStatus.NOOP


class TestResync:
    def test_manual_resync_is_idempotent(self, manager):
        report = manager.resync()
        assert not report.changed

    def test_background_thread_runs_and_stops(self, store):
        mgr = GameManager(make_config(resync_interval=0.01), store=store, luck_fn=scenario_luck())
        mgr.start()
        assert mgr._thread is not None and mgr._thread.is_alive()
        mgr.stop()
        assert mgr._thread is None
