"""Tests for the cache registry: spawn/reveal/hide lifecycle and player commands."""

import random
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from geocoin.core.enums import CommandStatus, SpawnOutcome
from geocoin.systems.registry import NOTHING_TO_DEPOSIT, describe_cache
from geocoin.systems.viewport import update_caches
from tests.helpers.game_fixture import TableLuck, make_session


class TestSpawnOrReveal:
    def test_first_call_spawns_visible_cache(self):
        session = make_session()
        assert session.registry.spawn_or_reveal(2.75, -1.25) == SpawnOutcome.SPAWNED
        cache = session.registry.get("5:-3")
        assert cache is not None and cache.is_visible
        assert len(session.render) == 1

    def test_repeated_calls_never_double_value(self):
        session = make_session()
        for _ in range(5):
            session.registry.spawn_or_reveal(2.75, -1.25)
        assert len(session.registry) == 1
        assert session.registry.get("5:-3").coin_value == 42
        assert len(session.render) == 1

    def test_second_call_is_noop(self):
        session = make_session()
        session.registry.spawn_or_reveal(2.75, -1.25)
        assert session.registry.spawn_or_reveal(2.6, -1.1) == SpawnOutcome.ALREADY_VISIBLE

    def test_empty_cell(self):
        session = make_session()
        assert session.registry.spawn_or_reveal(0.1, 0.1) == SpawnOutcome.EMPTY_CELL
        assert len(session.registry) == 0

    def test_hide_keeps_state_and_reveal_restores_same_object(self):
        session = make_session()
        session.registry.spawn_or_reveal_cell(5, -3)
        cache = session.registry.get("5:-3")
        cache.coin_value = 13

        assert session.registry.hide("5:-3") is True
        assert cache.is_visible is False and cache.layer is None
        assert len(session.render) == 0
        assert session.registry.hide("5:-3") is False

        assert session.registry.spawn_or_reveal_cell(5, -3) == SpawnOutcome.REVEALED
        assert session.registry.get("5:-3") is cache
        assert cache.coin_value == 13
        assert len(cache.coin_ids) == 42

    def test_hide_unknown_is_noop(self):
        session = make_session()
        assert session.registry.hide("1:1") is False

    def test_popup_reflects_current_value(self):
        session = make_session()
        session.registry.spawn_or_reveal_cell(5, -3)
        cache = session.registry.get("5:-3")
        rect = session.render.get(cache.layer)
        assert rect.popup_text() == 'There is a cache here at "5:-3". It has value 42.'
        session.registry.collect("5:-3", session.player)
        assert rect.popup_text() == describe_cache(cache)
        assert "41" in rect.popup_text()


class TestCollectDeposit:
    def _session(self):
        session = make_session()
        session.registry.spawn_or_reveal_cell(5, -3)
        return session

    def test_collect_moves_one_coin_to_player(self):
        session = self._session()
        result = session.registry.collect("5:-3", session.player)
        assert result.status == CommandStatus.OK
        assert result.coin_value == 41
        assert session.player.points == 1

    def test_collect_empty_cache_is_noop(self):
        session = self._session()
        session.registry.get("5:-3").coin_value = 0
        result = session.registry.collect("5:-3", session.player)
        assert result.status == CommandStatus.NOOP
        assert session.player.points == 0
        assert session.registry.get("5:-3").coin_value == 0

    def test_collect_unknown_cache_is_noop(self):
        session = self._session()
        result = session.registry.collect("9:9", session.player)
        assert result.status == CommandStatus.NOOP
        assert session.player.points == 0

    def test_deposit_without_points_signals_user(self):
        session = self._session()
        result = session.registry.deposit("5:-3", session.player)
        assert result.status == CommandStatus.NOTHING_TO_DEPOSIT
        assert result.message == NOTHING_TO_DEPOSIT
        assert session.registry.get("5:-3").coin_value == 42

    def test_deposit_moves_coin_back(self):
        session = self._session()
        session.registry.collect("5:-3", session.player)
        result = session.registry.deposit("5:-3", session.player)
        assert result.ok
        assert result.coin_value == 42
        assert session.player.points == 0

    def test_deposit_unknown_cache_keeps_points(self):
        session = self._session()
        session.registry.collect("5:-3", session.player)
        result = session.registry.deposit("8:8", session.player)
        assert result.status == CommandStatus.NOOP
        assert session.player.points == 1

    def test_collect_leaves_provenance_alone(self):
        session = self._session()
        cache = session.registry.get("5:-3")
        before = list(cache.coin_ids)
        for _ in range(10):
            session.registry.collect("5:-3", session.player)
        session.registry.deposit("5:-3", session.player)
        assert cache.coin_ids == before


class TestConservation:
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_total_coins_invariant(self, seed):
        session = make_session(TableLuck(default=0.05), neighborhood_size=3)
        update_caches(session)
        ids = [c.cache_id for c in session.registry]
        assert ids, "expected caches in view"
        total = session.total_coins()

        rnd = random.Random(seed)
        for _ in range(500):
            cid = rnd.choice(ids + ["missing:id"])
            if rnd.random() < 0.55:
                session.registry.collect(cid, session.player)
            else:
                session.registry.deposit(cid, session.player)
            assert session.total_coins() == total
            assert session.player.points >= 0
            assert all(c.coin_value >= 0 for c in session.registry)

