"""Tests for deterministic cache generation."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.grid import GridIndex
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import DeterministicRNG, luck
from tests.helpers.game_fixture import TableLuck, make_config, scenario_luck


def _generator(luck_fn=None, config: GameConfig | None = None) -> tuple[CacheGenerator, GridIndex]:
    config = config or make_config()
    grid = GridIndex(config.tile_degrees)
    rng = DeterministicRNG(luck_fn if luck_fn is not None else scenario_luck())
    return CacheGenerator(config, grid, rng), grid


class TestSpawnPredicate:
    def test_below_probability_spawns(self):
        gen, _ = _generator()
        assert gen.should_spawn(5, -3) is True

    def test_unlisted_cell_does_not_spawn(self):
        gen, _ = _generator()
        assert gen.should_spawn(5, -2) is False

    def test_pure_across_calls(self):
        gen, _ = _generator(luck_fn=luck, config=GameConfig())
        first = [(gen.should_spawn(i, j), gen.initial_coin_value(i, j)) for i in range(-5, 5) for j in range(-5, 5)]
        again = [(gen.should_spawn(i, j), gen.initial_coin_value(i, j)) for i in range(-5, 5) for j in range(-5, 5)]
        assert first == again

    def test_uses_distinct_seed_strings(self):
        luck_fn = scenario_luck()
        gen, _ = _generator(luck_fn)
        gen.should_spawn(5, -3)
        gen.initial_coin_value(5, -3)
        assert luck_fn.calls == ["5,-3", "5,-3,initialValue"]

    def test_spawn_rate_roughly_matches_probability(self):
        gen, _ = _generator(luck_fn=luck, config=GameConfig())
        spawned = sum(gen.should_spawn(i, j) for i in range(-50, 50) for j in range(-50, 50))
        assert 700 < spawned < 1300


class TestInitialValue:
    def test_floor_of_luck_times_hundred(self):
        gen, _ = _generator()
        assert gen.initial_coin_value(5, -3) == 42

    def test_value_in_range(self):
        gen, _ = _generator(luck_fn=luck, config=GameConfig())
        for i in range(-10, 10):
            assert 0 <= gen.initial_coin_value(i, 3) < 100

    def test_zero_luck_gives_empty_cache(self):
        gen, _ = _generator(TableLuck({"0,0": 0.0}, default=0.0))
        assert gen.initial_coin_value(0, 0) == 0


class TestCreateCache:
    def test_new_cache_is_hidden_and_minted(self):
        gen, grid = _generator()
        cache = gen.create_cache(2.75, -1.25, {})
        assert cache.cache_id == "5:-3"
        assert cache.is_visible is False
        assert cache.coin_value == 42
        assert cache.coin_ids == [f"5:-3#{n}" for n in range(42)]
        assert grid.cell(5, -3).coin_serial == 42

    def test_anchor_is_cell_corner(self):
        gen, grid = _generator()
        cache = gen.create_cache(2.99, -1.01, {})
        assert cache.anchor == grid.cell_anchor(5, -3)

    def test_idempotent_when_known(self):
        gen, grid = _generator()
        cache = gen.create_cache(2.75, -1.25, {})
        known = {cache.cache_id: cache}
        cache.coin_value = 7

        again = gen.create_cache(2.6, -1.4, known)
        assert again is cache
        assert again.coin_value == 7
        assert grid.cell(5, -3).coin_serial == 42
