"""GameSession — the one aggregate owning all mutable game state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.core.grid import GridIndex
from geocoin.core.models import PlayerState

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.systems.generator import CacheGenerator
    from geocoin.systems.registry import CacheRegistry
    from geocoin.systems.render import RenderLayer
    from geocoin.systems.rng import Luck


class GameSession:
    """The single source of truth for a game.

    Built by :meth:`create` and threaded through every core operation;
    nothing in the engine keeps module-level game state.
    """

    __slots__ = ("config", "grid", "generator", "registry", "player", "render")

    def __init__(
        self,
        config: GameConfig,
        grid: GridIndex,
        generator: CacheGenerator,
        registry: CacheRegistry,
        player: PlayerState,
        render: RenderLayer,
    ) -> None:
        self.config = config
        self.grid = grid
        self.generator = generator
        self.registry = registry
        self.player = player
        self.render = render

    @classmethod
    def create(
        cls,
        config: GameConfig,
        luck_fn: Luck | None = None,
        render: RenderLayer | None = None,
    ) -> GameSession:
        """Fresh session with the player at the configured origin."""
        from geocoin.systems.generator import CacheGenerator
        from geocoin.systems.registry import CacheRegistry
        from geocoin.systems.render import NullRenderLayer
        from geocoin.systems.rng import DeterministicRNG, luck

        if render is None:
            render = NullRenderLayer()
        grid = GridIndex(config.tile_degrees)
        rng = DeterministicRNG(luck_fn if luck_fn is not None else luck)
        generator = CacheGenerator(config, grid, rng)
        registry = CacheRegistry(grid, generator, render)
        origin = config.origin
        player = PlayerState(position=origin, trail=[origin])
        return cls(config, grid, generator, registry, player, render)

    def total_coins(self) -> int:
        """Coins held by the player plus coins sitting in caches."""
        return self.player.points + self.registry.total_coins()
