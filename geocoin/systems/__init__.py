"""Engine systems: RNG, cache generation, registry, viewport, persistence."""

from geocoin.systems.generator import CacheGenerator
from geocoin.systems.registry import CacheRegistry
from geocoin.systems.rng import DeterministicRNG, luck, seed_key
from geocoin.systems.viewport import SyncReport, update_caches, visible_bounds

__all__ = [
    "CacheGenerator",
    "CacheRegistry",
    "DeterministicRNG",
    "SyncReport",
    "luck",
    "seed_key",
    "update_caches",
    "visible_bounds",
]
