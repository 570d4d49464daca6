"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.models import LatLng


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # Spawn point (Oakes College classroom, UC Santa Cruz)
    origin_lat: float = 36.98949379578401
    origin_lng: float = -122.06277128548504

    # Grid
    tile_degrees: float = 1e-4
    neighborhood_size: int = 8             # tiles visible in each direction

    # Caches
    spawn_probability: float = 0.1
    max_initial_coins: int = 100           # initial value is floor(luck * this)

    # Persistence
    save_key: str = "geocoin.save"
    save_path: str = "geocoin_save.json"
    autosave: bool = True

    # Periodic viewport resync in seconds; 0 disables the background thread
    resync_interval: float = 0.0

    # Map presentation (passed through to the frontend)
    zoom_level: int = 19

    # Logging
    log_level: str = "INFO"

    @property
    def origin(self) -> LatLng:
        return LatLng(self.origin_lat, self.origin_lng)

    @property
    def view_radius(self) -> float:
        """Half-width of the visible square, in degrees."""
        return self.neighborhood_size * self.tile_degrees
