import os
from dataclasses import dataclass
from typing import Optional

from flask import current_app, has_app_context

from .tiles import LEFT, SIDES

MIN_ROOM_SIZE = 5


@dataclass
class RoomConfig:
    width: int = 15
    height: int = 15
    cell_size: int = 30
    entrance_side: str = LEFT
    bomb_count: int = 0
    enemy_count: int = 0
    coin_count: int = 0
    seed: Optional[int] = None
    # Layout tunables
    wall_density_min: float = 0.25
    wall_density_max: float = 0.40
    chunk_attempts: int = 200
    chunk_min_size: int = 1
    chunk_max_size: int = 4
    safe_radius: int = 3
    floor_variants: int = 6
    # Placement tunables
    entity_exclusion_radius: int = 2
    scatter_fraction: float = 0.8
    placement_attempt_factor: int = 50
    void_threshold: int = 4
    enable_metrics: bool = True

    def __post_init__(self):
        if self.width < MIN_ROOM_SIZE or self.height < MIN_ROOM_SIZE:
            raise ValueError(f"room must be at least {MIN_ROOM_SIZE}x{MIN_ROOM_SIZE}")
        if self.entrance_side not in SIDES:
            raise ValueError(f"unknown entrance side {self.entrance_side!r}")
        for name in ("bomb_count", "enemy_count", "coin_count"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        if not (0.0 <= self.wall_density_min <= self.wall_density_max <= 1.0):
            raise ValueError("wall density bounds must satisfy 0 <= min <= max <= 1")
        if self.chunk_min_size < 1 or self.chunk_max_size < self.chunk_min_size:
            raise ValueError("chunk sizes must satisfy 1 <= min <= max")


# Tunables that may be overridden from the environment or Flask config.
# Structural arguments (width, height, counts) are always taken from the caller.
_OVERRIDABLE = {
    "ROOM_WALL_DENSITY_MIN": ("wall_density_min", float),
    "ROOM_WALL_DENSITY_MAX": ("wall_density_max", float),
    "ROOM_CHUNK_ATTEMPTS": ("chunk_attempts", int),
    "ROOM_CHUNK_MAX_SIZE": ("chunk_max_size", int),
    "ROOM_SAFE_RADIUS": ("safe_radius", int),
    "ROOM_VOID_THRESHOLD": ("void_threshold", int),
    "ROOM_ENABLE_GENERATION_METRICS": ("enable_metrics", bool),
}


def _coerce(raw, kind):
    if kind is bool:
        if isinstance(raw, bool):
            return raw
        return str(raw).lower() not in {"0", "false", "no", ""}
    return kind(raw)


def apply_overrides(config: RoomConfig) -> RoomConfig:
    """Apply ``ROOM_*`` overrides in place: environment first, Flask app config last.

    Tests set env vars; a running app may pin values in ``app.config``.
    Returns the same config object.
    """
    for key, (attr, kind) in _OVERRIDABLE.items():
        if key in os.environ:
            setattr(config, attr, _coerce(os.environ[key], kind))
    if has_app_context():
        cfg = current_app.config
        for key, (attr, kind) in _OVERRIDABLE.items():
            if key in cfg:
                setattr(config, attr, _coerce(cfg[key], kind))
    # Overrides must still satisfy validation
    config.__post_init__()
    return config


__all__ = ["RoomConfig", "MIN_ROOM_SIZE", "apply_overrides"]
