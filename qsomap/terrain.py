"""Terrain loss models and selector.

The link estimate adds an excess-loss term on top of free space to stand in
for obstructions. The default is a linear placeholder with no physical basis
(0.1 dB per km, capped at 10 dB); any object with a ``terrain_loss_db``
method can replace it, e.g. a binding to a real terrain-profile model.
"""

from dataclasses import dataclass
from typing import Literal, Protocol

TerrainModelName = Literal["linear", "flat"]


class TerrainModel(Protocol):
    def terrain_loss_db(self, distance_km: float) -> float:
        ...


@dataclass(frozen=True)
class LinearTerrainModel:
    """Loss grows linearly with distance up to a cap.

    L(d) = min(d · db_per_km, cap_db)
    """
    db_per_km: float = 0.1
    cap_db: float = 10.0

    def terrain_loss_db(self, distance_km: float) -> float:
        return min(distance_km * self.db_per_km, self.cap_db)


@dataclass(frozen=True)
class FlatTerrainModel:
    """No excess loss: the path is treated as pure free space."""

    def terrain_loss_db(self, distance_km: float) -> float:
        return 0.0


DEFAULT_TERRAIN = LinearTerrainModel()


def select_terrain_model(name: TerrainModelName | None = None) -> TerrainModel:
    """Return a terrain model by name (default: linear placeholder)."""
    if name is None or name == "linear":
        return DEFAULT_TERRAIN
    if name == "flat":
        return FlatTerrainModel()
    raise ValueError(f"Unknown terrain model: {name!r}")
