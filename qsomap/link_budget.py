"""Link budget estimate for a simplex VHF/UHF contact.

Implements:
- watts_to_dbm: transmitter power in dBm.
- compute_link_budget: FSPL + terrain excess loss, received level at a dipole.
- qso_probability_percent: coarse contact likelihood from the received level.

Received level [dBm] = P_tx[dBm] − PL + G_ant, with G_ant = 2.15 dBi (half-wave
dipole). The antenna height is carried on the input but does not enter the
formula; there is no height-gain term in this model.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .fspl import fspl_db
from .terrain import DEFAULT_TERRAIN, TerrainModel

DIPOLE_GAIN_DBI = 2.15

# (upper bound exclusive, percent), checked in order; anything above -> 100
QSO_PROBABILITY_STEPS = (
    (-120.0, 10),
    (-100.0, 30),
    (-80.0, 60),
    (-60.0, 80),
)


@dataclass(frozen=True)
class LinkBudgetInput:
    frequency_mhz: float
    transmit_power_w: float
    antenna_height_m: float
    distance_km: float

    def __post_init__(self):
        if not (math.isfinite(self.frequency_mhz) and self.frequency_mhz > 0):
            raise ValueError("frequency must be a positive finite number")
        if not (math.isfinite(self.transmit_power_w) and self.transmit_power_w > 0):
            raise ValueError("transmit power must be a positive finite number")
        if not (math.isfinite(self.antenna_height_m) and self.antenna_height_m >= 0):
            raise ValueError("antenna height must be a finite, non-negative number")
        if not (math.isfinite(self.distance_km) and self.distance_km >= 0):
            raise ValueError("distance must be a finite, non-negative number")


@dataclass(frozen=True)
class LinkBudgetResult:
    free_space_loss_db: float
    terrain_loss_db: float
    path_loss_db: float
    signal_strength_dbm: float
    qso_probability_percent: int


def watts_to_dbm(power_w: float) -> float:
    """Convert power in watts to dBm."""
    if not (math.isfinite(power_w) and power_w > 0):
        raise ValueError("power must be a positive finite number")
    return 10.0 * math.log10(power_w * 1000.0)


def qso_probability_percent(signal_strength_dbm: float) -> int:
    """Map a received level to a QSO likelihood bucket (10/30/60/80/100 %).

    Each bucket includes its lower bound: -60.0 dBm -> 100, -60.01 dBm -> 80.
    """
    for upper, percent in QSO_PROBABILITY_STEPS:
        if signal_strength_dbm < upper:
            return percent
    return 100


def compute_link_budget(
    inp: LinkBudgetInput,
    terrain: Optional[TerrainModel] = None,
) -> LinkBudgetResult:
    """Compute losses, received level and QSO likelihood for one path.

    Raises:
        DegenerateInput: ``inp.distance_km == 0`` (same-point input)
    """
    model = terrain if terrain is not None else DEFAULT_TERRAIN
    fsl = fspl_db(inp.distance_km, inp.frequency_mhz)
    terrain_db = model.terrain_loss_db(inp.distance_km)
    path_loss = fsl + terrain_db
    signal = watts_to_dbm(inp.transmit_power_w) - path_loss + DIPOLE_GAIN_DBI
    return LinkBudgetResult(
        free_space_loss_db=fsl,
        terrain_loss_db=terrain_db,
        path_loss_db=path_loss,
        signal_strength_dbm=signal,
        qso_probability_percent=qso_probability_percent(signal),
    )
