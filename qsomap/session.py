"""Station state record and report assembly for the map UI.

The UI owns a single immutable ``StationState``: the current position, an
optional destination and the radio dials. Event handlers produce a new
record (``with_current``, ``with_destination``, ``with_dials``) and then
call ``build_report`` to get every value the screen shows. Nothing here
touches the map; see ``mapview.sync_map`` for that side.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .config import RadioDials
from .geodesy import GeoPoint, bearing_deg, compass_direction, distance_km
from .link_budget import LinkBudgetInput, LinkBudgetResult, compute_link_budget
from .maidenhead import encode_grid, grid_distance_km
from .terrain import TerrainModel

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class StationState:
    current: Optional[GeoPoint] = None
    destination: Optional[GeoPoint] = None
    dials: RadioDials = field(default_factory=RadioDials)


@dataclass(frozen=True)
class StationReport:
    """Everything derived from one StationState.

    Metrics that need both points are None until both exist. When the two
    points coincide the link budget is None and ``not_applicable`` says why.
    """
    current_grid: Optional[str] = None
    destination_grid: Optional[str] = None
    bearing_deg: Optional[float] = None
    direction: Optional[str] = None
    distance_km: Optional[float] = None
    grid_distance_km: Optional[float] = None
    link: Optional[LinkBudgetResult] = None
    not_applicable: Optional[str] = None


def with_current(state: StationState, point: Optional[GeoPoint]) -> StationState:
    return dataclasses.replace(state, current=point)


def with_destination(state: StationState, point: Optional[GeoPoint]) -> StationState:
    return dataclasses.replace(state, destination=point)


def clear_destination(state: StationState) -> StationState:
    return dataclasses.replace(state, destination=None)


def with_dials(state: StationState, **changes) -> StationState:
    """Return a new state with some dial values replaced (keyword per RadioDials field)."""
    return dataclasses.replace(state, dials=dataclasses.replace(state.dials, **changes))


def _parse_float(text: Union[str, float, None]) -> Optional[float]:
    if text is None:
        return None
    try:
        return float(str(text).strip())
    except ValueError:
        return None


def _dial_value(text: Union[str, float, None], default: float) -> float:
    # blank, unparseable, non-finite, zero and negative inputs fall back to the default
    value = _parse_float(text)
    if value is None or not math.isfinite(value) or value <= 0:
        return default
    return value


def dials_from_inputs(
    frequency: Union[str, float, None],
    power: Union[str, float, None],
    antenna: Union[str, float, None],
    defaults: Optional[RadioDials] = None,
) -> RadioDials:
    """Build dials from raw input-field text, using defaults for unusable entries.

    Frequency and power must be positive; antenna height must not be
    negative. A zero antenna height is still replaced by the default, as a
    blank field would be.
    """
    if defaults is None:
        defaults = RadioDials()
    return RadioDials(
        frequency_mhz=_dial_value(frequency, defaults.frequency_mhz),
        transmit_power_w=_dial_value(power, defaults.transmit_power_w),
        antenna_height_m=_dial_value(antenna, defaults.antenna_height_m),
    )


def point_from_inputs(
    lat_text: Union[str, float, None],
    lon_text: Union[str, float, None],
    name: Optional[str] = None,
) -> Optional[GeoPoint]:
    """Parse two coordinate fields; None while either is incomplete.

    Raises:
        OutOfRange: both fields parse but lie outside the globe
    """
    lat = _parse_float(lat_text)
    lon = _parse_float(lon_text)
    if lat is None or lon is None or lat != lat or lon != lon:
        return None
    return GeoPoint(latitude=lat, longitude=lon, name=name)


def build_report(state: StationState, terrain: Optional[TerrainModel] = None) -> StationReport:
    """Derive grids, bearing, distance and the link estimate from a state."""
    current_grid = encode_grid(state.current) if state.current is not None else None
    destination_grid = encode_grid(state.destination) if state.destination is not None else None
    if state.current is None or state.destination is None:
        return StationReport(current_grid=current_grid, destination_grid=destination_grid)

    brng = bearing_deg(state.current, state.destination)
    dist = distance_km(state.current, state.destination)
    link = None
    reason = None
    try:
        link = compute_link_budget(
            LinkBudgetInput(
                frequency_mhz=state.dials.frequency_mhz,
                transmit_power_w=state.dials.transmit_power_w,
                antenna_height_m=state.dials.antenna_height_m,
                distance_km=dist,
            ),
            terrain=terrain,
        )
    except ValueError as exc:
        # DegenerateInput (same point) or dials the estimate cannot use
        logger.debug("link budget not applicable: %s", exc)
        reason = str(exc)
    return StationReport(
        current_grid=current_grid,
        destination_grid=destination_grid,
        bearing_deg=brng,
        direction=compass_direction(brng),
        distance_km=dist,
        grid_distance_km=grid_distance_km(current_grid, destination_grid),
        link=link,
        not_applicable=reason,
    )


def _fmt(value: Optional[float], suffix: str, digits: int = 1) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{digits}f}{suffix}"


def report_to_table(report: StationReport) -> List[List[str]]:
    """Convert a report to display strings (two columns: metric, value)."""
    link = report.link
    bearing = NOT_AVAILABLE
    if report.bearing_deg is not None:
        bearing = f"{int(report.bearing_deg + 0.5) % 360}° {report.direction}"
    return [
        ["metric", "value"],
        ["your_grid", report.current_grid or NOT_AVAILABLE],
        ["destination_grid", report.destination_grid or NOT_AVAILABLE],
        ["bearing", bearing],
        ["distance", _fmt(report.distance_km, " km")],
        ["grid_distance", _fmt(report.grid_distance_km, " km")],
        ["free_space_loss", _fmt(link.free_space_loss_db if link else None, " dB")],
        ["path_loss", _fmt(link.path_loss_db if link else None, " dB")],
        ["signal_strength", _fmt(link.signal_strength_dbm if link else None, " dBm")],
        ["qso_probability", f"{link.qso_probability_percent}%" if link else NOT_AVAILABLE],
    ]


def print_table(table: List[List[str]]) -> None:
    """Pretty-print a simple table to the console."""
    widths = [max(len(row[i]) for row in table) for i in range(len(table[0]))]
    for row in table:
        print("  ".join(cell.ljust(widths[j]) for j, cell in enumerate(row)))
