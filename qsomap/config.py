"""Radio settings (the "dials") and a tolerant settings-text parser.

This module provides:
- RadioDials: frequency, transmit power and antenna height with the
  defaults the map tool starts with (2 m calling frequency, 5 W handheld,
  2 m antenna height).
- RadioSettings: dials plus the terrain model name.
- A regex-based parser for free-form settings text such as::

      Frequency: 446.0 MHz
      Power: 500 mW
      Antenna height: 15 ft
      Terrain: flat

Missing or unreadable lines fall back to the defaults. Units are converted
to MHz, W and m.
"""
import re
from dataclasses import dataclass, field
from typing import Optional

from .terrain import TerrainModelName


@dataclass(frozen=True)
class RadioDials:
    frequency_mhz: float = 146.52
    transmit_power_w: float = 5.0
    antenna_height_m: float = 2.0


@dataclass(frozen=True)
class RadioSettings:
    dials: RadioDials = field(default_factory=RadioDials)
    terrain: TerrainModelName = "linear"


_NUMBER = r"([0-9]+(?:\.[0-9]+)?)"

_FREQ_SCALE = {"khz": 1e-3, "mhz": 1.0, "ghz": 1e3}
_POWER_SCALE = {"mw": 1e-3, "w": 1.0, "kw": 1e3}
_LENGTH_SCALE = {"m": 1.0, "ft": 0.3048}


def _parse_value(text: str, label: str, scales: dict, default_unit: str) -> Optional[float]:
    units = "|".join(sorted(scales, key=len, reverse=True))
    m = re.search(rf"{label}\s*[:=]\s*{_NUMBER}\s*({units})?\b", text, re.IGNORECASE)
    if not m:
        return None
    unit = (m.group(2) or default_unit).lower()
    return float(m.group(1)) * scales[unit]


def parse_settings_text(text: str, defaults: Optional[RadioSettings] = None) -> RadioSettings:
    """Parse free-form settings text; fall back to defaults per field.

    Zero values are ignored the same way blank dial inputs are.
    """
    if defaults is None:
        defaults = RadioSettings()
    dials = defaults.dials

    freq = _parse_value(text, r"freq(?:uency)?", _FREQ_SCALE, "mhz")
    power = _parse_value(text, r"(?:tx\s*)?power", _POWER_SCALE, "w")
    height = _parse_value(text, r"antenna(?:\s*height)?", _LENGTH_SCALE, "m")

    terrain = defaults.terrain
    m = re.search(r"terrain\s*[:=]\s*(linear|flat)\b", text, re.IGNORECASE)
    if m:
        terrain = m.group(1).lower()

    return RadioSettings(
        dials=RadioDials(
            frequency_mhz=freq if freq else dials.frequency_mhz,
            transmit_power_w=power if power else dials.transmit_power_w,
            antenna_height_m=height if height else dials.antenna_height_m,
        ),
        terrain=terrain,
    )


def load_settings_from_text_file(path: str, defaults: Optional[RadioSettings] = None) -> RadioSettings:
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        txt = f.read()
    return parse_settings_text(txt, defaults)
