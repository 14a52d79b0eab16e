"""FSPL utilities in the practical MHz/km form.

FSPL [dB] = 32.44 + 20 log10(f_MHz) + 20 log10(d_km)

The 32.44 constant is 20 log10(4π · 10^9 / c) with the km/MHz scaling folded in.
"""

import math

from .errors import DegenerateInput

FSPL_CONSTANT_DB = 32.44


def fspl_db(distance_km: float, frequency_mhz: float) -> float:
    """Free-space path loss in dB.

    Args:
        distance_km: path length in km (> 0)
        frequency_mhz: carrier frequency in MHz (> 0)
    Raises:
        DegenerateInput: zero distance (loss is -inf, not a usable number)
        ValueError: negative or non-finite distance, non-positive or non-finite frequency
    """
    if not (math.isfinite(frequency_mhz) and frequency_mhz > 0):
        raise ValueError("frequency must be a positive finite number")
    if not (math.isfinite(distance_km) and distance_km >= 0):
        raise ValueError("distance must be a finite, non-negative number")
    if distance_km == 0:
        raise DegenerateInput("free-space loss is undefined at zero distance")
    return FSPL_CONSTANT_DB + 20.0 * math.log10(frequency_mhz) + 20.0 * math.log10(distance_km)


def invert_fspl_distance_km(fspl_db_value: float, frequency_mhz: float) -> float:
    """Invert FSPL to distance: d = 10^{(FSPL − 32.44 − 20 log10 f)/20}.

    Args:
        fspl_db_value: FSPL in dB
        frequency_mhz: frequency in MHz (> 0)
    """
    if not (math.isfinite(frequency_mhz) and frequency_mhz > 0):
        raise ValueError("frequency must be a positive finite number")
    exponent = (fspl_db_value - FSPL_CONSTANT_DB - 20.0 * math.log10(frequency_mhz)) / 20.0
    return 10.0 ** exponent
