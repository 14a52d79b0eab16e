"""CLI to compute bearing, distance, grids and the link estimate for two stations.

Usage:
    python -m qsomap.cli --from 40.7128,-74.0060 --to 51.5074,-0.1278
    python -m qsomap.cli --from 40.7128,-74.0060 --to 40.80,-73.90 --freq 446 --power 0.5
    python -m qsomap.cli --grid FN20xr
    python -m qsomap.cli --from 40.7128,-74.0060 --sweep-out sweep.csv --sweep-max-km 60
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import RadioSettings, load_settings_from_text_file
from .geodesy import GeoPoint, format_coordinate
from .maidenhead import decode_grid, grid_center
from .scenario import plot_sweep, run_distance_sweep, save_sweep_csv, sweep_distances_km
from .session import (
    StationState,
    build_report,
    print_table,
    report_to_table,
    with_current,
    with_destination,
    with_dials,
)
from .terrain import select_terrain_model

logger = logging.getLogger("qsomap")


def _point_arg(text: str) -> GeoPoint:
    try:
        lat_s, lon_s = text.split(",")
        return GeoPoint(latitude=float(lat_s), longitude=float(lon_s))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected LAT,LON in degrees, got {text!r} ({exc})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bearing, distance, Maidenhead grids and a VHF/UHF link estimate")
    parser.add_argument("--from", dest="origin", type=_point_arg, help="your station as LAT,LON")
    parser.add_argument("--to", dest="destination", type=_point_arg, help="destination as LAT,LON")
    parser.add_argument("--grid", type=str, default=None, help="decode a 6-character locator and exit")
    parser.add_argument("--settings", type=Path, default=None, help="settings text file (frequency/power/antenna/terrain)")
    parser.add_argument("--freq", type=float, default=None, help="frequency in MHz")
    parser.add_argument("--power", type=float, default=None, help="transmit power in W")
    parser.add_argument("--antenna", type=float, default=None, help="antenna height in m (not used by the estimate)")
    parser.add_argument("--terrain", type=str, default=None, choices=["linear", "flat"])
    parser.add_argument("--sweep-out", type=Path, default=None, help="write a distance sweep CSV")
    parser.add_argument("--sweep-max-km", type=float, default=50.0)
    parser.add_argument("--sweep-points", type=int, default=50)
    parser.add_argument("--plot", type=Path, default=None, help="save the sweep as PNG")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _decode(locator: str) -> None:
    corner = decode_grid(locator)
    center = grid_center(locator)
    print(f"{locator}")
    print(f"  south-west corner: {format_coordinate(corner.latitude, 'lat')}, {format_coordinate(corner.longitude, 'lon')}")
    print(f"  centre:            {center.latitude:.6f}, {center.longitude:.6f}")


def run(args: argparse.Namespace) -> int:
    if args.grid:
        _decode(args.grid)
        return 0

    settings = RadioSettings()
    if args.settings is not None:
        settings = load_settings_from_text_file(str(args.settings), settings)
        logger.info("loaded settings from %s", args.settings)
    terrain = select_terrain_model(args.terrain or settings.terrain)

    state = StationState(dials=settings.dials)
    changes = {}
    if args.freq is not None:
        changes["frequency_mhz"] = args.freq
    if args.power is not None:
        changes["transmit_power_w"] = args.power
    if args.antenna is not None:
        changes["antenna_height_m"] = args.antenna
    if changes:
        state = with_dials(state, **changes)
    if args.origin is not None:
        state = with_current(state, args.origin)
    if args.destination is not None:
        state = with_destination(state, args.destination)

    if args.sweep_out is not None or args.plot is not None:
        distances = sweep_distances_km(0.0, args.sweep_max_km, args.sweep_points)
        rows = run_distance_sweep(state.dials, distances, terrain=terrain)
        if args.sweep_out is not None:
            save_sweep_csv(rows, args.sweep_out)
            print(f"Saved {len(rows)} rows to {args.sweep_out}")
        if args.plot is not None:
            plot_sweep(rows, args.plot)
            print(f"Saved plot to {args.plot}")
        if args.destination is None:
            return 0

    if state.current is None and state.destination is None:
        print("nothing to do: pass --from/--to, --grid or --sweep-out", file=sys.stderr)
        return 2

    report = build_report(state, terrain=terrain)
    print_table(report_to_table(report))
    if report.not_applicable:
        logger.warning("link estimate not applicable: %s", report.not_applicable)
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
