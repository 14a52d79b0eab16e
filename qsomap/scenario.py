"""Distance sweep for the link estimate.

Evaluates the link budget for one set of dials over a range of distances so
the drop-off of received level and QSO likelihood can be tabulated, saved as
CSV or plotted. Uses the same FSPL + terrain pipeline as a single-path
estimate; the terrain model can be swapped per sweep.
"""

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
import matplotlib.pyplot as plt

from .config import RadioDials
from .fspl import invert_fspl_distance_km
from .link_budget import (
	DIPOLE_GAIN_DBI,
	QSO_PROBABILITY_STEPS,
	LinkBudgetInput,
	compute_link_budget,
	watts_to_dbm,
)
from .terrain import TerrainModel


@dataclass
class SweepRow:
	"""One row of results for a distance."""
	distance_km: float
	free_space_loss_db: float
	path_loss_db: float
	signal_strength_dbm: float
	qso_probability_percent: int


def sweep_distances_km(start_km: float, stop_km: float, count: int = 50) -> List[float]:
	"""Evenly spaced distances; zero is skipped since FSPL is undefined there."""
	if count < 1:
		raise ValueError("count must be at least 1")
	if start_km < 0 or stop_km < start_km:
		raise ValueError("need 0 <= start_km <= stop_km")
	values = np.linspace(start_km, stop_km, count)
	return [float(d) for d in values if d > 0.0]


def run_distance_sweep(
	dials: RadioDials,
	distances_km: Iterable[float],
	terrain: Optional[TerrainModel] = None,
) -> List[SweepRow]:
	"""Compute the link estimate at each distance.

	Raises DegenerateInput if a zero distance is passed.
	"""
	rows: List[SweepRow] = []
	for d_km in distances_km:
		res = compute_link_budget(
			LinkBudgetInput(
				frequency_mhz=dials.frequency_mhz,
				transmit_power_w=dials.transmit_power_w,
				antenna_height_m=dials.antenna_height_m,
				distance_km=d_km,
			),
			terrain=terrain,
		)
		rows.append(SweepRow(
			distance_km=d_km,
			free_space_loss_db=res.free_space_loss_db,
			path_loss_db=res.path_loss_db,
			signal_strength_dbm=res.signal_strength_dbm,
			qso_probability_percent=res.qso_probability_percent,
		))
	return rows


def max_range_km(dials: RadioDials, min_signal_dbm: float = -120.0) -> float:
	"""Free-space distance at which the received level falls to ``min_signal_dbm``.

	Terrain loss is ignored, so this is an upper bound for the linear model.
	"""
	allowed_loss_db = watts_to_dbm(dials.transmit_power_w) + DIPOLE_GAIN_DBI - min_signal_dbm
	return invert_fspl_distance_km(allowed_loss_db, dials.frequency_mhz)


def rows_to_table(rows: Iterable[SweepRow]) -> List[List[str]]:
	"""Convert results to a simple table (strings) for printing or CSV export."""
	table = [["distance_km", "free_space_loss_db", "path_loss_db", "signal_dbm", "qso_percent"]]
	for r in rows:
		table.append([
			f"{r.distance_km:.2f}",
			f"{r.free_space_loss_db:.2f}",
			f"{r.path_loss_db:.2f}",
			f"{r.signal_strength_dbm:.2f}",
			str(r.qso_probability_percent),
		])
	return table


def save_sweep_csv(rows: Iterable[SweepRow], path: str | Path) -> Path:
	"""Save sweep rows to a CSV file (columns as in ``rows_to_table``)."""
	p = Path(path)
	p.parent.mkdir(parents=True, exist_ok=True)
	with p.open("w", newline="", encoding="utf-8") as f:
		writer = csv.writer(f)
		writer.writerows(rows_to_table(rows))
	return p


def plot_sweep(rows: List[SweepRow], outfile: str | Path = "signal_vs_distance.png", title: str | None = None) -> Path:
	"""Plot received level vs distance with the QSO bucket thresholds; save PNG."""
	if not rows:
		raise ValueError("nothing to plot")
	d = np.array([r.distance_km for r in rows])
	s = np.array([r.signal_strength_dbm for r in rows])

	fig, ax = plt.subplots(figsize=(7, 4), dpi=150)
	ax.plot(d, s, color="#667eea", label="Signal strength")
	for threshold, _percent in QSO_PROBABILITY_STEPS:
		ax.axhline(threshold, color="gray", linestyle="--", linewidth=0.8)
		ax.text(d[-1], threshold, f" {threshold:.0f} dBm", va="bottom", ha="right", fontsize=7, color="gray")
	ax.set_xlabel("Distance (km)")
	ax.set_ylabel("Signal (dBm)")
	ax.set_title(title or "Received level vs distance")
	ax.legend(loc="upper right")
	outp = Path(outfile)
	outp.parent.mkdir(parents=True, exist_ok=True)
	fig.tight_layout()
	fig.savefig(outp)
	plt.close(fig)
	return outp
