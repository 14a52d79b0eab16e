from .errors import QsoMapError, InvalidFormat, OutOfRange, DegenerateInput
from .geodesy import (
	GeoPoint,
	EARTH_RADIUS_KM,
	bearing_deg,
	distance_km,
	compass_direction,
	format_coordinate,
)
from .maidenhead import (
	encode_grid,
	decode_grid,
	is_valid_locator,
	grid_center,
	grid_distance_km,
)
from .fspl import fspl_db, invert_fspl_distance_km
from .terrain import (
	TerrainModel,
	LinearTerrainModel,
	FlatTerrainModel,
	select_terrain_model,
)
from .link_budget import (
	DIPOLE_GAIN_DBI,
	LinkBudgetInput,
	LinkBudgetResult,
	compute_link_budget,
	qso_probability_percent,
	watts_to_dbm,
)
from .config import (
	RadioDials,
	RadioSettings,
	parse_settings_text,
	load_settings_from_text_file,
)
from .session import (
	StationState,
	StationReport,
	with_current,
	with_destination,
	clear_destination,
	with_dials,
	dials_from_inputs,
	point_from_inputs,
	build_report,
	report_to_table,
	print_table,
)
from .scenario import (
	SweepRow,
	sweep_distances_km,
	run_distance_sweep,
	max_range_km,
	rows_to_table,
	save_sweep_csv,
	plot_sweep,
)
from .mapview import MapView, FoliumMapView, next_layer, marker_popup, sync_map

__all__ = [
	"QsoMapError",
	"InvalidFormat",
	"OutOfRange",
	"DegenerateInput",
	"GeoPoint",
	"EARTH_RADIUS_KM",
	"bearing_deg",
	"distance_km",
	"compass_direction",
	"format_coordinate",
	"encode_grid",
	"decode_grid",
	"is_valid_locator",
	"grid_center",
	"grid_distance_km",
	"fspl_db",
	"invert_fspl_distance_km",
	"TerrainModel",
	"LinearTerrainModel",
	"FlatTerrainModel",
	"select_terrain_model",
	"DIPOLE_GAIN_DBI",
	"LinkBudgetInput",
	"LinkBudgetResult",
	"compute_link_budget",
	"qso_probability_percent",
	"watts_to_dbm",
	"RadioDials",
	"RadioSettings",
	"parse_settings_text",
	"load_settings_from_text_file",
	"StationState",
	"StationReport",
	"with_current",
	"with_destination",
	"clear_destination",
	"with_dials",
	"dials_from_inputs",
	"point_from_inputs",
	"build_report",
	"report_to_table",
	"print_table",
	"SweepRow",
	"sweep_distances_km",
	"run_distance_sweep",
	"max_range_km",
	"rows_to_table",
	"save_sweep_csv",
	"plot_sweep",
	"MapView",
	"FoliumMapView",
	"next_layer",
	"marker_popup",
	"sync_map",
]
