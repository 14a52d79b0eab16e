"""Streamlit dashboard: two stations on a map with bearing, grids and link estimate.

Renders:
- Sidebar inputs for your station, the destination and the radio dials
- Folium map with both markers and the connecting line (via FoliumMapView)
- Bearing / distance / grid metrics and the link estimate
- Received level vs distance for the current dials

Usage:
    streamlit run qsomap/dashboard_app.py

Place search and browser geolocation are not part of this app; coordinates
are typed in.
"""

import sys
from pathlib import Path

import pandas as pd
import streamlit as st
from streamlit_folium import st_folium

# Ensure project root is on sys.path when run via `streamlit run .../dashboard_app.py`
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from qsomap.config import RadioDials
from qsomap.errors import OutOfRange
from qsomap.mapview import TILE_LAYERS, FoliumMapView, sync_map
from qsomap.scenario import rows_to_table, run_distance_sweep, sweep_distances_km
from qsomap.session import (
    NOT_AVAILABLE,
    StationState,
    build_report,
    dials_from_inputs,
    point_from_inputs,
    report_to_table,
)
from qsomap.terrain import select_terrain_model

_QSO_COLORS = {10: "#e74c3c", 30: "#e67e22", 60: "#f1c40f", 80: "#9acd32", 100: "#2ecc71"}


def _read_point(label: str, lat_default: str, lon_default: str):
    lat_text = st.text_input(f"{label} latitude", value=lat_default)
    lon_text = st.text_input(f"{label} longitude", value=lon_default)
    try:
        return point_from_inputs(lat_text, lon_text)
    except OutOfRange as exc:
        st.warning(f"{label}: {exc}")
        return None


def main():
    st.set_page_config(page_title="QSO Map", layout="wide")
    st.title("QSO Map: bearing, grid and link estimate")

    defaults = RadioDials()
    with st.sidebar:
        st.header("Stations")
        current = _read_point("Your", "40.712800", "-74.006000")
        destination = _read_point("Destination", "", "")
        st.header("Radio")
        dials = dials_from_inputs(
            st.text_input("Frequency (MHz)", value=f"{defaults.frequency_mhz}"),
            st.text_input("Power (W)", value=f"{defaults.transmit_power_w}"),
            st.text_input("Antenna height (m)", value=f"{defaults.antenna_height_m}"),
            defaults,
        )
        terrain_name = st.selectbox("Terrain model", ["linear", "flat"], index=0)
        layer = st.selectbox("Map layer", list(TILE_LAYERS), index=0)

    state = StationState(current=current, destination=destination, dials=dials)
    terrain = select_terrain_model(terrain_name)
    report = build_report(state, terrain=terrain)

    view = FoliumMapView(layer=layer)
    sync_map(view, state, recenter=True)
    st_folium(view.render(), height=400, width=None)

    st.subheader("Results")
    table = report_to_table(report)
    cols = st.columns(3)
    for i, (metric, value) in enumerate(table[1:]):
        cols[i % 3].metric(metric.replace("_", " ").title(), value)
    if report.not_applicable:
        st.info(f"Link estimate {NOT_AVAILABLE}: {report.not_applicable}")
    if report.link is not None:
        pct = report.link.qso_probability_percent
        st.markdown(
            f"<div style='background:{_QSO_COLORS[pct]}; padding:8px; border-radius:4px; text-align:center;'>"
            f"QSO probability <b>{pct}%</b></div>",
            unsafe_allow_html=True,
        )

    st.subheader("Received level vs distance")
    max_km = st.slider("Max distance (km)", min_value=5, max_value=200, value=50, step=5)
    try:
        rows = run_distance_sweep(dials, sweep_distances_km(0.0, float(max_km), 60), terrain=terrain)
    except ValueError as exc:
        st.warning(f"Sweep {NOT_AVAILABLE}: {exc}")
        return
    sweep = rows_to_table(rows)
    df = pd.DataFrame(sweep[1:], columns=sweep[0]).astype(float)
    st.line_chart(df, x="distance_km", y="signal_dbm")


if __name__ == "__main__":
    main()
