import folium
import pytest

from qsomap.geodesy import GeoPoint
from qsomap.mapview import (
    CURRENT_MARKER,
    DESTINATION_MARKER,
    STATION_ZOOM,
    FoliumMapView,
    marker_popup,
    next_layer,
    sync_map,
)
from qsomap.session import StationState, clear_destination

HOME = GeoPoint(40.7128, -74.0060)
DEST = GeoPoint(51.5074, -0.1278, name="London")


class RecordingView:
    def __init__(self):
        self.markers = {}
        self.line = None
        self.viewport = None

    def set_marker(self, key, point, popup):
        self.markers[key] = point

    def clear_marker(self, key):
        self.markers.pop(key, None)

    def draw_line(self, a, b):
        self.line = (a, b)

    def clear_line(self):
        self.line = None

    def set_viewport(self, center, zoom):
        self.viewport = (center, zoom)


def test_sync_map_draws_both_stations_and_line():
    view = RecordingView()
    state = StationState(current=HOME, destination=DEST)
    sync_map(view, state, recenter=True)
    assert view.markers == {CURRENT_MARKER: HOME, DESTINATION_MARKER: DEST}
    assert view.line == (HOME, DEST)
    assert view.viewport == (HOME, STATION_ZOOM)


def test_sync_map_removes_stale_destination():
    view = RecordingView()
    state = StationState(current=HOME, destination=DEST)
    sync_map(view, state)
    sync_map(view, clear_destination(state))
    assert DESTINATION_MARKER not in view.markers
    assert view.line is None
    assert view.viewport is None


def test_marker_popup():
    html = marker_popup("Destination", DEST)
    assert html.startswith("<b>Destination</b>")
    assert "London" in html
    assert "Lat: 51.507400" in html
    assert "Lon: -0.127800" in html
    assert "None" not in marker_popup("Your Location", HOME)


def test_layer_cycle():
    assert next_layer("street") == "satellite"
    assert next_layer("satellite") == "terrain"
    assert next_layer("terrain") == "street"
    assert next_layer("unknown") == "street"


def test_folium_view_renders_map():
    view = FoliumMapView()
    sync_map(view, StationState(current=HOME, destination=DEST), recenter=True)
    assert set(view.markers) == {CURRENT_MARKER, DESTINATION_MARKER}
    assert view.zoom == STATION_ZOOM
    m = view.render()
    assert isinstance(m, folium.Map)
    html = m.get_root().render()
    assert "51.5074" in html
    assert view.toggle_layer() == "satellite"
    assert isinstance(view.render(), folium.Map)


def test_folium_view_rejects_unknown_layer():
    with pytest.raises(ValueError):
        FoliumMapView(layer="hybrid")
