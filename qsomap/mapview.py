"""Map side of the UI, behind a small capability interface.

``MapView`` is what the UI shell needs from a mapping widget: place or
remove a named marker, draw/clear the great-circle line between the two
stations and move the viewport. ``FoliumMapView`` implements it with
folium; ``sync_map`` redraws a view from a ``StationState``.

The core modules never import this file.
"""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Tuple

import folium

from .geodesy import GeoPoint
from .session import StationState

CURRENT_MARKER = "current"
DESTINATION_MARKER = "destination"

DEFAULT_CENTER = GeoPoint(latitude=40.7128, longitude=-74.0060)
DEFAULT_ZOOM = 10
STATION_ZOOM = 12

_MARKER_COLORS = {CURRENT_MARKER: "blue", DESTINATION_MARKER: "red"}

# name -> (tiles url, attribution, max zoom)
TILE_LAYERS: Dict[str, Tuple[str, str, int]] = {
    "street": (
        "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "© OpenStreetMap contributors",
        19,
    ),
    "satellite": (
        "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        "© Esri",
        19,
    ),
    "terrain": (
        "https://{s}.tile.opentopomap.org/{z}/{x}/{y}.png",
        "© OpenTopoMap",
        17,
    ),
}


class MapView(Protocol):
    def set_marker(self, key: str, point: GeoPoint, popup: str) -> None:
        ...

    def clear_marker(self, key: str) -> None:
        ...

    def draw_line(self, a: GeoPoint, b: GeoPoint) -> None:
        ...

    def clear_line(self) -> None:
        ...

    def set_viewport(self, center: GeoPoint, zoom: int) -> None:
        ...


def next_layer(layer: str) -> str:
    """Layer that follows ``layer`` in the street -> satellite -> terrain cycle."""
    names = list(TILE_LAYERS)
    if layer not in names:
        return names[0]
    return names[(names.index(layer) + 1) % len(names)]


def marker_popup(label: str, point: GeoPoint) -> str:
    """Popup HTML: label, optional place name, coordinates to 6 decimals."""
    parts = [f"<b>{label}</b>"]
    if point.name:
        parts.append(point.name)
    parts.append(f"Lat: {point.latitude:.6f}")
    parts.append(f"Lon: {point.longitude:.6f}")
    return "<br>".join(parts)


class FoliumMapView:
    """MapView backed by folium.

    folium maps are build-once documents, so the view keeps its markers,
    line and viewport as plain data and ``render`` assembles a fresh
    ``folium.Map`` from them.
    """

    def __init__(self, layer: str = "street"):
        if layer not in TILE_LAYERS:
            raise ValueError(f"Unknown tile layer: {layer!r}")
        self.layer = layer
        self.center = DEFAULT_CENTER
        self.zoom = DEFAULT_ZOOM
        self.markers: Dict[str, Tuple[GeoPoint, str]] = {}
        self.line: Optional[Tuple[GeoPoint, GeoPoint]] = None

    def set_marker(self, key: str, point: GeoPoint, popup: str) -> None:
        self.markers[key] = (point, popup)

    def clear_marker(self, key: str) -> None:
        self.markers.pop(key, None)

    def draw_line(self, a: GeoPoint, b: GeoPoint) -> None:
        self.line = (a, b)

    def clear_line(self) -> None:
        self.line = None

    def set_viewport(self, center: GeoPoint, zoom: int) -> None:
        self.center = center
        self.zoom = zoom

    def toggle_layer(self) -> str:
        self.layer = next_layer(self.layer)
        return self.layer

    def render(self) -> folium.Map:
        tiles, attribution, max_zoom = TILE_LAYERS[self.layer]
        m = folium.Map(
            location=[self.center.latitude, self.center.longitude],
            zoom_start=self.zoom,
            tiles=tiles,
            attr=attribution,
            max_zoom=max_zoom,
        )
        for key, (point, popup) in self.markers.items():
            folium.Marker(
                [point.latitude, point.longitude],
                popup=folium.Popup(popup),
                icon=folium.Icon(color=_MARKER_COLORS.get(key, "gray")),
            ).add_to(m)
        if self.line is not None:
            a, b = self.line
            folium.PolyLine(
                [[a.latitude, a.longitude], [b.latitude, b.longitude]],
                color="#667eea",
                weight=3,
                opacity=0.7,
                dash_array="10, 5",
            ).add_to(m)
        return m


def sync_map(view: MapView, state: StationState, recenter: bool = False) -> None:
    """Redraw markers and the connecting line from ``state``.

    Markers are cleared first so a station removed from the state also
    disappears from the map.
    """
    view.clear_marker(CURRENT_MARKER)
    view.clear_marker(DESTINATION_MARKER)
    view.clear_line()
    if state.current is not None:
        view.set_marker(CURRENT_MARKER, state.current, marker_popup("Your Location", state.current))
    if state.destination is not None:
        view.set_marker(DESTINATION_MARKER, state.destination, marker_popup("Destination", state.destination))
    if state.current is not None and state.destination is not None:
        view.draw_line(state.current, state.destination)
    if recenter and state.current is not None:
        view.set_viewport(state.current, STATION_ZOOM)
