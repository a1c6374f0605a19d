"""
GPX 1.1 writer for visualized route solutions.

Exports an annotated route to GPX with:
- A track holding the cleaned path
- A waypoint per turn (named "Turn N", described by its instruction)
- A waypoint per direction marker (type "direction")
- A custom route extension carrying path index and bearing
"""

import xml.etree.ElementTree as ET
from typing import TextIO

from route_export.data_models import SolutionRoute, TurnEvent, DirectionMarker


# XML namespaces
NS_GPX = "http://www.topografix.com/GPX/1/1"
NS_ROUTE = "http://routesolution.local/gpx/annotations/v1"
NS_XSI = "http://www.w3.org/2001/XMLSchema-instance"


def write_gpx(route: SolutionRoute, output: TextIO, name: str = "Route Solution") -> None:
    """
    Write a SolutionRoute to GPX 1.1 format.

    Args:
        route: Annotated route
        output: File-like object to write to
        name: Track name
    """
    ET.register_namespace("", NS_GPX)
    ET.register_namespace("route", NS_ROUTE)
    ET.register_namespace("xsi", NS_XSI)

    gpx = ET.Element(
        "{%s}gpx" % NS_GPX,
        attrib={
            "version": "1.1",
            "creator": "Route Solution Visualizer",
            "{%s}schemaLocation" % NS_XSI: (
                f"{NS_GPX} http://www.topografix.com/GPX/1/1/gpx.xsd"
            ),
        }
    )

    # Metadata
    metadata = ET.SubElement(gpx, "{%s}metadata" % NS_GPX)
    _add_gpx_elem(metadata, "name", name)
    source = "demonstration path" if route.synthetic else "mapped road coordinates"
    _add_gpx_elem(
        metadata, "desc",
        f"{len(route.vertex_ids)} vertices, {route.total_km:.2f} km, {source}",
    )

    # Waypoints must precede the track in GPX 1.1
    for turn in route.turns:
        _add_turn_waypoint(gpx, turn)
    for marker in route.markers:
        _add_marker_waypoint(gpx, marker)

    trk = ET.SubElement(gpx, "{%s}trk" % NS_GPX)
    _add_gpx_elem(trk, "name", name)
    _add_gpx_elem(trk, "src", "Route solver vertex sequence")

    trkseg = ET.SubElement(trk, "{%s}trkseg" % NS_GPX)
    for lat, lon in route.path:
        trkpt = ET.SubElement(trkseg, "{%s}trkpt" % NS_GPX)
        trkpt.set("lat", f"{lat:.7f}")
        trkpt.set("lon", f"{lon:.7f}")

    tree = ET.ElementTree(gpx)
    output.write('<?xml version="1.0" encoding="UTF-8"?>\n')
    tree.write(output, encoding="unicode", xml_declaration=False)


def _add_turn_waypoint(parent: ET.Element, turn: TurnEvent) -> None:
    wpt = _waypoint(parent, turn.location)
    _add_gpx_elem(wpt, "name", f"Turn {turn.sequence}")
    _add_gpx_elem(wpt, "desc", f"{turn.instruction} ({turn.turn_angle_deg:.0f} deg)")
    _add_gpx_elem(wpt, "type", "turn")

    extensions = ET.SubElement(wpt, "{%s}extensions" % NS_GPX)
    _add_route_elem(extensions, "path_index", str(turn.path_index))
    _add_route_elem(extensions, "turn_angle", f"{turn.turn_angle_deg:.1f}")
    _add_route_elem(extensions, "bearing", f"{turn.post_turn_bearing_deg:.1f}")
    _add_route_elem(extensions, "direction", turn.direction.value)


def _add_marker_waypoint(parent: ET.Element, marker: DirectionMarker) -> None:
    wpt = _waypoint(parent, marker.location)
    _add_gpx_elem(wpt, "type", "direction")

    extensions = ET.SubElement(wpt, "{%s}extensions" % NS_GPX)
    _add_route_elem(extensions, "segment_index", str(marker.segment_index))
    _add_route_elem(extensions, "bearing", f"{marker.bearing_deg:.1f}")


def _waypoint(parent: ET.Element, location) -> ET.Element:
    wpt = ET.SubElement(parent, "{%s}wpt" % NS_GPX)
    wpt.set("lat", f"{location[0]:.7f}")
    wpt.set("lon", f"{location[1]:.7f}")
    return wpt


def _add_gpx_elem(parent: ET.Element, name: str, value: str) -> None:
    """Add a GPX namespace element to the parent."""
    elem = ET.SubElement(parent, f"{{{NS_GPX}}}{name}")
    elem.text = value


def _add_route_elem(parent: ET.Element, name: str, value: str) -> None:
    """Add a route-annotation namespace element to the parent."""
    elem = ET.SubElement(parent, f"{{{NS_ROUTE}}}{name}")
    elem.text = value
