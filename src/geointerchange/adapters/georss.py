"""
GeoRSS adapter (Simple encoding).

GeoRSS Simple writes positions as flattened 'lat lon lat lon ...' tokens,
the inverse of the internal (x=lon, y=lat) order, so every pair is swapped
at this boundary. Plain GeoRSS has no concept of polygon holes: only the
exterior ring of a polygon is written.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Callable, Dict, List, Optional, Sequence

from ..core.errors import EmptyInputError, FormatError, UnsupportedGeometryError
from ..core.registry import geometry_reduce, type_counts
from ..models.geometry import Geometry, GeometryType, LineString, Point, Polygon
from .base import (
    Adapter,
    Markup,
    element_prefix,
    find_elements,
    format_ordinate,
    serialize,
)

logger = logging.getLogger(__name__)


class GeoRSSAdapter(Adapter):
    """
    Read and write GeoRSS Simple geometry elements.

    Reading collects every point, line, polygon, box and circle element of
    the document, in that category order, wherever they appear.
    """

    format_name = "GeoRSS"

    def __init__(self, max_depth: Optional[int] = None) -> None:
        super().__init__(max_depth)
        self._collectors: Dict[str, Callable[[ET.Element], Geometry]] = {
            "point": self._parse_point,
            "line": self._parse_line,
            "polygon": self._parse_polygon,
            "box": self._parse_box,
            "circle": self._parse_circle,
        }
        self._builders: Dict[GeometryType, Callable[[Geometry, str, int], ET.Element]] = {
            GeometryType.POINT: self._build_point,
            GeometryType.LINE_STRING: self._build_line,
            GeometryType.POLYGON: self._build_polygon,
            GeometryType.MULTI_POINT: self._build_where,
            GeometryType.MULTI_LINE_STRING: self._build_where,
            GeometryType.MULTI_POLYGON: self._build_where,
            GeometryType.GEOMETRY_COLLECTION: self._build_where,
        }

    def read(self, text: Markup) -> Geometry:
        """
        Read GeoRSS text into a geometry.

        Args:
            text: Feed, entry or bare GeoRSS element, as text or as bytes
                honouring their XML encoding declaration

        Returns:
            Single geometry, Multi geometry or GeometryCollection

        Raises:
            FormatError: If the markup or coordinates are invalid
            EmptyInputError: If no GeoRSS geometry element is present
        """
        text = self._check_input(text)
        root = self._parse_xml(text)

        geometries: List[Geometry] = []
        try:
            for name, collector in self._collectors.items():
                geometries.extend(collector(element) for element in find_elements(root, name))
        except FormatError as e:
            logger.error(f"Failed to read GeoRSS geometry: {e.message}")
            raise FormatError(
                e.message, text=text, format_name=self.format_name, details=e.details
            ) from e

        if not geometries:
            logger.error("No geometry found in GeoRSS input")
            raise EmptyInputError(
                "Invalid / Empty GeoRSS", text=text, format_name=self.format_name
            )

        logger.debug(f"Decoded GeoRSS geometries: {type_counts(geometries)}")
        return geometry_reduce(geometries)

    def write(self, geometry: Geometry, namespace: Optional[str] = None) -> str:
        """
        Write a geometry as GeoRSS markup.

        Polygon holes are dropped. Multi geometries and collections are
        wrapped in a single 'where' element.

        Args:
            geometry: Geometry to encode
            namespace: Prefix applied to every emitted element, e.g. 'georss'

        Returns:
            GeoRSS markup
        """
        return serialize(self._build_geometry(geometry, element_prefix(namespace), 0))

    def _ordinates(self, element: ET.Element) -> List[float]:
        """
        Read the whitespace separated numbers of an element.

        Raises:
            FormatError: If a token is not a number
        """
        tokens = (element.text or "").split()
        try:
            return [float(token) for token in tokens]
        except ValueError as e:
            raise FormatError(
                f"Invalid GeoRSS coordinates: {' '.join(tokens)}", format_name=self.format_name
            ) from e

    def _points(self, element: ET.Element) -> List[Point]:
        ordinates = self._ordinates(element)
        # lat lon pairs; a dangling latitude is ignored
        return [
            Point(ordinates[i + 1], ordinates[i]) for i in range(0, len(ordinates) - 1, 2)
        ]

    def _parse_point(self, element: ET.Element) -> Point:
        """First position of a point element, or the empty point."""
        points = self._points(element)
        return points[0] if points else Point()

    def _parse_line(self, element: ET.Element) -> LineString:
        return LineString(self._points(element))

    def _parse_polygon(self, element: ET.Element) -> Polygon:
        """Single ring polygon, empty when the element has no positions."""
        points = self._points(element)
        if not points:
            return Polygon()
        return Polygon([LineString(points)])

    def _parse_box(self, element: ET.Element) -> Polygon:
        """
        Parse a 'lower-lat lower-lon upper-lat upper-lon' box.

        Returns:
            Polygon with a closed five point ring starting at the upper corner

        Raises:
            FormatError: If fewer than four ordinates are given
        """
        ordinates = self._ordinates(element)
        if len(ordinates) < 4:
            raise FormatError(
                f"GeoRSS box needs 4 ordinates, found {len(ordinates)}",
                format_name=self.format_name,
            )
        lower_lat, lower_lon, upper_lat, upper_lon = ordinates[:4]
        ring = LineString(
            [
                Point(upper_lon, upper_lat),
                Point(upper_lon, lower_lat),
                Point(lower_lon, lower_lat),
                Point(lower_lon, upper_lat),
                Point(upper_lon, upper_lat),
            ]
        )
        return Polygon([ring])

    def _parse_circle(self, element: ET.Element) -> Point:
        """Parse a 'lat lon radius' circle into its centre."""
        # Only the centre survives, the radius has no place in the model
        ordinates = self._ordinates(element)
        if len(ordinates) < 2:
            raise FormatError(
                f"GeoRSS circle needs a centre, found {len(ordinates)} ordinates",
                format_name=self.format_name,
            )
        return Point(ordinates[1], ordinates[0])

    def _build_geometry(self, geometry: Geometry, prefix: str, depth: int) -> ET.Element:
        geom_type = self._geometry_type(geometry)
        builder = self._builders.get(geom_type)
        if builder is None:
            raise UnsupportedGeometryError(
                f"No GeoRSS encoding for {geom_type}", type_name=type(geometry).__name__
            )
        return builder(geometry, prefix, depth)

    @staticmethod
    def _positions(tag: str, points: Sequence[Point]) -> ET.Element:
        """Element holding the flattened 'lat lon' pairs of the non-empty points."""
        element = ET.Element(tag)
        element.text = " ".join(
            f"{format_ordinate(p.y)} {format_ordinate(p.x)}" for p in points if not p.is_empty
        )
        return element

    def _build_point(self, geometry: Point, prefix: str, depth: int) -> ET.Element:
        return self._positions(f"{prefix}point", [geometry])

    def _build_line(self, geometry: LineString, prefix: str, depth: int) -> ET.Element:
        return self._positions(f"{prefix}line", geometry.points)

    def _build_polygon(self, geometry: Polygon, prefix: str, depth: int) -> ET.Element:
        """Build a polygon from the exterior ring, holes are dropped."""
        if geometry.interior_rings:
            logger.debug(f"Dropping {len(geometry.interior_rings)} polygon holes for GeoRSS")
        return self._positions(f"{prefix}polygon", geometry.exterior_ring.points)

    def _build_where(self, geometry: Geometry, prefix: str, depth: int) -> ET.Element:
        """
        Build one 'where' element around every component.

        Raises:
            NestingDepthError: If collections nest deeper than max_depth
        """
        self._check_depth(depth + 1)
        where = ET.Element(f"{prefix}where")
        for component in geometry.components:
            where.append(self._build_geometry(component, prefix, depth + 1))
        return where
