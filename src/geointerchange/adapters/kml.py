"""
KML adapter.

Decodes the geometry elements of a KML document (Point, LineString,
LinearRing, Polygon and MultiGeometry) into the canonical model and encodes
canonical geometries back into KML geometry markup. KML coordinates are
'lon,lat[,alt]' tuples separated by whitespace, which matches the internal
(x, y) order directly.
"""

import logging
import xml.etree.ElementTree as ET
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..core.errors import FormatError, UnsupportedGeometryError
from ..core.registry import (
    LINEARRING_ALIAS,
    MULTIGEOMETRY_ALIAS,
    collect_components,
    geometry_reduce,
    resolve_node_name,
    type_counts,
)
from ..models.geometry import (
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    Point,
    Polygon,
)
from .base import (
    Adapter,
    Markup,
    child_elements,
    element_prefix,
    find_elements,
    format_ordinate,
    serialize,
)

logger = logging.getLogger(__name__)

# KML namespace
KML_NS = "http://www.opengis.net/kml/2.2"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Inside MultiGeometry a LinearRing is read as a plain line
COLLECTION_ALIASES: Mapping[str, str] = MappingProxyType(
    {**MULTIGEOMETRY_ALIAS, **LINEARRING_ALIAS}
)


class KMLAdapter(Adapter):
    """
    Read and write KML geometry markup.

    Handles:
    - Documents with any number of Placemarks, at any depth
    - Bare geometry elements as the document root
    - Polygons with holes
    - Nested MultiGeometry
    """

    format_name = "KML"

    def __init__(self, max_depth: Optional[int] = None) -> None:
        super().__init__(max_depth)
        self._parsers: Dict[GeometryType, Callable[[ET.Element, int], Geometry]] = {
            GeometryType.POINT: self._parse_point,
            GeometryType.LINE_STRING: self._parse_line_string,
            GeometryType.POLYGON: self._parse_polygon,
            GeometryType.GEOMETRY_COLLECTION: self._parse_collection,
        }
        self._builders: Dict[GeometryType, Callable[[Geometry, str, int], ET.Element]] = {
            GeometryType.POINT: self._build_point,
            GeometryType.LINE_STRING: self._build_line_string,
            GeometryType.POLYGON: self._build_polygon,
            GeometryType.MULTI_POINT: self._build_collection,
            GeometryType.MULTI_LINE_STRING: self._build_collection,
            GeometryType.MULTI_POLYGON: self._build_collection,
            GeometryType.GEOMETRY_COLLECTION: self._build_collection,
        }

    def read(self, text: Markup) -> Geometry:
        """
        Read KML text into a geometry.

        Each Placemark contributes its first geometry element. Without any
        Placemark the document root itself is tried as a geometry. A document
        without any geometry yields an empty GeometryCollection.

        Args:
            text: KML document or fragment, as text or as bytes honouring
                their XML encoding declaration

        Returns:
            Single geometry, Multi geometry or GeometryCollection

        Raises:
            FormatError: If the markup or coordinates are invalid
        """
        text = self._check_input(text)
        root = self._parse_xml(text)

        try:
            geometries = self._extract_geometries(root)
        except FormatError as e:
            if e.text is not None:
                raise
            logger.error(f"Failed to read KML geometry: {e.message}")
            raise FormatError(
                e.message, text=text, format_name=self.format_name, details=e.details
            ) from e

        if not geometries:
            logger.warning("No geometry found in KML, returning an empty GeometryCollection")
            return GeometryCollection()

        logger.debug(f"Decoded KML geometries: {type_counts(geometries)}")
        return geometry_reduce(geometries)

    def write(self, geometry: Geometry, namespace: Optional[str] = None) -> str:
        """
        Write a geometry as KML markup.

        Args:
            geometry: Geometry to encode
            namespace: Prefix applied to every emitted element, e.g. 'kml'

        Returns:
            KML geometry markup without document wrapper
        """
        return serialize(self.build_element(geometry, namespace))

    def build_element(self, geometry: Geometry, namespace: Optional[str] = None) -> ET.Element:
        """
        Build the KML element tree of a geometry.

        Args:
            geometry: Geometry to encode
            namespace: Prefix applied to every element name

        Returns:
            Root geometry element, ready to be attached to a Placemark
        """
        return self._build_geometry(geometry, element_prefix(namespace), 0)

    def _extract_geometries(self, root: ET.Element) -> List[Geometry]:
        """Collect the first geometry of every Placemark, or the root geometry."""
        geometries: List[Geometry] = []

        placemarks = find_elements(root, "placemark")
        if placemarks:
            for placemark in placemarks:
                for child in placemark:
                    geometry = self._parse_node(child, MULTIGEOMETRY_ALIAS, 0)
                    if geometry is not None:
                        geometries.append(geometry)
                        break
        else:
            geometry = self._parse_node(root, MULTIGEOMETRY_ALIAS, 0)
            if geometry is not None:
                geometries.append(geometry)

        return geometries

    def _parse_node(
        self, element: ET.Element, aliases: Mapping[str, str], depth: int
    ) -> Optional[Geometry]:
        """
        Parse an element if it names a geometry.

        Args:
            element: Candidate element
            aliases: Node name substitutions in effect at this level
            depth: Collection nesting of the element

        Returns:
            Parsed geometry, or None for foreign elements
        """
        geom_type = resolve_node_name(element.tag, aliases)
        parser = self._parsers.get(geom_type) if geom_type else None
        if parser is None:
            return None
        return parser(element, depth)

    def _extract_coordinates(self, element: ET.Element) -> List[Tuple[float, float]]:
        """
        Read the (lon, lat) pairs of the first coordinates child.

        Tuples with fewer than two components are skipped, altitude is
        ignored.

        Raises:
            FormatError: If a component is not a number
        """
        coord_elements = child_elements(element, "coordinates")
        if not coord_elements:
            return []

        coordinates: List[Tuple[float, float]] = []
        for token in "".join(coord_elements[0].itertext()).split():
            values = token.split(",")
            if len(values) < 2:
                continue
            try:
                coordinates.append((float(values[0]), float(values[1])))
            except ValueError as e:
                raise FormatError(
                    f"Invalid KML coordinate: {token}", format_name=self.format_name
                ) from e

        return coordinates

    def _parse_point(self, element: ET.Element, depth: int) -> Point:
        """Parse a Point, empty when it has no coordinates."""
        coordinates = self._extract_coordinates(element)
        if not coordinates:
            return Point()
        return Point(*coordinates[0])

    def _parse_line_string(self, element: ET.Element, depth: int) -> LineString:
        """Parse a LineString or LinearRing."""
        return LineString.from_coords(self._extract_coordinates(element))

    def _parse_polygon(self, element: ET.Element, depth: int) -> Polygon:
        """
        Parse a Polygon.

        Returns:
            Polygon with the outer ring first and one ring per inner
            boundary LinearRing, or the empty polygon without outer boundary

        Raises:
            FormatError: If the outer boundary does not hold exactly one ring
        """
        outer_boundaries = child_elements(element, "outerboundaryis")
        if not outer_boundaries:
            return Polygon()

        outer_rings = child_elements(outer_boundaries[0], "linearring")
        if len(outer_rings) != 1:
            raise FormatError(
                f"KML outer boundary must hold exactly one LinearRing, found {len(outer_rings)}",
                format_name=self.format_name,
            )

        rings = [self._parse_line_string(outer_rings[0], depth)]
        for inner in child_elements(element, "innerboundaryis"):
            for ring in child_elements(inner, "linearring"):
                rings.append(self._parse_line_string(ring, depth))

        return Polygon(rings)

    def _parse_collection(self, element: ET.Element, depth: int) -> Geometry:
        """Parse a MultiGeometry into the matching Multi type or a collection."""
        self._check_depth(depth + 1)

        components: List[Geometry] = []
        for child in element:
            geometry = self._parse_node(child, COLLECTION_ALIASES, depth + 1)
            if geometry is not None:
                components.append(geometry)

        if not components:
            return GeometryCollection()
        return collect_components(components)

    def _build_geometry(self, geometry: Geometry, prefix: str, depth: int) -> ET.Element:
        geom_type = self._geometry_type(geometry)
        builder = self._builders.get(geom_type)
        if builder is None:
            raise UnsupportedGeometryError(
                f"No KML encoding for {geom_type}", type_name=type(geometry).__name__
            )
        return builder(geometry, prefix, depth)

    def _build_point(self, geometry: Point, prefix: str, depth: int) -> ET.Element:
        """Build a Point, without coordinates when empty."""
        point_elem = ET.Element(f"{prefix}Point")
        if not geometry.is_empty:
            coords = ET.SubElement(point_elem, f"{prefix}coordinates")
            coords.text = f"{format_ordinate(geometry.x)},{format_ordinate(geometry.y)}"
        return point_elem

    def _build_line_string(
        self, geometry: LineString, prefix: str, depth: int, tag: str = "LineString"
    ) -> ET.Element:
        """
        Build a LineString, or a LinearRing when ``tag`` says so.

        Args:
            geometry: Line to encode
            prefix: Element name qualifier, '' or 'ns:'
            depth: Collection nesting of the line
            tag: Element name, 'LineString' or 'LinearRing'

        Returns:
            Line element with space separated 'x,y' tuples
        """
        line_elem = ET.Element(f"{prefix}{tag}")
        if not geometry.is_empty:
            coords = ET.SubElement(line_elem, f"{prefix}coordinates")
            coords.text = " ".join(
                f"{format_ordinate(x)},{format_ordinate(y)}" for x, y in geometry.coords
            )
        return line_elem

    def _build_polygon(self, geometry: Polygon, prefix: str, depth: int) -> ET.Element:
        """Build a Polygon with one outer boundary and one inner boundary per hole."""
        poly_elem = ET.Element(f"{prefix}Polygon")
        if geometry.is_empty:
            return poly_elem

        outer = ET.SubElement(poly_elem, f"{prefix}outerBoundaryIs")
        outer.append(
            self._build_line_string(geometry.exterior_ring, prefix, depth, "LinearRing")
        )
        for hole in geometry.interior_rings:
            inner = ET.SubElement(poly_elem, f"{prefix}innerBoundaryIs")
            inner.append(self._build_line_string(hole, prefix, depth, "LinearRing"))
        return poly_elem

    def _build_collection(self, geometry: Geometry, prefix: str, depth: int) -> ET.Element:
        """Build a MultiGeometry holding every component."""
        self._check_depth(depth + 1)
        multi_elem = ET.Element(f"{prefix}MultiGeometry")
        for component in geometry.components:
            multi_elem.append(self._build_geometry(component, prefix, depth + 1))
        return multi_elem


def kml_document(geometry: Geometry, namespace: Optional[str] = None) -> str:
    """
    Wrap a geometry in a complete KML document with a single Placemark.

    When a namespace prefix is given it is bound to the KML namespace on the
    root element.
    """
    prefix = element_prefix(namespace)
    if namespace:
        kml_root = ET.Element(f"{prefix}kml", {f"xmlns:{namespace}": KML_NS})
    else:
        kml_root = ET.Element("kml", xmlns=KML_NS)

    placemark = ET.SubElement(kml_root, f"{prefix}Placemark")
    placemark.append(KMLAdapter().build_element(geometry, namespace))
    return XML_DECLARATION + serialize(kml_root)
