"""
Conversion between the geometry model and shapely.

Computational geometry (area, centroid, predicates...) is delegated to the
shapely/GEOS engine; this module moves geometries across that boundary.
"""

import logging
from typing import Callable, Dict

from shapely.errors import ShapelyError
from shapely.geometry import GeometryCollection as ShapelyGeometryCollection
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import MultiLineString as ShapelyMultiLineString
from shapely.geometry import MultiPoint as ShapelyMultiPoint
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

from ..models.geometry import (
    Geometry,
    GeometryCollection,
    GeometryType,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .config import geos_installed
from .errors import ConfigurationError, GeometryError, UnsupportedGeometryError

logger = logging.getLogger(__name__)


def _point(geometry: Point) -> BaseGeometry:
    if geometry.is_empty:
        return ShapelyPoint()
    return ShapelyPoint(geometry.x, geometry.y)


def _line_string(geometry: LineString) -> BaseGeometry:
    return ShapelyLineString(geometry.coords or None)


def _polygon(geometry: Polygon) -> BaseGeometry:
    if geometry.is_empty:
        return ShapelyPolygon()
    return ShapelyPolygon(
        geometry.exterior_ring.coords,
        [ring.coords for ring in geometry.interior_rings] or None,
    )


_TO_SHAPELY: Dict[GeometryType, Callable[..., BaseGeometry]] = {
    GeometryType.POINT: _point,
    GeometryType.LINE_STRING: _line_string,
    GeometryType.POLYGON: _polygon,
    GeometryType.MULTI_POINT: lambda g: ShapelyMultiPoint([_point(p) for p in g.geometries] or None),
    GeometryType.MULTI_LINE_STRING: lambda g: ShapelyMultiLineString(
        [_line_string(line) for line in g.geometries] or None
    ),
    GeometryType.MULTI_POLYGON: lambda g: ShapelyMultiPolygon(
        [_polygon(p) for p in g.geometries] or None
    ),
    GeometryType.GEOMETRY_COLLECTION: lambda g: ShapelyGeometryCollection(
        [_convert(member) for member in g.geometries] or None
    ),
}


def _convert(geometry: Geometry) -> BaseGeometry:
    if not isinstance(geometry, Geometry):
        raise UnsupportedGeometryError(
            f"Cannot convert {type(geometry).__name__} to shapely",
            type_name=type(geometry).__name__,
        )
    return _TO_SHAPELY[geometry.geom_type](geometry)


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """
    Convert a model geometry to a shapely geometry.

    Args:
        geometry: Geometry to convert

    Returns:
        Equivalent shapely geometry

    Raises:
        ConfigurationError: If the geometry engine is disabled
        GeometryError: If shapely rejects the geometry (e.g. a 1-point line)
    """
    if not geos_installed():
        raise ConfigurationError(
            "The shapely geometry engine is disabled", config_key="use_geos"
        )

    try:
        return _convert(geometry)
    except (ValueError, ShapelyError) as e:
        logger.error(f"Failed to convert {geometry.geom_type.value} to shapely: {e}")
        raise GeometryError(
            f"Cannot convert to shapely: {e}", geometry_type=geometry.geom_type.value
        ) from e


def _line_from_shapely(shape: BaseGeometry) -> LineString:
    return LineString.from_coords((c[0], c[1]) for c in shape.coords)


def _polygon_from_shapely(shape: BaseGeometry) -> Polygon:
    if shape.is_empty:
        return Polygon()
    rings = [_line_from_shapely(shape.exterior)]
    rings.extend(_line_from_shapely(ring) for ring in shape.interiors)
    return Polygon(rings)


_FROM_SHAPELY: Dict[str, Callable[[BaseGeometry], Geometry]] = {
    "Point": lambda s: Point() if s.is_empty else Point(s.x, s.y),
    "LineString": _line_from_shapely,
    "LinearRing": _line_from_shapely,
    "Polygon": _polygon_from_shapely,
    "MultiPoint": lambda s: MultiPoint(from_shapely(g) for g in s.geoms),
    "MultiLineString": lambda s: MultiLineString(_line_from_shapely(g) for g in s.geoms),
    "MultiPolygon": lambda s: MultiPolygon(_polygon_from_shapely(g) for g in s.geoms),
    "GeometryCollection": lambda s: GeometryCollection(from_shapely(g) for g in s.geoms),
}


def from_shapely(shape: BaseGeometry) -> Geometry:
    """
    Convert a shapely geometry to a model geometry.

    Z ordinates are dropped; LinearRings become LineStrings.

    Raises:
        UnsupportedGeometryError: If the shapely type has no model equivalent
    """
    converter = _FROM_SHAPELY.get(getattr(shape, "geom_type", ""))
    if converter is None:
        raise UnsupportedGeometryError(
            f"Cannot convert {type(shape).__name__} from shapely",
            type_name=type(shape).__name__,
        )
    return converter(shape)
