"""
geointerchange - canonical geometry model with KML and GeoRSS adapters.

This package provides an immutable geometry object model and format adapters
that read and write it, normalizing each format's coordinate order and
naming quirks at the boundary.
"""

from typing import Optional, Union

from .adapters import GeoRSSAdapter, KMLAdapter, get_adapter, read_kmz, write_kmz
from .core.config import geos_installed, settings
from .core.errors import (
    EmptyInputError,
    FormatError,
    GeoInterchangeError,
    GeometryError,
    NestingDepthError,
    UnsupportedGeometryError,
)
from .core.logging_config import LogContext, setup_logging
from .core.registry import geometry_list, geometry_reduce
from .core.shapely_bridge import from_shapely, to_shapely
from .models.geometry import (
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

__version__ = "0.1.0"


def load(text: Union[str, bytes], format_name: str) -> Geometry:
    """
    Read text in the given format.

    Examples:
        >>> load("<Point><coordinates>10,20</coordinates></Point>", "kml")
        Point(x=10.0, y=20.0)
    """
    return get_adapter(format_name).read(text)


def dump(geometry: Geometry, format_name: str, namespace: Optional[str] = None) -> str:
    """
    Write a geometry in the given format.

    Examples:
        >>> dump(Point(10, 20), "georss")
        '<point>20 10</point>'
    """
    return get_adapter(format_name).write(geometry, namespace)


__all__ = [
    "EmptyInputError",
    "FormatError",
    "GeoInterchangeError",
    "GeoRSSAdapter",
    "Geometry",
    "GeometryCollection",
    "GeometryError",
    "GeometryType",
    "KMLAdapter",
    "LineString",
    "LogContext",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "NestingDepthError",
    "Point",
    "Polygon",
    "UnsupportedGeometryError",
    "dump",
    "from_shapely",
    "geometry_list",
    "geometry_reduce",
    "geos_installed",
    "load",
    "read_kmz",
    "settings",
    "setup_logging",
    "to_shapely",
    "write_kmz",
    "__version__",
]
