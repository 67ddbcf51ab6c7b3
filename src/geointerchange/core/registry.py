"""
Geometry type registry and reduction.

The registry maps lowercase node names, as found in XML based formats, to
canonical geometry types. Reduction folds the list of geometries an adapter
decoded into the single most specific canonical shape.
"""

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from ..models.geometry import (
    Geometry,
    GeometryCollection,
    GeometryType,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
)
from .errors import EmptyInputError

logger = logging.getLogger(__name__)

_GEOMETRY_LIST: Mapping[str, GeometryType] = MappingProxyType(
    {geom_type.value.lower(): geom_type for geom_type in GeometryType}
)

# Node names some formats use for a canonical type
MULTIGEOMETRY_ALIAS: Mapping[str, str] = MappingProxyType(
    {"multigeometry": "geometrycollection"}
)
LINEARRING_ALIAS: Mapping[str, str] = MappingProxyType({"linearring": "linestring"})

_MULTI_TYPES: Mapping[GeometryType, type] = MappingProxyType(
    {
        GeometryType.POINT: MultiPoint,
        GeometryType.LINE_STRING: MultiLineString,
        GeometryType.POLYGON: MultiPolygon,
    }
)


def geometry_list() -> Mapping[str, GeometryType]:
    """
    Return the read-only map of lowercase node names to geometry types.

    Examples:
        >>> geometry_list()["linestring"]
        <GeometryType.LINE_STRING: 'LineString'>
    """
    return _GEOMETRY_LIST


def local_name(tag: str) -> str:
    """Strip a '{uri}' or 'prefix:' qualifier from an element tag."""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    if ":" in tag:
        tag = tag.rsplit(":", 1)[1]
    return tag


def resolve_node_name(
    node_name: str, aliases: Optional[Mapping[str, str]] = None
) -> Optional[GeometryType]:
    """
    Resolve an element name to a geometry type.

    Args:
        node_name: Element tag, possibly namespaced, any case
        aliases: Format specific lowercase name substitutions

    Returns:
        The matching GeometryType, or None for foreign elements
    """
    name = local_name(node_name).lower()
    if aliases:
        name = aliases.get(name, name)
    return _GEOMETRY_LIST.get(name)


def collect_components(geometries: Sequence[Geometry]) -> Geometry:
    """
    Wrap geometries into one collection shape.

    Members sharing one of Point, LineString or Polygon become the matching
    Multi type; anything else becomes a GeometryCollection. Order is kept and
    nested collections are not flattened.
    """
    kinds = {g.geom_type for g in geometries}
    if len(kinds) == 1:
        (kind,) = kinds
        multi_type = _MULTI_TYPES.get(kind)
        if multi_type is not None:
            return multi_type(geometries)
    return GeometryCollection(geometries)


def geometry_reduce(geometries: Sequence[Geometry]) -> Geometry:
    """
    Reduce a list of geometries to a single canonical geometry.

    Args:
        geometries: Decoded geometries in document order

    Returns:
        The only element unchanged, or the collection built by
        collect_components()

    Raises:
        EmptyInputError: If the list is empty
    """
    if not geometries:
        raise EmptyInputError("Cannot reduce an empty list of geometries")

    if len(geometries) == 1:
        return geometries[0]

    reduced = collect_components(geometries)
    logger.debug(f"Reduced {len(geometries)} geometries to {reduced.geom_type.value}")
    return reduced


def type_counts(geometries: Sequence[Geometry]) -> Dict[str, int]:
    """Count geometries per canonical type name."""
    counts: Dict[str, int] = {}
    for geometry in geometries:
        name = geometry.geom_type.value
        counts[name] = counts.get(name, 0) + 1
    return counts
