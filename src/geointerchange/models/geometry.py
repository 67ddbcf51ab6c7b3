"""
Canonical geometry object model.

Every adapter decodes into and encodes from these seven immutable variants.
Ordinates follow a fixed convention: ``x`` is the east-west ordinate
(longitude) and ``y`` the north-south one (latitude), whatever order a wire
format uses.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Optional, Tuple, Type

from ..core.errors import GeometryError


class GeometryType(str, Enum):
    """Canonical geometry type names."""

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"
    MULTI_POINT = "MultiPoint"
    MULTI_LINE_STRING = "MultiLineString"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


class Geometry(ABC):
    """Base class of the geometry variants."""

    @property
    @abstractmethod
    def geom_type(self) -> GeometryType:
        """Canonical type name."""

    @property
    @abstractmethod
    def components(self) -> Tuple["Geometry", ...]:
        """Child geometries, in order."""

    @property
    def is_empty(self) -> bool:
        return not self.components

    @property
    def num_geometries(self) -> int:
        return len(self.components)


def _as_tuple(items: Iterable, member: Type[Geometry], owner: str) -> tuple:
    values = tuple(items)
    for value in values:
        if not isinstance(value, member):
            raise GeometryError(
                f"{owner} components must be {member.__name__}, got {type(value).__name__}",
                geometry_type=owner,
            )
    return values


def _ordinate(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise GeometryError(f"Invalid ordinate: {value!r}", geometry_type="Point") from e


@dataclass(frozen=True)
class Point(Geometry):
    """
    A single position, or the empty point when both ordinates are None.

    Attributes:
        x: East-west ordinate (longitude)
        y: North-south ordinate (latitude)
    """

    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self) -> None:
        if (self.x is None) != (self.y is None):
            raise GeometryError(
                "Point needs both ordinates or neither", geometry_type="Point"
            )
        if self.x is not None:
            object.__setattr__(self, "x", _ordinate(self.x))
            object.__setattr__(self, "y", _ordinate(self.y))

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.POINT

    @property
    def components(self) -> Tuple[Geometry, ...]:
        return ()

    @property
    def is_empty(self) -> bool:
        return self.x is None

    @property
    def coords(self) -> Optional[Tuple[float, float]]:
        """(x, y) pair, or None for the empty point."""
        if self.is_empty:
            return None
        return (self.x, self.y)  # type: ignore[return-value]


@dataclass(frozen=True)
class LineString(Geometry):
    """Ordered sequence of points. Also used for polygon rings."""

    points: Tuple[Point, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_tuple(self.points, Point, "LineString"))

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.LINE_STRING

    @property
    def components(self) -> Tuple[Point, ...]:
        return self.points

    @property
    def coords(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(p.coords for p in self.points if not p.is_empty)  # type: ignore[misc]

    @classmethod
    def from_coords(cls, coords: Iterable[Tuple[float, float]]) -> "LineString":
        """Build a line from (x, y) pairs."""
        return cls(Point(x, y) for x, y in coords)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Polygon(Geometry):
    """
    Polygon made of rings.

    Ring 0 is the exterior boundary, any further rings are holes. A polygon
    with no rings is empty.
    """

    rings: Tuple[LineString, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rings", _as_tuple(self.rings, LineString, "Polygon"))

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.POLYGON

    @property
    def components(self) -> Tuple[LineString, ...]:
        return self.rings

    @property
    def exterior_ring(self) -> LineString:
        """First ring, or an empty line when the polygon is empty."""
        if not self.rings:
            return LineString()
        return self.rings[0]

    @property
    def interior_rings(self) -> Tuple[LineString, ...]:
        return self.rings[1:]


@dataclass(frozen=True)
class _Collection(Geometry):
    geometries: Tuple[Geometry, ...] = ()

    member_type: ClassVar[Type[Geometry]] = Geometry

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "geometries",
            _as_tuple(self.geometries, self.member_type, type(self).__name__),
        )

    @property
    def components(self) -> Tuple[Geometry, ...]:
        return self.geometries


@dataclass(frozen=True)
class MultiPoint(_Collection):
    """Ordered collection of points."""

    geometries: Tuple[Point, ...] = ()

    member_type = Point

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.MULTI_POINT


@dataclass(frozen=True)
class MultiLineString(_Collection):
    """Ordered collection of line strings."""

    geometries: Tuple[LineString, ...] = ()

    member_type = LineString

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.MULTI_LINE_STRING


@dataclass(frozen=True)
class MultiPolygon(_Collection):
    """Ordered collection of polygons."""

    geometries: Tuple[Polygon, ...] = ()

    member_type = Polygon

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.MULTI_POLYGON


@dataclass(frozen=True)
class GeometryCollection(_Collection):
    """Ordered, heterogeneous collection. Nested collections are kept as is."""

    @property
    def geom_type(self) -> GeometryType:
        return GeometryType.GEOMETRY_COLLECTION
