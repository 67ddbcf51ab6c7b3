"""
Tests for the GeoRSS adapter.

Tests cover:
- point, line, polygon, box and circle decoding with lat/lon swapping
- Feeds with several entries and the category ordering of results
- Encoding, 'where' wrappers and namespace prefixes
- Hole loss on polygon encoding
- Error handling
"""

from pathlib import Path

import pytest

from geointerchange.adapters import GeoRSSAdapter
from geointerchange.core.errors import (
    EmptyInputError,
    FormatError,
    NestingDepthError,
    UnsupportedGeometryError,
    ValidationError,
)
from geointerchange.models import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)

# Test fixtures path
FIXTURES_DIR = Path(__file__).parent / "fixtures"
FEED_XML = FIXTURES_DIR / "feed.xml"


def ring(*coords):
    return LineString.from_coords(coords)


SQUARE = ring((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
HOLE = ring((2, 2), (4, 2), (4, 4), (2, 2))


@pytest.fixture
def adapter():
    """Create a GeoRSS adapter with default settings."""
    return GeoRSSAdapter()


class TestGeoRSSRead:
    """Tests for decoding GeoRSS elements."""

    def test_read_point_swaps_order(self, adapter):
        """Test 'lat lon' text becomes x=lon, y=lat."""
        assert adapter.read("<point>20 10</point>") == Point(10, 20)

    def test_read_prefixed_point(self, adapter):
        """Test the georss prefix is ignored."""
        assert adapter.read("<georss:point>45.256 -71.92</georss:point>") == Point(
            -71.92, 45.256
        )

    def test_read_empty_point(self, adapter):
        """Test a point element without text is the empty point."""
        assert adapter.read("<point></point>") == Point()
        assert adapter.read("<point/>") == Point()

    def test_read_line(self, adapter):
        """Test a line is a sequence of swapped pairs."""
        result = adapter.read("<line>45.256 -110.45 46.46 -109.48</line>")
        assert result == ring((-110.45, 45.256), (-109.48, 46.46))

    def test_read_line_dangling_ordinate(self, adapter):
        """Test an odd trailing ordinate is ignored."""
        assert adapter.read("<line>1 2 3</line>") == LineString([Point(2, 1)])

    def test_read_polygon(self, adapter):
        """Test a polygon becomes a single ring polygon."""
        result = adapter.read("<polygon>0 0 0 10 10 10 0 0</polygon>")
        assert result == Polygon([ring((0, 0), (10, 0), (10, 10), (0, 0))])

    def test_read_empty_polygon(self, adapter):
        """Test a polygon without ordinates is empty."""
        assert adapter.read("<polygon>  </polygon>") == Polygon()

    def test_read_box(self, adapter):
        """Test a box becomes a closed five point ring."""
        result = adapter.read("<box>42.943 -71.032 43.039 -69.856</box>")

        expected_ring = ring(
            (-69.856, 43.039),
            (-69.856, 42.943),
            (-71.032, 42.943),
            (-71.032, 43.039),
            (-69.856, 43.039),
        )
        assert result == Polygon([expected_ring])
        assert result.exterior_ring.points[0] == result.exterior_ring.points[-1]

    def test_read_box_too_short(self, adapter):
        """Test a box needs four ordinates."""
        text = "<box>1 2 3</box>"
        with pytest.raises(FormatError) as exc_info:
            adapter.read(text)
        assert exc_info.value.text == text
        assert "4 ordinates" in exc_info.value.message

    def test_read_circle_keeps_centre(self, adapter):
        """Test a circle becomes its centre point, the radius is dropped."""
        assert adapter.read("<circle>20 10 500</circle>") == Point(10, 20)

    def test_read_circle_without_centre(self, adapter):
        """Test a circle needs at least a centre."""
        with pytest.raises(FormatError):
            adapter.read("<circle>20</circle>")

    def test_read_is_case_insensitive(self, adapter):
        """Test element names match in any case."""
        assert adapter.read("<GeoRSS:Point>20 10</GeoRSS:Point>") == Point(10, 20)


class TestGeoRSSFeeds:
    """Tests for decoding feeds and entries."""

    def test_read_feed(self, adapter):
        """Test geometries of all entries are combined."""
        result = adapter.read_file(FEED_XML)

        assert isinstance(result, GeometryCollection)
        point, line, box = result.geometries
        assert point == Point(-71.92, 45.256)
        assert line == ring((-110.45, 45.256), (-109.48, 46.46), (-109.86, 43.84))
        assert isinstance(box, Polygon)
        assert len(box.exterior_ring.points) == 5

    def test_category_order(self, adapter):
        """Test results are grouped point, line, polygon regardless of document order."""
        text = """<entry>
            <polygon>0 0 0 1 1 1 0 0</polygon>
            <line>1 2 3 4</line>
            <point>5 6</point>
        </entry>"""
        result = adapter.read(text)
        assert [g.geom_type.value for g in result.geometries] == [
            "Point",
            "LineString",
            "Polygon",
        ]
        assert result.geometries[0] == Point(6, 5)

    def test_points_anywhere_become_multi_point(self, adapter):
        """Test points at any depth are collected."""
        text = """<feed>
            <entry><point>1 2</point></entry>
            <entry><where><point>3 4</point></where></entry>
        </feed>"""
        assert adapter.read(text) == MultiPoint([Point(2, 1), Point(4, 3)])

    def test_unknown_siblings_ignored(self, adapter):
        """Test foreign elements do not affect decoding."""
        text = """<entry>
            <title>Report</title>
            <foo:bar>ignored</foo:bar>
            <summary><![CDATA[<p>1 2 3</p>]]></summary>
            <point>20 10</point>
        </entry>"""
        assert adapter.read(text) == Point(10, 20)

    def test_read_bytes(self, adapter):
        """Test UTF-8 bytes are accepted."""
        assert adapter.read(b"<point>20 10</point>") == Point(10, 20)

    def test_read_declared_encoding(self, adapter):
        """Test bytes are decoded with the encoding their declaration names."""
        feed = (
            b'<?xml version="1.0" encoding="ISO-8859-1"?>'
            b"<entry><title>Caf\xe9</title><point>20 10</point></entry>"
        )
        assert adapter.read(feed) == Point(10, 20)


class TestGeoRSSErrors:
    """Tests for GeoRSS error handling."""

    def test_no_geometry(self, adapter):
        """Test input without GeoRSS elements raises EmptyInputError."""
        text = "<feed><entry><title>Nothing here</title></entry></feed>"
        with pytest.raises(EmptyInputError) as exc_info:
            adapter.read(text)

        error = exc_info.value
        assert isinstance(error, FormatError)
        assert error.error_code == "EMPTY_INPUT"
        assert error.text == text
        assert error.message == "Invalid / Empty GeoRSS"

    def test_malformed_xml(self, adapter):
        """Test malformed markup raises FormatError carrying the input."""
        text = "<point>20 10</line>"
        with pytest.raises(FormatError) as exc_info:
            adapter.read(text)
        assert exc_info.value.text == text
        assert exc_info.value.format_name == "GeoRSS"
        assert not isinstance(exc_info.value, EmptyInputError)

    def test_non_numeric_ordinates(self, adapter):
        """Test ordinates must be numbers."""
        with pytest.raises(FormatError, match="Invalid GeoRSS coordinates"):
            adapter.read("<point>north east</point>")

    def test_write_unsupported_object(self, adapter):
        """Test writing a non geometry raises UnsupportedGeometryError."""
        with pytest.raises(UnsupportedGeometryError):
            adapter.write("<point>1 2</point>")

    def test_invalid_namespace_prefix(self, adapter):
        """Test a prefix that is not an XML name is rejected."""
        with pytest.raises(ValidationError):
            adapter.write(Point(1, 2), namespace="geo rss")

    def test_write_nesting_limit(self):
        """Test writing nested collections beyond the limit is rejected."""
        nested = GeometryCollection([GeometryCollection([Point(1, 2)])])
        with pytest.raises(NestingDepthError):
            GeoRSSAdapter(max_depth=1).write(nested)


class TestGeoRSSWrite:
    """Tests for encoding GeoRSS."""

    def test_write_point(self, adapter):
        """Test points are written lat first."""
        assert adapter.write(Point(10, 20)) == "<point>20 10</point>"

    def test_write_empty_point(self, adapter):
        """Test the empty point is an empty element."""
        assert adapter.write(Point()) == "<point></point>"

    def test_write_line(self, adapter):
        """Test lines are written as flattened lat lon pairs."""
        line = ring((-110.45, 45.256), (-109.48, 46.46))
        assert adapter.write(line) == "<line>45.256 -110.45 46.46 -109.48</line>"

    def test_write_polygon_drops_holes(self, adapter):
        """Test only the exterior ring is written."""
        out = adapter.write(Polygon([SQUARE, HOLE]))
        assert out == "<polygon>0 0 0 10 10 10 10 0 0 0</polygon>"
        assert adapter.read(out) == Polygon([SQUARE])

    def test_write_multi_point_in_where(self, adapter):
        """Test Multi geometries share one where wrapper."""
        out = adapter.write(MultiPoint([Point(1, 2), Point(3, 4)]))
        assert out == "<where><point>2 1</point><point>4 3</point></where>"

    def test_write_namespace(self, adapter):
        """Test the prefix reaches every element."""
        out = adapter.write(MultiPoint([Point(1, 2), Point(3, 4)]), namespace="georss")
        assert out == (
            "<georss:where>"
            "<georss:point>2 1</georss:point>"
            "<georss:point>4 3</georss:point>"
            "</georss:where>"
        )

    def test_write_nested_collection(self, adapter):
        """Test nested collections are written as nested where elements."""
        nested = GeometryCollection([Point(1, 2), GeometryCollection([Point(3, 4)])])
        out = adapter.write(nested, namespace="georss")
        assert out == (
            "<georss:where><georss:point>2 1</georss:point>"
            "<georss:where><georss:point>4 3</georss:point></georss:where>"
            "</georss:where>"
        )


class TestGeoRSSRoundTrip:
    """Tests for write/read round trips."""

    @pytest.mark.parametrize(
        "geometry",
        [
            Point(10, 20),
            Point(),
            Point(-71.92, 45.256),
            ring((0, 0), (1, 1), (2, 0.5)),
            Polygon([SQUARE]),
            MultiPoint([Point(1, 2), Point(3, 4)]),
            MultiLineString([ring((0, 0), (1, 1)), ring((2, 2), (3, 3))]),
            MultiPolygon([Polygon([SQUARE]), Polygon([HOLE])]),
            GeometryCollection([Point(1, 2), ring((0, 0), (1, 1)), Polygon([SQUARE])]),
        ],
    )
    @pytest.mark.parametrize("namespace", [None, "georss"])
    def test_round_trip(self, adapter, geometry, namespace):
        """Test reading written GeoRSS yields an equal geometry."""
        assert adapter.read(adapter.write(geometry, namespace)) == geometry

    def test_collection_reordered_by_category(self, adapter):
        """Test decoding groups members by category, not by written order."""
        collection = GeometryCollection([Polygon([SQUARE]), Point(1, 2)])
        result = adapter.read(adapter.write(collection))
        assert result == GeometryCollection([Point(1, 2), Polygon([SQUARE])])
