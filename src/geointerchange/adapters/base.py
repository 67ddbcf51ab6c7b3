"""
Adapter contract shared by every format codec.

An adapter turns format text into a canonical Geometry (read) and a Geometry
back into format text (write). Adapters keep no per-call state: the
namespace prefix and the nesting depth are passed explicitly through every
recursive call.
"""

import logging
import re
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from ..core.config import settings
from ..core.errors import (
    FormatError,
    NestingDepthError,
    UnsupportedGeometryError,
    ValidationError,
)
from ..core.registry import local_name
from ..models.geometry import Geometry, GeometryType

logger = logging.getLogger(__name__)

Markup = Union[str, bytes]

CDATA_PATTERN = re.compile(r"<!\[cdata\[(.*?)\]\]>", re.DOTALL)
CDATA_BYTES_PATTERN = re.compile(rb"<!\[cdata\[(.*?)\]\]>", re.DOTALL)

# Opening or closing tag with a 'prefix:' qualifier
ELEMENT_PREFIX_PATTERN = re.compile(r"<(/?)[a-z_][\w.\-]*:")
ELEMENT_PREFIX_BYTES_PATTERN = re.compile(rb"<(/?)[a-z_][\w.\-]*:")

# XML NCName, the form a namespace prefix must take
PREFIX_PATTERN = re.compile(r"[^\W\d][\w.\-]*")


def format_ordinate(value: float) -> str:
    """
    Render an ordinate for output.

    Uses the shortest round-trip form, without a trailing '.0'.

    Examples:
        >>> format_ordinate(10.0)
        '10'
        >>> format_ordinate(-122.0822035425683)
        '-122.0822035425683'
        >>> format_ordinate(1e300)
        '1e+300'
    """
    text = repr(value)
    if text.endswith(".0"):
        return text[:-2]
    return text


def element_prefix(namespace: Optional[str]) -> str:
    """
    Turn a namespace prefix into the 'prefix:' qualifier of element names.

    Raises:
        ValidationError: If the prefix is not a valid XML name
    """
    if not namespace:
        return ""
    if not PREFIX_PATTERN.fullmatch(namespace):
        raise ValidationError(
            f"Invalid namespace prefix: {namespace!r}",
            field="namespace",
            suggestions=["Use an XML name such as 'kml' or 'georss'"],
        )
    return f"{namespace}:"


def serialize(element: ET.Element) -> str:
    """Serialize an element tree without XML declaration, keeping empty elements open."""
    return ET.tostring(element, encoding="unicode", short_empty_elements=False)


def child_elements(element: ET.Element, name: str) -> List[ET.Element]:
    """Return direct children whose local tag name equals ``name``."""
    return [child for child in element if local_name(child.tag) == name]


def find_elements(root: ET.Element, name: str) -> List[ET.Element]:
    """Return all elements, root included, whose local tag name equals ``name``."""
    return [element for element in root.iter() if local_name(element.tag) == name]


class Adapter(ABC):
    """
    Base class for format adapters.

    Subclasses implement read() and write(); they may use the helpers here to
    normalize and parse XML input consistently.

    Attributes:
        max_depth: Deepest collection nesting accepted by read and write
    """

    format_name: str = ""

    def __init__(self, max_depth: Optional[int] = None) -> None:
        """
        Initialize adapter.

        Args:
            max_depth: Nesting limit, defaults to settings.max_nesting_depth
        """
        self.max_depth = max_depth if max_depth is not None else settings.max_nesting_depth

    @abstractmethod
    def read(self, text: Markup) -> Geometry:
        """
        Decode format text into a geometry.

        Raises:
            FormatError: If the text cannot be decoded
        """

    @abstractmethod
    def write(self, geometry: Geometry, namespace: Optional[str] = None) -> str:
        """
        Encode a geometry as format text.

        Args:
            geometry: Geometry to encode
            namespace: Prefix applied to every emitted element name

        Raises:
            UnsupportedGeometryError: If geometry is not a model geometry
            ValidationError: If namespace is not a valid XML name
        """

    def read_file(self, file_path: Union[str, Path]) -> Geometry:
        """
        Decode a file.

        The raw bytes are handed to the parser, so the XML encoding
        declaration of the file is honoured.

        Args:
            file_path: Path to the file

        Returns:
            Decoded geometry
        """
        path = Path(file_path)
        logger.debug(f"Reading {self.format_name} file: {path}")
        return self.read(path.read_bytes())

    def _check_input(self, text: Markup) -> Markup:
        if isinstance(text, bytearray):
            return bytes(text)
        if not isinstance(text, (str, bytes)):
            raise FormatError(
                f"{self.format_name} input must be text, got {type(text).__name__}",
                format_name=self.format_name,
            )
        return text

    def _parse_xml(self, text: Markup) -> ET.Element:
        """
        Normalize and parse XML input.

        The text is lowercased, CDATA blocks are removed and element prefixes
        are stripped so that element names compare case-insensitively and
        without namespace qualifiers. Bytes stay bytes so the parser decodes
        them according to their XML declaration.

        Raises:
            FormatError: If the markup is not well formed
        """
        normalized = text.strip().lower()
        if isinstance(normalized, bytes):
            normalized = CDATA_BYTES_PATTERN.sub(b"", normalized)
            normalized = ELEMENT_PREFIX_BYTES_PATTERN.sub(rb"<\1", normalized)
        else:
            normalized = CDATA_PATTERN.sub("", normalized)
            normalized = ELEMENT_PREFIX_PATTERN.sub(r"<\1", normalized)

        try:
            return ET.fromstring(normalized)
        except ET.ParseError as e:
            logger.error(f"Failed to parse {self.format_name}: {e}")
            raise FormatError(
                f"Invalid {self.format_name}",
                text=text,
                format_name=self.format_name,
                details={"reason": str(e)},
            ) from e

    def _geometry_type(self, geometry: object) -> GeometryType:
        if not isinstance(geometry, Geometry):
            raise UnsupportedGeometryError(
                f"Cannot write {type(geometry).__name__} as {self.format_name}",
                type_name=type(geometry).__name__,
            )
        return geometry.geom_type

    def _check_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            raise NestingDepthError(self.max_depth)
