"""
Format adapters.

Every adapter implements the same read/write contract; get_adapter() looks one
up by format name.
"""

from typing import Dict, Optional, Type

from ..core.errors import ValidationError
from .base import Adapter
from .georss import GeoRSSAdapter
from .kml import KML_NS, KMLAdapter, kml_document
from .kmz import read_kmz, write_kmz

ADAPTERS: Dict[str, Type[Adapter]] = {
    "kml": KMLAdapter,
    "georss": GeoRSSAdapter,
}


def get_adapter(format_name: str, max_depth: Optional[int] = None) -> Adapter:
    """
    Create an adapter for a format.

    Args:
        format_name: Format name, case insensitive ('kml', 'georss')
        max_depth: Nesting limit, defaults to settings.max_nesting_depth

    Returns:
        A new adapter instance

    Raises:
        ValidationError: If the format is not supported
    """
    adapter_class = ADAPTERS.get(format_name.lower())
    if adapter_class is None:
        raise ValidationError(
            f"Unsupported format: {format_name}",
            field="format_name",
            suggestions=[f"Use one of: {', '.join(sorted(ADAPTERS))}"],
        )
    return adapter_class(max_depth=max_depth)


__all__ = [
    "ADAPTERS",
    "Adapter",
    "GeoRSSAdapter",
    "KMLAdapter",
    "KML_NS",
    "get_adapter",
    "kml_document",
    "read_kmz",
    "write_kmz",
]
