"""
KMZ support.

A KMZ file is a zip archive holding a main KML document (by convention
'doc.kml') plus optional resources. Reading extracts the main document and
decodes it with the KML adapter; writing produces a single 'doc.kml' archive.
"""

import io
import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from ..core.errors import FormatError
from ..models.geometry import Geometry
from .kml import KMLAdapter, kml_document

logger = logging.getLogger(__name__)

MAIN_DOCUMENT = "doc.kml"


def _extract_main_kml(archive: zipfile.ZipFile) -> bytes:
    """
    Extract the main KML document from a KMZ archive.

    Priority:
    1. doc.kml, in any folder
    2. First .kml entry found
    """
    kml_files = [name for name in archive.namelist() if name.lower().endswith(".kml")]
    if not kml_files:
        raise FormatError("KMZ archive contains no KML document", format_name="KMZ")

    main_kml = next(
        (name for name in kml_files if PurePosixPath(name).name.lower() == MAIN_DOCUMENT),
        None,
    )
    if main_kml is None:
        main_kml = kml_files[0]
        logger.info(f"No doc.kml found, using first KML file: {main_kml}")

    logger.debug(f"Extracting KML file: {main_kml}")
    return archive.read(main_kml)


def read_kmz(
    source: Union[str, Path, bytes], adapter: Optional[KMLAdapter] = None
) -> Geometry:
    """
    Read the geometry of a KMZ archive.

    Args:
        source: Path to a .kmz file, or the archive bytes
        adapter: KML adapter to decode with, a default one if omitted

    Returns:
        Decoded geometry of the main KML document

    Raises:
        FormatError: If the archive is invalid or holds no KML
        FileNotFoundError: If the path does not exist
    """
    if isinstance(source, (bytes, bytearray)):
        handle: Union[io.BytesIO, Path] = io.BytesIO(source)
    else:
        handle = Path(source)
        if not handle.exists():
            raise FileNotFoundError(f"KMZ file not found: {handle}")

    try:
        with zipfile.ZipFile(handle, "r") as archive:
            kml_content = _extract_main_kml(archive)
    except zipfile.BadZipFile as e:
        logger.error(f"Invalid ZIP file: {e}")
        raise FormatError(f"Invalid KMZ archive: {e}", format_name="KMZ") from e

    return (adapter or KMLAdapter()).read(kml_content)


def write_kmz(geometry: Geometry, namespace: Optional[str] = None) -> bytes:
    """
    Write a geometry as a KMZ archive.

    Args:
        geometry: Geometry to encode
        namespace: Prefix for every KML element, bound on the root element

    Returns:
        Zip archive bytes holding doc.kml
    """
    document = kml_document(geometry, namespace)

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(MAIN_DOCUMENT, document.encode("utf-8"))
    return buffer.getvalue()
