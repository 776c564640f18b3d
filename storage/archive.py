"""In-memory zip helpers.

zip_files and unzip_files convert between a name -> bytes mapping and a
single ZIP archive that third-party tools can open.
"""

import io
import logging
import zipfile
from typing import Mapping

from storage.errors import ArchiveError

logger = logging.getLogger(__name__)


def _check_entry(name: object, content: object) -> None:
    if not isinstance(name, str):
        raise ArchiveError(f"Entry name must be a string, got {name!r}")
    # zipfile truncates names at the first NUL
    if "\x00" in name:
        raise ArchiveError(f"Entry name contains a NUL character: {name!r}")
    if not isinstance(content, (bytes, bytearray, memoryview)):
        raise ArchiveError(
            f"Entry {name!r} content must be bytes, got {type(content).__name__}"
        )


def zip_files(files: Mapping[str, bytes]) -> bytes:
    """
    Pack files into a single ZIP archive.

    Args:
        files: Mapping of entry name to entry content

    Returns:
        The archive bytes

    Raises:
        ArchiveError: If an entry name or content cannot be stored as given
    """
    for name, content in files.items():
        _check_entry(name, content)

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, content in files.items():
                zf.writestr(name, bytes(content))
    except (ValueError, zipfile.LargeZipFile) as exc:
        raise ArchiveError(f"Could not build archive: {exc}") from exc
    logger.debug("Packed %d entries into %d bytes", len(files), buffer.tell())
    return buffer.getvalue()


def unzip_files(data: bytes) -> dict[str, bytes]:
    """
    Unpack a ZIP archive into a mapping of entry name to content.

    Raises:
        ArchiveError: If data is not a readable ZIP archive, including
            encrypted entries and corrupted headers
    """
    result: dict[str, bytes] = {}
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            for info in zf.infolist():
                result[info.filename] = zf.read(info)
    except Exception as exc:
        # Corrupt input surfaces as BadZipFile, RuntimeError, ValueError, zlib.error and others
        raise ArchiveError(f"Invalid zip archive: {exc}") from exc
    return result
