"""
Zip packaging of a generated file tree.

Entries carry a fixed timestamp and fixed permissions, so the same
files in the same order always give the same bytes.
"""

import io
import zipfile
from pathlib import Path
from typing import Iterable, Tuple, Union

FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o644


def build_archive(files: Iterable[Tuple[str, str]]) -> bytes:
    """
    Pack `(path, text)` pairs into a zip archive.

    Args:
        files: Archive paths ('/'-separated) and UTF-8 text, in entry order

    Returns:
        Archive bytes
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path, text in files:
            info = zipfile.ZipInfo(path, date_time=FIXED_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = FILE_MODE << 16
            archive.writestr(info, text.encode("utf-8"))
    return buffer.getvalue()


def write_archive(files: Iterable[Tuple[str, str]], output_path: Union[str, Path]) -> Path:
    """Build an archive and write it to `output_path`."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_archive(files))
    return path
