"""Matroska track extraction with mkvextract.

- core: single-track extraction and version lookup
- batch: several tracks of one file, or one track of several files
"""

from .core import (
    build_extract_cmd,
    extract_track,
    get_mkvextract_version,
    track_output_name,
    track_output_path,
)
from .batch import (
    extract_tracks,
    extract_tracks_from_files,
)

__all__ = [
    "build_extract_cmd",
    "extract_track",
    "get_mkvextract_version",
    "track_output_name",
    "track_output_path",
    "extract_tracks",
    "extract_tracks_from_files",
]
