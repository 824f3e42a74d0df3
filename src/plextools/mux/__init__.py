"""Stream export and muxing with ffmpeg.

This package provides two levels of functionality:
- core: ffmpeg invocation and the copy-only export/add commands
- batch: exporting many streams with per-stream error handling
"""

from .core import (
    StreamSource,
    add_streams,
    build_add_args,
    build_export_args,
    export_stream,
    export_stream_from,
    ffmpeg,
    get_ffmpeg_version,
)
from .batch import export_streams

__all__ = [
    # ffmpeg
    "ffmpeg",
    "get_ffmpeg_version",
    # Export
    "build_export_args",
    "export_stream",
    "export_stream_from",
    "export_streams",
    # Add
    "StreamSource",
    "build_add_args",
    "add_streams",
]
