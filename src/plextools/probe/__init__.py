"""Stream inspection with ffprobe.

This package provides two levels of functionality:
- core: Low-level ffprobe invocation (JSON output, version lookup)
- model / streams: StreamInfo and StreamCollection, built by enumerating or
  selecting the streams of a media file
"""

from .core import (
    ProbeResult,
    ffprobe,
    get_ffprobe_version,
)
from .model import (
    StreamCollection,
    StreamInfo,
    codec_letter,
)
from .streams import (
    get_stream,
    get_streams,
)

__all__ = [
    # ffprobe
    "ProbeResult",
    "ffprobe",
    "get_ffprobe_version",
    # Stream model
    "StreamCollection",
    "StreamInfo",
    "codec_letter",
    # Enumeration
    "get_stream",
    "get_streams",
]
