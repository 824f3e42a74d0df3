"""
A module providing constants, errors, logging and process helpers shared by
the media tool wrappers.

This module includes the fixed Plex bonus layout, the external binary names,
status codes used by batch operations, the exception hierarchy, and a
structured logger.
"""

from .constants import (
    BONUS_FILE_PATTERNS,
    CODEC_TYPE_ALL,
    CODEC_TYPE_AUDIO,
    CODEC_TYPE_CHOICES,
    CODEC_TYPE_DATA,
    CODEC_TYPE_LETTERS,
    CODEC_TYPE_SUBTITLE,
    CODEC_TYPE_VIDEO,
    FFMPEG_BIN,
    FFPROBE_BIN,
    MKVEXTRACT_BIN,
    PLEX_LAYOUT,
    STATUS_FAIL,
    STATUS_MOVED,
    STATUS_OK,
    STATUS_SKIP,
)
from .errors import (
    MediaFileNotFoundError,
    OutputExistsError,
    PlexToolsError,
    ProbeError,
    ToolNotInstalledError,
    UnsupportedCodecTypeError,
)
from .logger import LogLevel

__all__ = [
    "BONUS_FILE_PATTERNS",
    "CODEC_TYPE_ALL",
    "CODEC_TYPE_AUDIO",
    "CODEC_TYPE_CHOICES",
    "CODEC_TYPE_DATA",
    "CODEC_TYPE_LETTERS",
    "CODEC_TYPE_SUBTITLE",
    "CODEC_TYPE_VIDEO",
    "FFMPEG_BIN",
    "FFPROBE_BIN",
    "MKVEXTRACT_BIN",
    "PLEX_LAYOUT",
    "STATUS_FAIL",
    "STATUS_MOVED",
    "STATUS_OK",
    "STATUS_SKIP",
    "MediaFileNotFoundError",
    "OutputExistsError",
    "PlexToolsError",
    "ProbeError",
    "ToolNotInstalledError",
    "UnsupportedCodecTypeError",
    "LogLevel",
]
