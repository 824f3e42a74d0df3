"""
Constants and configuration settings for media tooling.

This module holds the names of the external binaries (overridable through the
environment or a ``.env`` file), the fixed Plex bonus-content layout, the
extensions recognized for bonus files, the ffmpeg stream letters for each
codec type, and the status strings reported by batch operations.
"""

import os
from types import MappingProxyType

from dotenv import load_dotenv

load_dotenv()

# External binaries, resolved on PATH unless an explicit path is configured
FFMPEG_BIN = os.getenv("PLEXTOOLS_FFMPEG", "ffmpeg")
FFPROBE_BIN = os.getenv("PLEXTOOLS_FFPROBE", "ffprobe")
MKVEXTRACT_BIN = os.getenv("PLEXTOOLS_MKVEXTRACT", "mkvextract")

# Arguments prepended to every invocation
FFPROBE_BASE_ARGS = ("-v", "error", "-of", "json")
FFMPEG_BASE_ARGS = ("-v", "error", "-hide_banner")

# Optional tee target for CLI output
LOG_FILE = os.getenv("PLEXTOOLS_LOG_FILE")

# Codec types as reported by ffprobe
CODEC_TYPE_VIDEO = "video"
CODEC_TYPE_AUDIO = "audio"
CODEC_TYPE_SUBTITLE = "subtitle"
CODEC_TYPE_DATA = "data"
CODEC_TYPE_ALL = "all"

# Stream specifier letter used by ffmpeg -map and ffprobe -select_streams
CODEC_TYPE_LETTERS = MappingProxyType({
    CODEC_TYPE_VIDEO: "v",
    CODEC_TYPE_AUDIO: "a",
    CODEC_TYPE_SUBTITLE: "s",
    CODEC_TYPE_DATA: "d",
})

CODEC_TYPE_CHOICES = (CODEC_TYPE_ALL,) + tuple(CODEC_TYPE_LETTERS)

# Container-free extension for a copied stream, keyed by ffprobe codec_name
CODEC_EXTENSIONS = MappingProxyType({
    "h264": "h264",
    "hevc": "hevc",
    "mpeg2video": "m2v",
    "av1": "ivf",
    "vp9": "ivf",
    "aac": "aac",
    "ac3": "ac3",
    "eac3": "eac3",
    "dts": "dts",
    "truehd": "thd",
    "flac": "flac",
    "mp3": "mp3",
    "opus": "opus",
    "vorbis": "ogg",
    "pcm_s16le": "wav",
    "pcm_s24le": "wav",
    "subrip": "srt",
    "ass": "ass",
    "ssa": "ass",
    "webvtt": "vtt",
    "hdmv_pgs_subtitle": "sup",
    "dvd_subtitle": "sub",
})

# Plex bonus-content layout: folder display name -> filename suffix token
PLEX_LAYOUT = MappingProxyType({
    "Behind The Scenes": "behindthescenes",
    "Deleted Scenes": "deleted",
    "Featurettes": "featurette",
    "Interviews": "interview",
    "Scenes": "scene",
    "Shorts": "short",
    "Trailers": "trailer",
    "Other": "other",
})

# Bonus file name patterns; "{token}" is replaced with a PLEX_LAYOUT suffix
BONUS_FILE_PATTERNS = (
    "*-{token}.mp4",
    "*-{token}.srt",
    "*-{token}.*.srt",
)

# Processing status codes
STATUS_OK = "OK"
STATUS_MOVED = "MOVED"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
