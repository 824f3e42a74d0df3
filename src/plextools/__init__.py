"""
Command-line helpers for inspecting and reorganizing Plex media.

This package wraps the external ``ffprobe``, ``ffmpeg`` and ``mkvextract``
binaries. It does no media processing of its own: it builds command lines,
parses the tools' JSON output, and moves files into the folder layout Plex
expects for bonus content.

The package is organized into several categories:
- Probing media files and modeling their streams (probe).
- Exporting single streams and muxing extra streams into a file (mux).
- Dumping Matroska tracks with mkvextract (mkv).
- Sorting bonus content into Plex "extras" folders (organize).
- Shared constants, errors, logging and process helpers (utils).
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
