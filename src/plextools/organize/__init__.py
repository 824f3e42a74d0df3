"""Plex bonus-content organizer.

Files named ``*-<token>.<ext>`` (``clip-trailer.mp4``, ``clip-deleted.en.srt``)
are sorted into the extras folders Plex recognizes (``Trailers``,
``Deleted Scenes``, ...). See plextools.utils.constants.PLEX_LAYOUT.
"""

from .core import (
    OrganizeResult,
    ensure_folders,
    find_bonus_files,
    move_bonus_files,
    organize,
    prune_empty_folders,
)

__all__ = [
    "OrganizeResult",
    "ensure_folders",
    "find_bonus_files",
    "move_bonus_files",
    "organize",
    "prune_empty_folders",
]
