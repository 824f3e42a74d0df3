"""
Sort bonus content into the folder layout Plex uses for movie extras.

Bonus files are named ``<anything>-<token>.<ext>`` where the token selects
the folder (``clip-trailer.mp4`` -> ``Trailers``). Names are matched
without regard to case, so ``Clip-Trailer.MP4`` is picked up too.

Three phases, each safe to run again:

1. ensure_folders: create every layout folder under the destination.
2. move_bonus_files: move matching files found anywhere under the source.
3. prune_empty_folders: remove layout folders that ended up empty.

Moves are not transactional. A file whose name already exists in its target
folder is skipped, never overwritten.
"""
import fnmatch
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

from tqdm import tqdm

from plextools.utils import (
    BONUS_FILE_PATTERNS,
    PLEX_LAYOUT,
    STATUS_FAIL,
    STATUS_MOVED,
    STATUS_SKIP,
    logger,
    LogLevel,
)
from plextools.utils.batch import BatchResult
from plextools.utils.file_util import PathLike, resolve_input_dir


@dataclass
class OrganizeResult:
    created: List[Path] = field(default_factory=list)
    moved: BatchResult = field(default_factory=BatchResult)
    pruned: List[Path] = field(default_factory=list)


def ensure_folders(dest_root: PathLike, layout: Mapping[str, str] = PLEX_LAYOUT) -> List[Path]:
    """Create each layout folder under dest_root; return the ones that were created."""
    root = resolve_input_dir(dest_root)
    created = []
    for folder in layout:
        path = root / folder
        if path.is_dir():
            continue
        path.mkdir(parents=True, exist_ok=True)
        created.append(path)
        logger.log("organize.folder.created", LogLevel.DEBUG, folder=str(path))

    logger.log("organize.ensure.complete", LogLevel.INFO, dest=str(root), created=len(created))
    return created


def find_bonus_files(source_root: Path, token: str) -> List[Path]:
    """All files under source_root named like a bonus file for token, sorted. Names match case-insensitively."""
    patterns = [pattern.format(token=token).lower() for pattern in BONUS_FILE_PATTERNS]
    return sorted(
        p for p in source_root.rglob("*")
        if p.is_file() and any(fnmatch.fnmatchcase(p.name.lower(), pattern) for pattern in patterns)
    )


def move_bonus_files(source_root: PathLike, dest_root: PathLike,
                     layout: Mapping[str, str] = PLEX_LAYOUT) -> BatchResult:
    """
    Move bonus files from source_root into their layout folder under dest_root.

    Files already inside their target folder are left alone. A name conflict
    in the target folder is recorded as SKIP and a failed move as FAIL; both
    leave the source file in place and the remaining files are still moved.
    """
    src_root = resolve_input_dir(source_root)
    dst_root = resolve_input_dir(dest_root)

    planned = []
    for folder, token in layout.items():
        target_dir = dst_root / folder
        for file in find_bonus_files(src_root, token):
            if file.parent == target_dir:
                continue
            planned.append((file, target_dir / file.name))

    batch = BatchResult()
    if not planned:
        logger.log("organize.move.none", LogLevel.WARN, msg="No bonus files found to move", source=str(src_root))
        return batch

    for src, target in tqdm(planned, desc="Moving bonus files"):
        if target.exists():
            logger.log("organize.move.skip", LogLevel.WARN, file=src.name, dst=str(target))
            batch.add(src, target, f"{STATUS_SKIP} (already exists)")
            continue
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(src), str(target))
        except (OSError, shutil.Error) as e:
            logger.log("organize.move.failed", LogLevel.ERROR, file=str(src), error=str(e))
            batch.add(src, None, f"{STATUS_FAIL} (move error: {e})")
            continue
        logger.log("organize.move", LogLevel.DEBUG, file=src.name, dst=str(target.parent))
        batch.add(src, target, STATUS_MOVED)

    logger.log("organize.move.complete", LogLevel.INFO,
               moved=batch.ok,
               skip=batch.skipped,
               fail=batch.failed)
    return batch


def prune_empty_folders(dest_root: PathLike, layout: Mapping[str, str] = PLEX_LAYOUT) -> List[Path]:
    """Remove layout folders under dest_root that have no entries; return the removed ones."""
    root = resolve_input_dir(dest_root)
    removed = []
    for folder in layout:
        path = root / folder
        if not path.is_dir() or any(path.iterdir()):
            continue
        try:
            path.rmdir()
        except OSError as e:
            logger.log("organize.prune.failed", LogLevel.WARN, folder=str(path), error=str(e))
            continue
        removed.append(path)

    logger.log("organize.prune.complete", LogLevel.INFO, dest=str(root), removed=len(removed))
    return removed


def organize(source_root: PathLike, dest_root: PathLike,
             layout: Mapping[str, str] = PLEX_LAYOUT) -> OrganizeResult:
    """Validate both roots, then ensure folders, move bonus files and prune empty folders."""
    src_root = resolve_input_dir(source_root)
    dst_root = resolve_input_dir(dest_root)

    result = OrganizeResult()
    result.created = ensure_folders(dst_root, layout)
    result.moved = move_bonus_files(src_root, dst_root, layout)
    result.pruned = prune_empty_folders(dst_root, layout)
    return result
