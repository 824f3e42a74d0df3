"""
Multi-track and multi-file mkvextract runs.

Both helpers loop over extract_track and keep going when a single track or
file fails. When several tracks come from one file, the track number is put
into the extension (``Movie.3.srt``) so outputs do not collide.
"""
from pathlib import Path
from typing import Iterable, Optional

from tqdm import tqdm

from plextools.utils import STATUS_FAIL, STATUS_OK, logger, LogLevel
from plextools.utils.batch import BatchResult
from plextools.utils.errors import ToolNotInstalledError, PlexToolsError
from plextools.utils.file_util import PathLike
from . import core


def _record(batch: BatchResult, source: Path, track: int, extension: str,
            output_dir: Optional[PathLike]) -> None:
    try:
        result = core.extract_track(source, track, extension, output_dir=output_dir)
    except ToolNotInstalledError:
        raise
    except (PlexToolsError, OSError, ValueError) as e:
        logger.log("mkv.extract.error", LogLevel.ERROR, file=str(source), track=track, error=str(e))
        batch.add(source, None, f"{STATUS_FAIL} ({e})")
        return

    target = core.track_output_path(source, extension, output_dir)
    if result.ok:
        batch.add(source, target, STATUS_OK)
    else:
        batch.add(source, None, f"{STATUS_FAIL} (mkvextract code {result.exit_code})")


def extract_tracks(source: PathLike, tracks: Iterable[int], extension: str,
                   output_dir: Optional[PathLike] = None) -> BatchResult:
    """Extract several tracks of one file as ``<base>.<track>.<extension>``."""
    batch = BatchResult()
    ext = extension.lstrip(".")
    for track in tqdm(list(tracks), desc="Extracting tracks"):
        _record(batch, Path(source), track, f"{track}.{ext}", output_dir)

    logger.log("mkv.extract.summary", LogLevel.INFO, ok=batch.ok, fail=batch.failed)
    return batch


def extract_tracks_from_files(files: Iterable[PathLike], track: int, extension: str,
                              output_dir: Optional[PathLike] = None) -> BatchResult:
    """Extract the same track from each file as ``<base>.<extension>``."""
    batch = BatchResult()
    for file in tqdm(list(files), desc="Extracting tracks"):
        _record(batch, Path(file), track, extension, output_dir)

    logger.log("mkv.extract.summary", LogLevel.INFO, ok=batch.ok, fail=batch.failed)
    return batch
