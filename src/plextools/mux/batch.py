"""
Batch export of many streams into one folder.

Each stream is written under its default name (``<stem>.<type_index>[.<lang>].<ext>``).
A stream whose output already exists is skipped, a failing ffmpeg run is
recorded, and the loop always moves on to the next stream.
"""
from pathlib import Path
from typing import Iterable

from tqdm import tqdm

from plextools.probe.model import StreamInfo
from plextools.utils import STATUS_FAIL, STATUS_OK, STATUS_SKIP, logger, LogLevel
from plextools.utils.batch import BatchResult
from plextools.utils.errors import OutputExistsError, PlexToolsError
from plextools.utils.file_util import PathLike
from . import core


def export_streams(streams: Iterable[StreamInfo], output_dir: PathLike, overwrite: bool = False,
                   by_type: bool = True) -> BatchResult:
    """Export every stream into output_dir, continuing past per-stream failures."""
    out_root = Path(output_dir).expanduser()
    batch = BatchResult()

    for stream in tqdm(list(streams), desc="Exporting streams"):
        target = out_root / stream.default_output_name()
        try:
            result = core.export_stream(stream, target, overwrite=overwrite, by_type=by_type)
        except OutputExistsError as e:
            logger.log("mux.export.skip", LogLevel.WARN, file=stream.source_file.name, dst=str(e.path))
            batch.add(stream.source_file, Path(e.path), f"{STATUS_SKIP} (already exists)")
            continue
        except (PlexToolsError, OSError) as e:
            logger.log("mux.export.error", LogLevel.ERROR, file=stream.source_file.name, error=str(e))
            batch.add(stream.source_file, None, f"{STATUS_FAIL} ({e})")
            continue

        if result.ok:
            batch.add(stream.source_file, target, STATUS_OK)
        else:
            batch.add(stream.source_file, None, f"{STATUS_FAIL} (ffmpeg code {result.exit_code})")

    logger.log("mux.export.summary", LogLevel.INFO, ok=batch.ok, skip=batch.skipped, fail=batch.failed)
    return batch
