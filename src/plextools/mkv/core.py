"""
Track extraction from Matroska files with mkvextract.

The output name is the source basename without ``.mkv`` plus the requested
extension, so ``extract_track("Movie.mkv", 2, "en.srt")`` runs::

    mkvextract /abs/Movie.mkv tracks 2:Movie.en.srt

Outputs are written relative to the working directory unless an output
folder is given. Success is decided by mkvextract's exit code.
"""
import re
from pathlib import Path
from typing import Optional

from plextools.utils import constants, logger, system_util, LogLevel
from plextools.utils.file_util import PathLike, resolve_input_file, strip_suffix
from plextools.utils.system_util import ProcessResult

_VERSION_RE = re.compile(r"^mkvextract v?(\S+)")


def get_mkvextract_version() -> Optional[str]:
    """Return the mkvextract version string, or None if it could not be read."""
    binary = system_util.require_tool(constants.MKVEXTRACT_BIN)
    result = system_util.run_cmd([binary, "--version"])
    if not result.ok:
        return None
    match = _VERSION_RE.match(result.stdout.strip())
    return match.group(1) if match else None


def track_output_name(source: Path, extension: str) -> str:
    """``Movie.mkv`` + ``en.srt`` -> ``Movie.en.srt``."""
    base = strip_suffix(source.name, ".mkv")
    return f"{base}.{extension.lstrip('.')}"


def track_output_path(source: Path, extension: str, output_dir: Optional[PathLike] = None) -> Path:
    """Output path for a track; relative to the working directory without output_dir."""
    name = track_output_name(source, extension)
    if output_dir is None:
        return Path(name)
    return Path(output_dir).expanduser() / name


def build_extract_cmd(binary: str, source: Path, track: int, output: PathLike) -> list:
    return [binary, str(source), "tracks", f"{track}:{output}"]


def extract_track(source: PathLike, track: int, extension: str,
                  output_dir: Optional[PathLike] = None) -> ProcessResult:
    """
    Extract one track of a Matroska file.

    Args:
        source: Matroska file.
        track: mkvextract track ID (as listed by mkvmerge -i).
        extension: Extension for the output, may carry a language (e.g. 'en.srt').
        output_dir: Folder for the output (default: working directory).

    Returns:
        ProcessResult of the mkvextract run.

    Raises:
        MediaFileNotFoundError: source does not exist.
        ToolNotInstalledError: mkvextract is not on PATH.
    """
    if track < 0:
        raise ValueError(f"Track number must be >= 0, got {track}")

    src = resolve_input_file(source)
    binary = system_util.require_tool(constants.MKVEXTRACT_BIN)

    output = track_output_path(src, extension, output_dir)
    if output_dir is not None:
        output.parent.mkdir(parents=True, exist_ok=True)

    logger.log("mkv.extract.start", LogLevel.INFO, file=src.name, track=track, dst=str(output))
    result = system_util.run_cmd(build_extract_cmd(binary, src, track, output))

    if result.ok:
        logger.log("mkv.extract.complete", LogLevel.INFO, file=src.name, track=track, dst=str(output))
    else:
        logger.log("mkv.extract.failed", LogLevel.ERROR,
                   file=src.name,
                   track=track,
                   exit_code=result.exit_code,
                   error=(result.stderr or result.stdout).strip())
    return result
