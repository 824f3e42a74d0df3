"""
Functions to build and run ffmpeg stream-copy commands.

Two operations are supported, both without re-encoding (``-c copy``):

- export: copy one stream of a file into its own output file.
- add: mux extra audio/subtitle/video streams from other files next to the
  video stream of a primary file, tagging each added stream with a language
  and title.

All commands start with ``ffmpeg -v error -hide_banner``. Outputs are never
replaced unless ``overwrite`` is set; the check happens before ffmpeg runs
because ffmpeg itself is always called with ``-y``.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from plextools.probe import get_stream
from plextools.probe.model import StreamInfo, codec_letter
from plextools.utils import CODEC_TYPE_ALL, CODEC_TYPE_VIDEO, constants, logger, system_util, LogLevel
from plextools.utils.errors import MediaFileNotFoundError
from plextools.utils.file_util import PathLike, prepare_output_file, resolve_input_file
from plextools.utils.system_util import ProcessResult

_VERSION_RE = re.compile(r"^ffmpeg version (\S+)")


@dataclass
class StreamSource:
    """An extra stream to add: the first stream of codec_type found in path."""
    path: Path
    codec_type: str
    language: Optional[str] = None
    title: Optional[str] = None


def ffmpeg(args: List[str]) -> ProcessResult:
    """Run ffmpeg with quiet logging and no banner."""
    binary = system_util.require_tool(constants.FFMPEG_BIN)
    return system_util.run_cmd([binary, *constants.FFMPEG_BASE_ARGS, *args])


def get_ffmpeg_version() -> Optional[str]:
    """Return the ffmpeg version string, or None if it could not be read."""
    binary = system_util.require_tool(constants.FFMPEG_BIN)
    result = system_util.run_cmd([binary, "-version"])
    if not result.ok:
        return None
    match = _VERSION_RE.match(result.stdout.strip())
    return match.group(1) if match else None


def build_export_args(stream: StreamInfo, output: Path, by_type: bool = True) -> List[str]:
    """Arguments copying one stream into output."""
    return [
        "-i", str(stream.source_file),
        "-y",
        "-map", stream.map_spec(0, by_type=by_type),
        "-c", "copy",
        str(output),
    ]


def export_stream(stream: StreamInfo, output: PathLike, overwrite: bool = False,
                  by_type: bool = True) -> ProcessResult:
    """
    Copy a single stream into its own file.

    Args:
        stream: Stream to export.
        output: Output file; relative paths are taken from the working directory.
        overwrite: Replace an existing output file (default: False).
        by_type: Map the stream as ``0:<letter>:<type_index>`` (default) rather
            than by absolute index ``0:<index>``.

    Returns:
        ProcessResult of the ffmpeg run.

    Raises:
        MediaFileNotFoundError: the stream's source file is gone.
        OutputExistsError: output exists and overwrite is False.
        UnsupportedCodecTypeError: by_type is set and ffmpeg has no specifier
            for the stream's codec type (e.g. attachments).
    """
    if not stream.source_file.is_file():
        raise MediaFileNotFoundError(stream.source_file)
    map_spec = stream.map_spec(0, by_type=by_type)
    target = prepare_output_file(output, overwrite)

    logger.log("mux.export.start", LogLevel.INFO,
               file=stream.source_file.name,
               stream=map_spec,
               codec=stream.codec_name,
               dst=str(target))

    result = ffmpeg(build_export_args(stream, target, by_type=by_type))
    if result.ok:
        logger.log("mux.export.complete", LogLevel.INFO, file=stream.source_file.name, dst=target.name)
    else:
        logger.log("mux.export.failed", LogLevel.ERROR,
                   file=stream.source_file.name,
                   exit_code=result.exit_code,
                   error=result.stderr.strip())
    return result


def export_stream_from(path: PathLike, codec_type: str, index: int, output: PathLike,
                       overwrite: bool = False) -> Optional[ProcessResult]:
    """
    Look up a stream by type and index, then export it.

    With codec_type 'all' the index is the absolute stream index and the
    stream is mapped by that index. Returns None when the file has no such
    stream.
    """
    stream = get_stream(path, index, codec_type)
    if stream is None:
        logger.log("mux.export.not_found", LogLevel.WARN,
                   file=str(path),
                   codec_type=codec_type,
                   index=index)
        return None
    return export_stream(stream, output, overwrite=overwrite, by_type=codec_type != CODEC_TYPE_ALL)


def build_add_args(primary: Path, sources: Sequence[StreamSource], output: Path,
                   shortest: bool = False) -> List[str]:
    """
    Arguments muxing the primary video stream with one stream from each source.

    Input 0 is the primary file and contributes ``0:v:0``. Source i (1-based)
    contributes ``i:<letter>:0``. Metadata tags are addressed by the output
    position of each added stream within its codec type.
    """
    args = ["-i", str(primary)]
    for source in sources:
        args += ["-i", str(source.path)]

    args += ["-map", "0:v:0"]
    for input_index, source in enumerate(sources, start=1):
        args += ["-map", f"{input_index}:{codec_letter(source.codec_type)}:0"]

    args += ["-c", "copy"]

    # The primary video already occupies output video position 0
    positions = {CODEC_TYPE_VIDEO: 1}
    for source in sources:
        letter = codec_letter(source.codec_type)
        position = positions.get(source.codec_type, 0)
        positions[source.codec_type] = position + 1
        if source.language:
            args += [f"-metadata:s:{letter}:{position}", f"language={source.language}"]
        if source.title:
            args += [f"-metadata:s:{letter}:{position}", f"title={source.title}"]

    if shortest:
        args.append("-shortest")

    args += ["-y", str(output)]
    return args


def add_streams(primary: PathLike, sources: Sequence[StreamSource], output: PathLike,
                shortest: bool = False, overwrite: bool = False) -> ProcessResult:
    """
    Combine the video of primary with extra streams into a new file.

    Args:
        primary: File whose first video stream is kept.
        sources: Extra streams in output order.
        output: Output file; relative paths are taken from the working directory.
        shortest: Stop writing when the shortest input ends (ffmpeg -shortest).
        overwrite: Replace an existing output file (default: False).

    Raises:
        MediaFileNotFoundError: primary or a source file does not exist.
        OutputExistsError: output exists and overwrite is False.
    """
    primary_path = resolve_input_file(primary)
    resolved = [
        StreamSource(resolve_input_file(s.path), s.codec_type, s.language, s.title)
        for s in sources
    ]
    target = prepare_output_file(output, overwrite)

    logger.log("mux.add.start", LogLevel.INFO,
               file=primary_path.name,
               sources=len(resolved),
               shortest=shortest,
               dst=str(target))

    result = ffmpeg(build_add_args(primary_path, resolved, target, shortest=shortest))
    if result.ok:
        logger.log("mux.add.complete", LogLevel.INFO, file=primary_path.name, dst=target.name)
    else:
        logger.log("mux.add.failed", LogLevel.ERROR,
                   file=primary_path.name,
                   exit_code=result.exit_code,
                   error=result.stderr.strip())
    return result
