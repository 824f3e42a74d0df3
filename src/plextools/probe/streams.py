"""
Stream enumeration and lookup on top of ffprobe.

get_streams lists every stream of a file (optionally of one codec type) and
numbers streams within their codec type. get_stream lets ffprobe select a
single stream with ``-select_streams <letter>:<n>``.
"""
from pathlib import Path
from typing import Dict, List, Optional

from plextools.probe import core
from plextools.probe.model import StreamInfo, codec_letter
from plextools.utils import CODEC_TYPE_ALL, logger, LogLevel
from plextools.utils.errors import ProbeError
from plextools.utils.file_util import PathLike, resolve_input_file


def _probe_streams(path: Path, select: Optional[str] = None) -> List[dict]:
    args = []
    if select is not None:
        args += ["-select_streams", select]
    args += ["-show_streams", str(path)]

    result = core.ffprobe(args)
    if not result.ok:
        raise ProbeError(path, result)
    return result.data.get("streams") or []


def get_streams(path: PathLike, codec_type: str = CODEC_TYPE_ALL) -> List[StreamInfo]:
    """
    List the streams of a media file in file order.

    Args:
        path: Media file; relative paths are resolved against the working directory.
        codec_type: 'video', 'audio', 'subtitle', 'data' or 'all'.

    Returns:
        StreamInfo list, empty when no stream matches.

    Raises:
        MediaFileNotFoundError: path does not exist (checked before ffprobe runs).
        ProbeError: ffprobe failed or its output could not be parsed.
    """
    if codec_type != CODEC_TYPE_ALL:
        codec_letter(codec_type)
    source = resolve_input_file(path)

    counters: Dict[str, int] = {}
    streams = []
    for raw in _probe_streams(source):
        kind = raw.get("codec_type", "")
        type_index = counters.get(kind, 0)
        counters[kind] = type_index + 1

        info = StreamInfo.from_ffprobe(source, raw, type_index)
        if info.matches(codec_type):
            streams.append(info)

    logger.log("probe.streams", LogLevel.DEBUG,
               file=source.name,
               codec_type=codec_type,
               count=len(streams))
    return streams


def get_stream(path: PathLike, index: int, codec_type: str = CODEC_TYPE_ALL) -> Optional[StreamInfo]:
    """
    Return the index-th stream of codec_type in a file, or None when there is none.

    With codec_type 'all' the index is the absolute stream index.
    """
    if index < 0:
        raise ValueError(f"Stream index must be >= 0, got {index}")

    if codec_type == CODEC_TYPE_ALL:
        for stream in get_streams(path, CODEC_TYPE_ALL):
            if stream.index == index:
                return stream
        return None

    select = f"{codec_letter(codec_type)}:{index}"
    source = resolve_input_file(path)
    raw_streams = _probe_streams(source, select)
    if not raw_streams:
        logger.log("probe.stream.not_found", LogLevel.DEBUG, file=source.name, select=select)
        return None
    return StreamInfo.from_ffprobe(source, raw_streams[0], index)
