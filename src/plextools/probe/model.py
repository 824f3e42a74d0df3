"""
Value objects describing the streams of media files.

A StreamInfo is built from one entry of ffprobe's ``streams`` array. ffprobe
only reports the absolute stream index; the position of a stream among the
streams of its own codec type (``type_index``) is what ffmpeg's ``-map
0:a:1`` syntax needs, so it is counted by the caller while walking the
streams in file order.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from plextools.utils.constants import (
    CODEC_EXTENSIONS,
    CODEC_TYPE_ALL,
    CODEC_TYPE_AUDIO,
    CODEC_TYPE_DATA,
    CODEC_TYPE_LETTERS,
    CODEC_TYPE_SUBTITLE,
    CODEC_TYPE_VIDEO,
    STATUS_FAIL,
)
from plextools.utils import logger, LogLevel
from plextools.utils.errors import PlexToolsError, ToolNotInstalledError, UnsupportedCodecTypeError


def codec_letter(codec_type: str) -> str:
    """Return the ffmpeg stream specifier letter for a codec type."""
    try:
        return CODEC_TYPE_LETTERS[codec_type]
    except KeyError:
        raise UnsupportedCodecTypeError(codec_type) from None


@dataclass
class StreamInfo:
    source_file: Path
    index: int
    codec_type: str
    codec_name: str
    type_index: int
    language: Optional[str] = None
    title: Optional[str] = None
    disposition: Dict[str, Any] = field(default_factory=dict)
    tags: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_ffprobe(cls, source_file: Path, stream: Dict[str, Any], type_index: int) -> "StreamInfo":
        """Build a StreamInfo from one ffprobe stream object."""
        tags = stream.get("tags") or {}
        return cls(
            source_file=source_file,
            index=int(stream.get("index", 0)),
            codec_type=stream.get("codec_type", ""),
            codec_name=stream.get("codec_name", ""),
            type_index=type_index,
            language=tags.get("language"),
            title=tags.get("title"),
            disposition=dict(stream.get("disposition") or {}),
            tags=dict(tags),
        )

    @property
    def is_video(self) -> bool:
        return self.codec_type == CODEC_TYPE_VIDEO

    @property
    def is_audio(self) -> bool:
        return self.codec_type == CODEC_TYPE_AUDIO

    @property
    def is_subtitle(self) -> bool:
        return self.codec_type == CODEC_TYPE_SUBTITLE

    @property
    def is_data(self) -> bool:
        return self.codec_type == CODEC_TYPE_DATA

    @property
    def is_default(self) -> bool:
        return bool(self.disposition.get("default"))

    @property
    def is_forced(self) -> bool:
        return bool(self.disposition.get("forced"))

    def map_spec(self, input_index: int = 0, by_type: bool = True) -> str:
        """
        Build the ffmpeg ``-map`` specifier for this stream.

        By type: ``<input>:<letter>:<type_index>`` (e.g. ``0:a:1``).
        Otherwise by absolute index: ``<input>:<index>`` (e.g. ``0:3``).
        """
        if by_type:
            return f"{input_index}:{codec_letter(self.codec_type)}:{self.type_index}"
        return f"{input_index}:{self.index}"

    def suggested_extension(self) -> str:
        """File extension suited to a stream-copy of this codec ('mka'/'mkv'/'mks' when unknown)."""
        ext = CODEC_EXTENSIONS.get(self.codec_name.lower())
        if ext:
            return ext
        if self.is_audio:
            return "mka"
        if self.is_subtitle:
            return "mks"
        return "mkv"

    def default_output_name(self) -> str:
        """Name for an exported copy, e.g. ``Movie.1.eng.ac3``."""
        parts = [self.source_file.stem, str(self.type_index)]
        if self.language:
            parts.append(self.language)
        parts.append(self.suggested_extension())
        return ".".join(parts)

    def matches(self, codec_type: Optional[str] = None, language: Optional[str] = None) -> bool:
        if codec_type and codec_type != CODEC_TYPE_ALL and self.codec_type != codec_type:
            return False
        if language and (self.language or "").lower() != language.lower():
            return False
        return True


class StreamCollection:
    """
    Streams of one or more files, keyed by source file in insertion order.

    Files that could not be probed are kept in ``failures`` as (path, error)
    pairs so a multi-file run reports them instead of stopping.
    """

    def __init__(self, streams: Optional[Dict[Path, List[StreamInfo]]] = None,
                 failures: Optional[List[Tuple[Path, str]]] = None):
        self._streams: Dict[Path, List[StreamInfo]] = dict(streams or {})
        self.failures: List[Tuple[Path, str]] = list(failures or [])

    @classmethod
    def from_files(cls, paths, codec_type: str = CODEC_TYPE_ALL) -> "StreamCollection":
        """Probe every file and collect its streams of the given type, continuing past bad files."""
        from plextools.probe.streams import get_streams

        if codec_type != CODEC_TYPE_ALL:
            codec_letter(codec_type)

        collection = cls()
        for path in paths:
            try:
                streams = get_streams(path, codec_type)
            except ToolNotInstalledError:
                raise
            except (PlexToolsError, OSError) as e:
                logger.log("probe.error", LogLevel.ERROR, file=str(path), error=str(e))
                collection.failures.append((Path(path), str(e)))
                continue
            source = streams[0].source_file if streams else Path(path).expanduser().resolve()
            collection.add(source, streams)
        return collection

    def add(self, source_file: Path, streams: List[StreamInfo]) -> None:
        self._streams.setdefault(source_file, []).extend(streams)

    def files(self) -> List[Path]:
        return list(self._streams)

    def streams_for(self, source_file: Path) -> List[StreamInfo]:
        return list(self._streams.get(source_file, []))

    def filter(self, codec_type: Optional[str] = None, language: Optional[str] = None) -> "StreamCollection":
        """Return a new collection holding only the matching streams (files with none are kept, empty)."""
        return StreamCollection({
            path: [s for s in streams if s.matches(codec_type, language)]
            for path, streams in self._streams.items()
        }, self.failures)

    def count(self, codec_type: Optional[str] = None) -> int:
        return sum(1 for s in self if s.matches(codec_type))

    def export_all(self, output_dir, overwrite: bool = False, by_type: bool = True):
        """
        Export every stream in the collection into output_dir, see mux.export_streams.

        Files that failed to probe are added to the result as FAIL entries.
        """
        from plextools.mux.batch import export_streams

        batch = export_streams(list(self), output_dir, overwrite=overwrite, by_type=by_type)
        for path, error in self.failures:
            batch.add(path, None, f"{STATUS_FAIL} ({error})")
        return batch

    def __iter__(self) -> Iterator[StreamInfo]:
        for streams in self._streams.values():
            yield from streams

    def __len__(self) -> int:
        return sum(len(streams) for streams in self._streams.values())

    def __contains__(self, source_file) -> bool:
        return source_file in self._streams

    def __getitem__(self, source_file: Path) -> List[StreamInfo]:
        return self._streams[source_file]
