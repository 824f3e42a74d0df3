"""
plextools command line: inspect streams, export or add tracks, dump Matroska
tracks, and sort bonus content into Plex extras folders.

Exit codes: 0 on success, 1 when an external tool or a batch item failed,
2 when a tool is missing or an input/output precondition is not met.
"""
import argparse
import atexit
import sys
from pathlib import Path

import plextools as plextools_module
from plextools import mkv, mux, organize, probe
from plextools.utils import CODEC_TYPE_ALL, CODEC_TYPE_CHOICES, LogLevel, constants, logger
from plextools.utils.batch import BatchResult
from plextools.utils.errors import PlexToolsError, ProbeError
from plextools.utils.system_util import ProcessResult

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PRECONDITION = 2


class _TeeStream:
    def __init__(self, *streams):
        self._streams = streams

    def write(self, data):
        for stream in self._streams:
            stream.write(data)
        return len(data)

    def flush(self):
        for stream in self._streams:
            stream.flush()

    def isatty(self):
        return any(getattr(stream, "isatty", lambda: False)() for stream in self._streams)


def _tee_to_file(log_file: str) -> None:
    log_path = Path(log_file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_file_handle = open(log_path, "a", encoding="utf-8", buffering=1)
    sys.stdout = _TeeStream(sys.stdout, log_file_handle)
    sys.stderr = _TeeStream(sys.stderr, log_file_handle)
    atexit.register(log_file_handle.close)


def _process_exit(result: ProcessResult, what: str) -> int:
    if result.ok:
        return EXIT_OK
    logger.safe_print(f"❌ {what} failed (exit code {result.exit_code})", file=sys.stderr)
    if result.stderr.strip():
        logger.safe_print(result.stderr.rstrip(), file=sys.stderr)
    return EXIT_FAILED


def _print_batch(batch: BatchResult) -> int:
    for source, target, status in batch.results:
        arrow = f" → {target}" if target else ""
        logger.safe_print(f"{status:<10} {source}{arrow}")
    logger.safe_print(f"\nTotal: {len(batch)} | ok: {batch.ok} | skip: {batch.skipped} | fail: {batch.failed}")
    return EXIT_OK if batch.succeeded else EXIT_FAILED


def _track_number(value: str) -> int:
    track = int(value)
    if track < 0:
        raise argparse.ArgumentTypeError(f"track number must be >= 0, got {track}")
    return track


def _format_stream(stream: probe.StreamInfo) -> str:
    flags = []
    if stream.is_default:
        flags.append("default")
    if stream.is_forced:
        flags.append("forced")
    return (f"#{stream.index:<3} {stream.codec_type:<9} {stream.type_index:<3} {stream.codec_name:<18} "
            f"{stream.language or '-':<5} {stream.title or ''}"
            f"{'  [' + ', '.join(flags) + ']' if flags else ''}")


def cmd_version(args) -> int:
    for name, getter in (
            ("ffprobe", probe.get_ffprobe_version),
            ("ffmpeg", mux.get_ffmpeg_version),
            ("mkvextract", mkv.get_mkvextract_version),
    ):
        try:
            version = getter()
        except PlexToolsError as e:
            version = f"not installed ({e})"
        logger.safe_print(f"{name:<11} {version or 'unknown'}")
    return EXIT_OK


def cmd_streams(args) -> int:
    collection = probe.StreamCollection.from_files(args.files, args.type)
    collection = collection.filter(language=args.language)
    for source in collection.files():
        logger.safe_print(f"\n📄 {source}")
        for stream in collection[source]:
            logger.safe_print("  " + _format_stream(stream))
    logger.safe_print(f"\nTotal streams: {len(collection)}")
    for path, error in collection.failures:
        logger.safe_print(f"❌ {path}: {error}", file=sys.stderr)
    return EXIT_FAILED if collection.failures else EXIT_OK


def cmd_stream(args) -> int:
    stream = probe.get_stream(args.file, args.index, args.type)
    if stream is None:
        logger.safe_print(f"⚠️ No {args.type} stream with index {args.index} in {args.file}", file=sys.stderr)
        return EXIT_FAILED
    logger.safe_print(_format_stream(stream))
    return EXIT_OK


def cmd_export(args) -> int:
    stream = probe.get_stream(args.file, args.index, args.type)
    if stream is None:
        logger.safe_print(f"⚠️ No {args.type} stream with index {args.index} in {args.file}", file=sys.stderr)
        return EXIT_FAILED
    output = args.output or stream.default_output_name()
    result = mux.export_stream(stream, output, overwrite=args.overwrite, by_type=args.type != CODEC_TYPE_ALL)
    return _process_exit(result, f"Export of stream {stream.map_spec(0)} from {stream.source_file.name}")


def cmd_export_all(args) -> int:
    collection = probe.StreamCollection.from_files(args.files, args.type).filter(language=args.language)
    return _print_batch(collection.export_all(args.output_dir, overwrite=args.overwrite))


def cmd_add(args) -> int:
    sources = [
        mux.StreamSource(Path(path), codec_type, language or None, title or None)
        for codec_type, path, language, title in (args.source or [])
    ]
    for source in sources:
        probe.codec_letter(source.codec_type)
    result = mux.add_streams(args.primary, sources, args.output, shortest=args.shortest, overwrite=args.overwrite)
    return _process_exit(result, f"Adding {len(sources)} stream(s) to {args.primary}")


def cmd_mkv(args) -> int:
    if len(args.files) == 1 and len(args.track) > 1:
        batch = mkv.extract_tracks(args.files[0], args.track, args.ext, output_dir=args.output_dir)
        return _print_batch(batch)
    if len(args.files) > 1:
        if len(args.track) != 1:
            logger.safe_print("❌ Exactly one --track is allowed with several files", file=sys.stderr)
            return EXIT_PRECONDITION
        batch = mkv.extract_tracks_from_files(args.files, args.track[0], args.ext, output_dir=args.output_dir)
        return _print_batch(batch)

    result = mkv.extract_track(args.files[0], args.track[0], args.ext, output_dir=args.output_dir)
    return _process_exit(result, f"Extraction of track {args.track[0]} from {args.files[0]}")


def cmd_organize(args) -> int:
    dest = args.dest or args.source
    if args.phase == "ensure":
        created = organize.ensure_folders(dest)
        logger.safe_print(f"Created {len(created)} folder(s)")
        return EXIT_OK
    if args.phase == "move":
        return _print_batch(organize.move_bonus_files(args.source, dest))
    if args.phase == "prune":
        pruned = organize.prune_empty_folders(dest)
        logger.safe_print(f"Removed {len(pruned)} empty folder(s)")
        return EXIT_OK

    result = organize.organize(args.source, dest)
    logger.safe_print(f"Created {len(result.created)} folder(s)")
    code = _print_batch(result.moved)
    logger.safe_print(f"Removed {len(result.pruned)} empty folder(s)")
    return code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plextools",
        description="Inspect and extract media streams with ffprobe/ffmpeg/mkvextract "
                    "and organize bonus content for a Plex Media Server.",
        epilog="Example: plextools organize ~/Downloads/extras '/media/Movies/Heat (1995)'",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--log-file",
        help="Write console output to a file (in addition to the console); overrides $PLEXTOOLS_LOG_FILE",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {plextools_module.__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("version", help="Show the versions of the external tools")
    p.set_defaults(func=cmd_version)

    p = sub.add_parser("streams", help="List the streams of one or more files")
    p.add_argument("files", nargs="+", help="Media files")
    p.add_argument("--type", choices=CODEC_TYPE_CHOICES, default=CODEC_TYPE_ALL, help="Codec type filter")
    p.add_argument("--language", help="Only streams tagged with this language (e.g. eng)")
    p.set_defaults(func=cmd_streams)

    p = sub.add_parser("stream", help="Show a single stream")
    p.add_argument("file", help="Media file")
    p.add_argument("index", type=int, help="Zero-based index within --type (absolute index with 'all')")
    p.add_argument("--type", choices=CODEC_TYPE_CHOICES, default=CODEC_TYPE_ALL, help="Codec type")
    p.set_defaults(func=cmd_stream)

    p = sub.add_parser("export", help="Copy one stream into its own file")
    p.add_argument("file", help="Media file")
    p.add_argument("index", type=int, help="Zero-based index within --type (absolute index with 'all')")
    p.add_argument("--type", choices=CODEC_TYPE_CHOICES, default=CODEC_TYPE_ALL, help="Codec type")
    p.add_argument("-o", "--output", help="Output file (default: <name>.<index>[.<lang>].<ext>)")
    p.add_argument("--overwrite", action="store_true", help="Overwrite an existing output")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("export-all", help="Copy every matching stream of the files into a folder")
    p.add_argument("files", nargs="+", help="Media files")
    p.add_argument("--type", choices=CODEC_TYPE_CHOICES, default=CODEC_TYPE_ALL, help="Codec type filter")
    p.add_argument("--language", help="Only streams tagged with this language (e.g. eng)")
    p.add_argument("--output-dir", default=".", help="Output folder (default: current directory)")
    p.add_argument("--overwrite", action="store_true", help="Overwrite existing outputs")
    p.set_defaults(func=cmd_export_all)

    p = sub.add_parser("add", help="Mux extra streams next to the video of a primary file")
    p.add_argument("primary", help="File providing the video stream")
    p.add_argument("output", help="Output file")
    p.add_argument(
        "--source", nargs=4, action="append", metavar=("TYPE", "PATH", "LANGUAGE", "TITLE"),
        help="Extra stream: its codec type, file, language tag and title (use '' to leave a tag unset); repeatable",
    )
    p.add_argument("--shortest", action="store_true", help="Stop at the end of the shortest input")
    p.add_argument("--overwrite", action="store_true", help="Overwrite an existing output")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("mkv", help="Extract tracks from Matroska files with mkvextract")
    p.add_argument("files", nargs="+", help="Matroska files")
    p.add_argument("-t", "--track", type=_track_number, action="append", required=True,
                   help="Track number (repeatable with a single file)")
    p.add_argument("-e", "--ext", required=True, help="Output extension, e.g. en.srt")
    p.add_argument("--output-dir", help="Output folder (default: current directory)")
    p.set_defaults(func=cmd_mkv)

    p = sub.add_parser("organize", help="Sort bonus content into Plex extras folders")
    p.add_argument("source", help="Folder searched (recursively) for *-<type>.<ext> files")
    p.add_argument("dest", nargs="?", help="Movie folder receiving the extras folders (default: source)")
    p.add_argument("--phase", choices=("ensure", "move", "prune", "all"), default="all",
                   help="Run a single phase (default: all)")
    p.set_defaults(func=cmd_organize)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_file = args.log_file or constants.LOG_FILE
    if log_file:
        _tee_to_file(log_file)

    plextools_module.DEBUG = args.debug
    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    try:
        return args.func(args)
    except ProbeError as e:
        logger.safe_print(f"❌ {e}", file=sys.stderr)
        return EXIT_FAILED
    except (PlexToolsError, FileNotFoundError, FileExistsError, NotADirectoryError, ValueError) as e:
        logger.log("cli.error", LogLevel.ERROR, command=args.command, error=str(e))
        logger.safe_print(f"❌ {e}", file=sys.stderr)
        return EXIT_PRECONDITION


if __name__ == "__main__":
    sys.exit(main())
