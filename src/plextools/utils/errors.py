"""Exception types raised by plextools."""


class PlexToolsError(Exception):
    """Base class for all plextools errors."""


class ToolNotInstalledError(PlexToolsError):
    """A required external binary could not be found on PATH."""

    def __init__(self, binary: str):
        self.binary = binary
        super().__init__(f"'{binary}' not found on PATH. Install it first (e.g. brew install ffmpeg mkvtoolnix).")


class MediaFileNotFoundError(PlexToolsError, FileNotFoundError):
    """An input file or folder does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found: {path}")


class OutputExistsError(PlexToolsError, FileExistsError):
    """The output file exists and overwriting was not requested."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Output already exists: {path} (use overwrite to replace it)")


class ProbeError(PlexToolsError):
    """ffprobe failed or returned output that could not be parsed."""

    def __init__(self, path, result):
        self.path = path
        self.result = result
        detail = result.process.stderr.strip() or f"exit code {result.process.exit_code}"
        super().__init__(f"ffprobe failed for {path}: {detail}")


class UnsupportedCodecTypeError(PlexToolsError, ValueError):
    """A codec type (e.g. 'attachment') that ffmpeg stream specifiers cannot address."""

    def __init__(self, codec_type):
        self.codec_type = codec_type
        super().__init__(f"Unsupported codec type: {codec_type!r}")
