"""
Path helpers shared by the probe, mux and mkv wrappers.

Inputs are resolved to absolute paths and must exist before any external tool
is started. Outputs are resolved against the current working directory, get
their parent directory created, and are never replaced unless the caller asks
for it.
"""
from pathlib import Path
from typing import Union

from plextools.utils.errors import MediaFileNotFoundError, OutputExistsError

PathLike = Union[str, Path]


def resolve_input_file(path: PathLike) -> Path:
    """Return path as an absolute Path, raising MediaFileNotFoundError if it is not a file."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise MediaFileNotFoundError(resolved)
    return resolved


def resolve_input_dir(path: PathLike) -> Path:
    """Return path as an absolute Path, raising MediaFileNotFoundError if it is not a directory."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_dir():
        raise MediaFileNotFoundError(resolved)
    return resolved


def prepare_output_file(path: PathLike, overwrite: bool = False) -> Path:
    """
    Resolve an output path and make it ready to be written.

    Relative paths are taken from the current working directory. The parent
    directory is created when missing. An existing file raises
    OutputExistsError unless overwrite is set.
    """
    output = Path(path).expanduser()
    if not output.is_absolute():
        output = Path.cwd() / output
    output = output.resolve()

    if output.exists() and not overwrite:
        raise OutputExistsError(output)

    output.parent.mkdir(parents=True, exist_ok=True)
    return output


def strip_suffix(name: str, suffix: str) -> str:
    """Remove a case-insensitive trailing suffix such as '.mkv' from name."""
    if name.lower().endswith(suffix.lower()):
        return name[:-len(suffix)]
    return name
