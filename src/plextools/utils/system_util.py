"""
Utility functions for running external tools and verifying they are installed.

Functions:
    - run_cmd: Executes a command and returns a ProcessResult holding its exit
      code along with everything it wrote to stdout and stderr.
    - require_tool: Resolves a binary on PATH and raises ToolNotInstalledError
      when it is unavailable.

run_cmd reads stdout and stderr on two threads at the same time. Reading one
pipe to the end before touching the other can deadlock once the child fills
the OS buffer of the pipe nobody is reading. There is no timeout: a tool that
never exits blocks the caller.
"""
import shutil
import subprocess
import threading
from dataclasses import dataclass, field
from typing import IO, List

from plextools.utils.errors import ToolNotInstalledError
from plextools.utils.logger import LogLevel, log


@dataclass
class ProcessResult:
    """Captured output of a finished process."""
    stdout: str
    stderr: str
    exit_code: int
    cmd: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def _drain(stream: IO[str], chunks: List[str]) -> None:
    """Read a pipe until EOF into chunks."""
    try:
        for chunk in iter(lambda: stream.read(8192), ""):
            chunks.append(chunk)
    finally:
        stream.close()


def run_cmd(cmd: List[str]) -> ProcessResult:
    """Run a command, draining stdout and stderr concurrently."""
    cmd = [str(part) for part in cmd]
    log("process.start", LogLevel.DEBUG, cmd=" ".join(cmd))

    process = subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    )

    stdout_chunks: List[str] = []
    stderr_chunks: List[str] = []
    readers = [
        threading.Thread(target=_drain, args=(process.stdout, stdout_chunks), daemon=True),
        threading.Thread(target=_drain, args=(process.stderr, stderr_chunks), daemon=True),
    ]
    for reader in readers:
        reader.start()

    code = process.wait()
    for reader in readers:
        reader.join()

    log("process.exit", LogLevel.DEBUG, tool=cmd[0], exit_code=code)
    return ProcessResult(
        stdout="".join(stdout_chunks),
        stderr="".join(stderr_chunks),
        exit_code=code,
        cmd=cmd,
    )


def require_tool(binary: str) -> str:
    """Return the full path of binary on PATH, or raise ToolNotInstalledError."""
    path = shutil.which(binary)
    if path is None:
        log("tool.missing", LogLevel.ERROR, tool=binary)
        raise ToolNotInstalledError(binary)
    return path
