"""
Low-level ffprobe invocation.

Every call runs ``ffprobe -v error -of json <args>`` and tries to parse stdout
as a JSON object. The parsed payload is only set when the tool exited 0 and
the output was valid JSON, so callers can tell a failed probe from a file
that simply has nothing to report.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from plextools.utils import constants, logger, system_util, LogLevel
from plextools.utils.system_util import ProcessResult


@dataclass
class ProbeResult:
    process: ProcessResult
    data: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.process.ok and self.data is not None


def ffprobe(args: List[str]) -> ProbeResult:
    """Run ffprobe with JSON output and return the parsed payload."""
    binary = system_util.require_tool(constants.FFPROBE_BIN)
    process = system_util.run_cmd([binary, *constants.FFPROBE_BASE_ARGS, *args])

    if not process.ok:
        logger.log("probe.failed", LogLevel.WARN,
                   exit_code=process.exit_code,
                   error=process.stderr.strip())
        return ProbeResult(process)

    try:
        data = json.loads(process.stdout)
    except json.JSONDecodeError as e:
        logger.log("probe.parse_failed", LogLevel.WARN, error=str(e))
        return ProbeResult(process)

    if not isinstance(data, dict):
        logger.log("probe.parse_failed", LogLevel.WARN, error="expected a JSON object")
        return ProbeResult(process)

    return ProbeResult(process, data)


def get_ffprobe_version() -> Optional[str]:
    """Return the ffprobe version string, or None if it could not be read."""
    result = ffprobe(["-show_program_version"])
    if not result.ok:
        return None
    return (result.data.get("program_version") or {}).get("version")
