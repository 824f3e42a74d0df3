import json
from pathlib import Path

import pytest

from plextools.utils import system_util
from plextools.utils.errors import ToolNotInstalledError
from plextools.utils.system_util import ProcessResult

MOVIE_STREAMS = {
    "streams": [
        {"index": 0, "codec_type": "video", "codec_name": "h264",
         "disposition": {"default": 1, "forced": 0}},
        {"index": 1, "codec_type": "audio", "codec_name": "aac",
         "tags": {"language": "eng"}, "disposition": {"default": 1, "forced": 0}},
        {"index": 2, "codec_type": "audio", "codec_name": "ac3",
         "tags": {"language": "fre", "title": "Commentary"}, "disposition": {"default": 0, "forced": 0}},
        {"index": 3, "codec_type": "subtitle", "codec_name": "subrip",
         "tags": {"language": "eng", "title": "Forced"}, "disposition": {"default": 0, "forced": 1}},
        {"index": 4, "codec_type": "audio", "codec_name": "dts",
         "tags": {"language": "eng"}, "disposition": {"default": 0, "forced": 0}},
    ]
}


class FakeRunner:
    """Stands in for system_util.run_cmd: records commands, replays queued results."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, stdout="", stderr="", exit_code=0):
        self.responses.append((stdout, stderr, exit_code))

    def queue_json(self, data):
        self.queue(stdout=json.dumps(data))

    def __call__(self, cmd):
        cmd = [str(part) for part in cmd]
        self.calls.append(cmd)
        stdout, stderr, exit_code = self.responses.pop(0) if self.responses else ("", "", 0)
        return ProcessResult(stdout=stdout, stderr=stderr, exit_code=exit_code, cmd=cmd)


@pytest.fixture
def fake_tools(monkeypatch):
    runner = FakeRunner()
    monkeypatch.setattr(system_util, "require_tool", lambda binary: binary)
    monkeypatch.setattr(system_util, "run_cmd", runner)
    return runner


@pytest.fixture
def missing_tools(monkeypatch):
    def _missing(binary):
        raise ToolNotInstalledError(binary)

    runner = FakeRunner()
    monkeypatch.setattr(system_util, "require_tool", _missing)
    monkeypatch.setattr(system_util, "run_cmd", runner)
    return runner


@pytest.fixture
def movie(tmp_path) -> Path:
    path = tmp_path / "Movie.mkv"
    path.write_bytes(b"\x1a\x45\xdf\xa3")
    return path
