import pytest

from conftest import MOVIE_STREAMS
from plextools import cli


def test_organize_command_moves_bonus_files(tmp_path, capsys):
    source = tmp_path / "in"
    dest = tmp_path / "Movie (2020)"
    source.mkdir()
    dest.mkdir()
    (source / "clip-trailer.mp4").write_bytes(b"")

    code = cli.main(["organize", str(source), str(dest)])

    assert code == 0
    assert (dest / "Trailers" / "clip-trailer.mp4").is_file()
    assert sorted(p.name for p in dest.iterdir()) == ["Trailers"]
    assert "ok: 1" in capsys.readouterr().out


def test_organize_ensure_phase_only(tmp_path):
    assert cli.main(["organize", str(tmp_path), "--phase", "ensure"]) == 0
    assert len([p for p in tmp_path.iterdir() if p.is_dir()]) == 8


def test_organize_missing_root_exits_with_precondition_code(tmp_path, capsys):
    code = cli.main(["organize", str(tmp_path / "missing"), str(tmp_path)])

    assert code == 2
    assert "File not found" in capsys.readouterr().err


def test_mkv_command(fake_tools, movie, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert cli.main(["mkv", "Movie.mkv", "-t", "2", "-e", "en.srt"]) == 0
    assert fake_tools.calls[0][-1] == "2:Movie.en.srt"


def test_mkv_command_failure_prints_tool_error(fake_tools, movie, capsys):
    fake_tools.queue(stderr="Error: track 7 missing", exit_code=2)

    assert cli.main(["mkv", str(movie), "-t", "7", "-e", "srt"]) == 1
    assert "track 7 missing" in capsys.readouterr().err


def test_streams_command_lists_streams(fake_tools, movie, capsys):
    fake_tools.queue_json(MOVIE_STREAMS)

    assert cli.main(["streams", str(movie), "--type", "audio"]) == 0
    out = capsys.readouterr().out
    assert "Commentary" in out
    assert "Total streams: 3" in out


def test_streams_command_missing_tool(missing_tools, movie, capsys):
    assert cli.main(["streams", str(movie)]) == 2
    assert "not found on PATH" in capsys.readouterr().err


def test_streams_command_probe_failure(fake_tools, movie, capsys):
    fake_tools.queue(stderr="Invalid data found when processing input", exit_code=1)

    assert cli.main(["streams", str(movie)]) == 1
    assert "Invalid data" in capsys.readouterr().err


def test_export_command_refuses_existing_output(fake_tools, movie, tmp_path, capsys):
    existing = tmp_path / "sub.srt"
    existing.write_bytes(b"")
    fake_tools.queue_json({"streams": [MOVIE_STREAMS["streams"][3]]})

    code = cli.main(["export", str(movie), "0", "--type", "subtitle", "-o", str(existing)])

    assert code == 2
    assert "already exists" in capsys.readouterr().err
    assert len(fake_tools.calls) == 1


def test_add_command(fake_tools, movie, tmp_path):
    audio = tmp_path / "dub.m4a"
    audio.write_bytes(b"")

    code = cli.main(["add", str(movie), str(tmp_path / "out.mkv"),
                     "--source", "audio", str(audio), "ger", "", "--shortest"])

    assert code == 0
    cmd = fake_tools.calls[0]
    assert "-shortest" in cmd
    assert "title=" not in " ".join(cmd)


def test_version_command_with_missing_tools(missing_tools, capsys):
    assert cli.main(["version"]) == 0
    assert capsys.readouterr().out.count("not installed") == 3


def test_mkv_command_rejects_negative_track(fake_tools, movie, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["mkv", str(movie), "-t", "-1", "-e", "srt"])

    assert exc.value.code == 2
    assert "must be >= 0" in capsys.readouterr().err
    assert fake_tools.calls == []


def test_streams_command_lists_readable_files_and_fails_on_others(fake_tools, movie, tmp_path, capsys):
    fake_tools.queue_json(MOVIE_STREAMS)

    assert cli.main(["streams", str(movie), str(tmp_path / "gone.mkv")]) == 1
    captured = capsys.readouterr()
    assert "Commentary" in captured.out
    assert "gone.mkv" in captured.err


def test_export_all_command_fails_when_a_file_is_unreadable(fake_tools, movie, tmp_path, capsys):
    fake_tools.queue_json(MOVIE_STREAMS)

    code = cli.main(["export-all", str(movie), str(tmp_path / "gone.mkv"),
                     "--type", "subtitle", "--output-dir", str(tmp_path / "out")])

    assert code == 1
    out = capsys.readouterr().out
    assert "ok: 1" in out
    assert "fail: 1" in out
