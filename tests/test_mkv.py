from pathlib import Path

import pytest

from plextools import mkv
from plextools.utils.errors import MediaFileNotFoundError, ToolNotInstalledError


def test_extract_track_strips_mkv_and_maps_track(fake_tools, movie, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = mkv.extract_track("Movie.mkv", 2, "en.srt")

    assert result.ok
    assert fake_tools.calls[0] == ["mkvextract", str(movie.resolve()), "tracks", "2:Movie.en.srt"]


def test_extract_track_into_output_dir(fake_tools, movie, tmp_path):
    out_dir = tmp_path / "subs"

    mkv.extract_track(movie, 3, ".sup", output_dir=out_dir)

    assert fake_tools.calls[0][-1] == f"3:{out_dir / 'Movie.sup'}"
    assert out_dir.is_dir()


def test_track_output_name_keeps_other_extensions():
    assert mkv.track_output_name(Path("Show.S01E01.MKV"), "srt") == "Show.S01E01.srt"
    assert mkv.track_output_name(Path("clip.mp4"), "aac") == "clip.mp4.aac"


def test_extract_track_reports_failure(fake_tools, movie):
    fake_tools.queue(stdout="Error: The track ID 9 is not valid.", exit_code=2)

    result = mkv.extract_track(movie, 9, "srt")

    assert not result.ok
    assert result.exit_code == 2


def test_extract_track_missing_file(fake_tools, tmp_path):
    with pytest.raises(MediaFileNotFoundError):
        mkv.extract_track(tmp_path / "missing.mkv", 0, "srt")
    assert fake_tools.calls == []


def test_extract_track_missing_tool(missing_tools, movie):
    with pytest.raises(ToolNotInstalledError):
        mkv.extract_track(movie, 0, "srt")
    assert missing_tools.calls == []


def test_extract_tracks_embeds_track_number(fake_tools, movie, tmp_path):
    fake_tools.queue()
    fake_tools.queue(exit_code=2)
    fake_tools.queue()

    batch = mkv.extract_tracks(movie, [2, 3, 4], "srt", output_dir=tmp_path)

    assert [cmd[-1] for cmd in fake_tools.calls] == [
        f"2:{tmp_path / 'Movie.2.srt'}",
        f"3:{tmp_path / 'Movie.3.srt'}",
        f"4:{tmp_path / 'Movie.4.srt'}",
    ]
    assert (batch.ok, batch.failed) == (2, 1)
    assert batch.results[0][1] == tmp_path / "Movie.2.srt"
    assert batch.results[1][1] is None


def test_extract_tracks_from_files_continues_past_missing_file(fake_tools, movie, tmp_path):
    second = tmp_path / "Second.mkv"
    second.write_bytes(b"")

    batch = mkv.extract_tracks_from_files([movie, tmp_path / "gone.mkv", second], 1, "en.srt")

    assert len(fake_tools.calls) == 2
    assert [status.split(" ")[0] for _, _, status in batch.results] == ["OK", "FAIL", "OK"]
    assert batch.results[2][1] == Path("Second.en.srt")


def test_extract_tracks_aborts_without_tool(missing_tools, movie):
    with pytest.raises(ToolNotInstalledError):
        mkv.extract_tracks(movie, [1, 2], "srt")


def test_get_mkvextract_version(fake_tools):
    fake_tools.queue(stdout="mkvextract v80.0 ('Roundabout') 64-bit\n")

    assert mkv.get_mkvextract_version() == "80.0"
    assert fake_tools.calls[0] == ["mkvextract", "--version"]


def test_extract_tracks_records_negative_track_and_keeps_going(fake_tools, movie, tmp_path):
    batch = mkv.extract_tracks(movie, [2, -1, 3], "srt", output_dir=tmp_path)

    assert len(fake_tools.calls) == 2
    assert [status.split(" ")[0] for _, _, status in batch.results] == ["OK", "FAIL", "OK"]
    assert ">= 0" in batch.results[1][2]
