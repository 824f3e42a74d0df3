import pytest

from plextools import organize
from plextools.utils import PLEX_LAYOUT
from plextools.utils.errors import MediaFileNotFoundError


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def _subfolders(root):
    return sorted(p.name for p in root.iterdir() if p.is_dir())


@pytest.fixture
def dest(tmp_path):
    path = tmp_path / "plex" / "movies" / "X"
    path.mkdir(parents=True)
    return path


def test_ensure_folders_creates_layout_once(dest):
    created = organize.ensure_folders(dest)

    assert len(created) == 8
    assert _subfolders(dest) == sorted(PLEX_LAYOUT)

    assert organize.ensure_folders(dest) == []
    assert _subfolders(dest) == sorted(PLEX_LAYOUT)


def test_ensure_folders_requires_existing_root(tmp_path):
    with pytest.raises(MediaFileNotFoundError):
        organize.ensure_folders(tmp_path / "missing")


def test_move_bonus_files_into_layout_folders(tmp_path, dest):
    source = tmp_path / "downloads"
    trailer = _touch(source / "clip-trailer.mp4")
    deleted = _touch(source / "nested" / "clip-deleted.srt")
    organize.ensure_folders(dest)

    batch = organize.move_bonus_files(source, dest)

    assert batch.ok == 2
    assert not trailer.exists() and not deleted.exists()
    assert (dest / "Trailers" / "clip-trailer.mp4").is_file()
    assert (dest / "Deleted Scenes" / "clip-deleted.srt").is_file()


def test_move_bonus_files_matches_language_subtitles_only(tmp_path, dest):
    source = tmp_path / "downloads"
    _touch(source / "cast-interview.en.srt")
    _touch(source / "cast-interview.mkv")
    _touch(source / "behind-the-scenes.mp4")
    _touch(source / "making-behindthescenes.mp4")

    batch = organize.move_bonus_files(source, dest)

    assert batch.ok == 2
    assert (dest / "Interviews" / "cast-interview.en.srt").is_file()
    assert (dest / "Behind The Scenes" / "making-behindthescenes.mp4").is_file()
    assert (source / "cast-interview.mkv").is_file()
    assert (source / "behind-the-scenes.mp4").is_file()
    assert not (dest / "Scenes").exists()


def test_move_bonus_files_skips_name_conflicts(tmp_path, dest):
    source = tmp_path / "downloads"
    src = _touch(source / "teaser-trailer.mp4")
    _touch(dest / "Trailers" / "teaser-trailer.mp4")
    _touch(source / "b-short.mp4")

    batch = organize.move_bonus_files(source, dest)

    assert (batch.ok, batch.skipped, batch.failed) == (1, 1, 0)
    assert src.is_file()
    assert (dest / "Shorts" / "b-short.mp4").is_file()


def test_move_bonus_files_without_matches(tmp_path, dest):
    source = tmp_path / "downloads"
    _touch(source / "Movie.mkv")

    batch = organize.move_bonus_files(source, dest)

    assert len(batch) == 0
    assert batch.succeeded


def test_move_bonus_files_requires_roots(tmp_path, dest):
    with pytest.raises(MediaFileNotFoundError):
        organize.move_bonus_files(tmp_path / "missing", dest)


def test_prune_only_removes_empty_folders(dest):
    organize.ensure_folders(dest)
    _touch(dest / "Trailers" / "a-trailer.mp4")
    (dest / "Featurettes" / "nested").mkdir()

    removed = organize.prune_empty_folders(dest)

    assert sorted(p.name for p in removed) == sorted(set(PLEX_LAYOUT) - {"Trailers", "Featurettes"})
    assert _subfolders(dest) == ["Featurettes", "Trailers"]
    assert organize.prune_empty_folders(dest) == []


def test_organize_in_place_is_idempotent(dest):
    _touch(dest / "Movie.mkv")
    _touch(dest / "extras" / "fight-scene.mp4")
    _touch(dest / "extras" / "gag-other.mp4")

    first = organize.organize(dest, dest)
    layout_after_first = sorted(str(p.relative_to(dest)) for p in dest.rglob("*"))
    second = organize.organize(dest, dest)
    layout_after_second = sorted(str(p.relative_to(dest)) for p in dest.rglob("*"))

    assert first.moved.ok == 2
    assert len(second.moved) == 0
    assert layout_after_first == layout_after_second
    assert (dest / "Scenes" / "fight-scene.mp4").is_file()
    assert (dest / "Other" / "gag-other.mp4").is_file()
    assert (dest / "Movie.mkv").is_file()
    assert not (dest / "Trailers").exists()


def test_organize_validates_roots_first(tmp_path, dest):
    with pytest.raises(MediaFileNotFoundError):
        organize.organize(tmp_path / "missing", dest)
    assert _subfolders(dest) == []


def test_move_bonus_files_matches_names_regardless_of_case(tmp_path, dest):
    source = tmp_path / "downloads"
    _touch(source / "Clip-Trailer.MP4")
    _touch(source / "extra" / "Scene-DELETED.en.SRT")

    batch = organize.move_bonus_files(source, dest)

    assert batch.ok == 2
    assert (dest / "Trailers" / "Clip-Trailer.MP4").is_file()
    assert (dest / "Deleted Scenes" / "Scene-DELETED.en.SRT").is_file()
