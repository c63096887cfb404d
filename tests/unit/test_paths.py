"""Tests for episode path construction."""

from pathlib import Path

from utils.paths import episode_filename, episode_path, format_number, sanitize_name, season_directory


def test_format_number():
    assert format_number(1) == "01"
    assert format_number(12) == "12"
    assert format_number(123) == "123"


def test_sanitize_name():
    assert sanitize_name("Marvel's Agents: S.H.I.E.L.D.") == "Marvel's Agents_ S.H.I.E.L.D."
    assert sanitize_name("  AC/DC  ") == "AC_DC"


def test_episode_filename():
    assert episode_filename("Dark", 2, 7) == "Dark - S02E07.mp4"
    assert episode_filename("Dark", 2, 7, "mkv") == "Dark - S02E07.mkv"


def test_episode_path():
    root = Path("/media/tv")
    assert season_directory(root, "Dark", 3) == Path("/media/tv/Dark/Season 3")
    assert episode_path(root, "Dark", 3, 1) == Path("/media/tv/Dark/Season 3/Dark - S03E01.mp4")
