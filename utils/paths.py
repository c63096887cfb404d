import re
from pathlib import Path

UNSAFE_CHARS_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

def format_number(num: int) -> str:
    return f'{num:02d}'

def sanitize_name(name: str) -> str:
    """Make a show title safe for use as a directory or file name."""
    return UNSAFE_CHARS_RE.sub('_', name).strip()

def season_directory(output_root: Path, show_title: str, season: int) -> Path:
    return output_root / sanitize_name(show_title) / f'Season {season}'

def episode_filename(show_title: str, season: int, episode: int, extension: str = 'mp4') -> str:
    return f'{sanitize_name(show_title)} - S{format_number(season)}E{format_number(episode)}.{extension}'

def episode_path(output_root: Path, show_title: str, season: int, episode: int, extension: str = 'mp4') -> Path:
    return season_directory(output_root, show_title, season) / episode_filename(show_title, season, episode, extension)
