from dataclasses import dataclass
from typing import Optional

@dataclass
class ShowInfo:
    imdb_id: str
    title: str
    url: Optional[str] = None

@dataclass
class SeasonInfo:
    season: int
    episodes: int

@dataclass
class EpisodeStream:
    stream_url: str
    referer: str
