import logging
from typing import List, Optional

import requests

from config.download_config import DownloadConfig
from models.series_info import EpisodeStream

class StreamResolver:
    """Looks up playable stream URLs for an episode.

    ``stream_api_url`` is a template such as
    ``https://example.org/api/{imdb_id}/{season}/{episode}`` that answers with a
    JSON list of ``{"stream": ..., "referer": ...}`` objects.
    """

    def __init__(self, config: DownloadConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(config.get_request_headers())
        self.logger = logging.getLogger(__name__)

    def resolve(self, imdb_id: str, season: int, episode: int) -> List[EpisodeStream]:
        if not self.config.stream_api_url:
            raise ValueError('stream_api_url is not configured')

        url = self.config.stream_api_url.format(imdb_id=imdb_id, season=season, episode=episode)
        self.logger.debug(f'Resolving streams from {url}')
        response = self.session.get(url, timeout=self.config.request_timeout)
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict):
            payload = [payload]

        streams = []
        for entry in payload or []:
            stream_url = entry.get('stream') if isinstance(entry, dict) else None
            if not stream_url:
                continue
            streams.append(EpisodeStream(stream_url=stream_url, referer=entry.get('referer') or ''))

        if not streams:
            raise ValueError(f'No stream found for {imdb_id} S{season:02d}E{episode:02d}')
        return streams
