import logging
from typing import List, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from config.download_config import DownloadConfig
from models.series_info import SeasonInfo, ShowInfo

IMDB_BASE_URL = 'https://www.imdb.com'
SEARCH_RESULT_SELECTOR = '.ipc-metadata-list>li>div.ipc-metadata-list-summary-item__c>div a'
SEASON_TAB_SELECTOR = ('div.ipc-tabs.ipc-tabs--base.ipc-tabs--align-left.ipc-tabs--display-chip.ipc-tabs--inherit'
                       ' > ul.ipc-tabs.ipc-tabs--base.ipc-tabs--align-left a')
EPISODE_SELECTOR = '.episode-item-wrapper'

class ImdbScraper:
    def __init__(self, config: DownloadConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(config.get_request_headers())
        self.logger = logging.getLogger(__name__)

    def _fetch(self, url: str) -> BeautifulSoup:
        self.logger.debug(f'GET {url}')
        response = self.session.get(url, timeout=self.config.request_timeout)
        response.raise_for_status()
        return BeautifulSoup(response.text, 'html.parser')

    def search_show(self, name: str) -> Optional[ShowInfo]:
        """Find a TV show by name and return its IMDb id, or None."""
        query = quote(name, safe='')
        search_url = f'{IMDB_BASE_URL}/find/?q={query}&s=tt&ttype=tv&ref_=fn_tv'
        soup = self._fetch(search_url)

        link = soup.select_one(SEARCH_RESULT_SELECTOR)
        href = link.get('href') if link else None
        if not href:
            self.logger.warning(f'No IMDb results for TV show {name}')
            return None

        parts = href.split('/')
        if len(parts) < 3 or not parts[2]:
            self.logger.warning(f'Unexpected IMDb result link: {href}')
            return None

        self.logger.info(f'Found TV show {name} at {href}')
        title = link.get_text(strip=True) or name
        return ShowInfo(imdb_id=parts[2], title=title, url=f'{IMDB_BASE_URL}{href}')

    def count_seasons(self, imdb_id: str) -> int:
        soup = self._fetch(f'{IMDB_BASE_URL}/title/{imdb_id}/episodes')
        return len(soup.select(SEASON_TAB_SELECTOR))

    def count_episodes(self, imdb_id: str, season: int) -> int:
        soup = self._fetch(f'{IMDB_BASE_URL}/title/{imdb_id}/episodes?season={season}')
        return len(soup.select(EPISODE_SELECTOR))

    def get_seasons(self, imdb_id: str) -> List[SeasonInfo]:
        seasons = []
        for season in range(1, self.count_seasons(imdb_id) + 1):
            episodes = self.count_episodes(imdb_id, season)
            self.logger.info(f'Found Season {season} with {episodes} episodes for TV show {imdb_id}')
            seasons.append(SeasonInfo(season=season, episodes=episodes))
        return seasons
