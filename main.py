import sys
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from config.download_config import DownloadConfig, ProgressConfig
from core.downloader import StreamDownloader
from core.imdb_scraper import ImdbScraper
from core.stream_resolver import StreamResolver
from models.series_info import SeasonInfo, ShowInfo
from utils.paths import episode_path, format_number, sanitize_name, season_directory

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def check_ffmpeg(ffmpeg_path: str = 'ffmpeg'):
    """Check if FFmpeg is available in the system."""
    if not shutil.which(ffmpeg_path):
        print("Error: FFmpeg not found!")
        print("\nPlease ensure FFmpeg is installed and in your system PATH,")
        print("or set ffmpeg_path in the config file.")
        sys.exit(1)

class SeriesDownloader:
    def __init__(self, output_dir: Path, config_path: Path=None, config: DownloadConfig=None):
        self.config = config or DownloadConfig.from_yaml(config_path or Path('downloader_config.yml'))
        self.output_dir = output_dir
        self.scraper = ImdbScraper(self.config)
        self.resolver = StreamResolver(self.config)
        self.downloader = StreamDownloader(self.config)
        self.logger = logging.getLogger(__name__)
        self.log_handler = None

    def setup_logging(self, show_dir: Path):
        show_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(show_dir / 'download.log')
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logging.getLogger().addHandler(handler)
        self.log_handler = handler

    def teardown_logging(self):
        if self.log_handler is None:
            return
        logging.getLogger().removeHandler(self.log_handler)
        self.log_handler.close()
        self.log_handler = None

    def download_episode(self, show: ShowInfo, show_name: str, season: int, episode: int) -> Optional[Path]:
        label = f'{show_name} [{show.imdb_id}] - S{format_number(season)}E{format_number(episode)}'
        output_file = episode_path(self.output_dir, show_name, season, episode, self.config.output_extension)
        self.logger.info(f'Scraping {label}...')

        if self.config.skip_existing and output_file.exists():
            self.logger.info(f'File already downloaded, skipping {output_file.name}')
            return None

        streams = self.resolver.resolve(show.imdb_id, season, episode)
        return self.downloader.download(streams[0], output_file)

    def download_season(self, show: ShowInfo, show_name: str, season: SeasonInfo) -> List[Path]:
        season_dir = season_directory(self.output_dir, show_name, season.season)
        season_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info(f'Processing {show_name} [{show.imdb_id}] - S{format_number(season.season)}')

        downloaded = []
        for episode in range(1, season.episodes + 1):
            result = self.download_episode(show, show_name, season.season, episode)
            if result:
                downloaded.append(result)
        return downloaded

    def process_show(self, show_name: str) -> List[Path]:
        self.setup_logging(self.output_dir / sanitize_name(show_name))

        try:
            show = self.scraper.search_show(show_name)
            if not show:
                raise ValueError(f'TV show not found: {show_name}')

            seasons = self.scraper.get_seasons(show.imdb_id)
            self.logger.info(f'{show_name} has {len(seasons)} seasons')

            downloaded = []
            for season in seasons:
                downloaded.extend(self.download_season(show, show_name, season))
            self.logger.info(f'Downloaded {len(downloaded)} episodes of {show_name}')
            return downloaded

        except Exception as e:
            self.logger.error(f'Failed to process show: {e}')
            raise
        finally:
            self.teardown_logging()

def create_default_config(config_path: Path):
    """Create a default configuration file."""
    config = DownloadConfig(
        output_dir='~/Videos',
        output_extension='mp4',
        request_timeout=30,
        skip_existing=True,
        progress_config=ProgressConfig(
            enabled=True,
            bar_width=50,
            require_bitrate=True
        )
    )
    config.to_yaml(config_path)
    return config

def main():
    if len(sys.argv) > 4:
        print("Usage: series-downloader [show_name] [output_directory] [config_file]")
        sys.exit(1)

    config_path = Path(sys.argv[3]) if len(sys.argv) > 3 else Path('downloader_config.yml')

    # Create default config if it doesn't exist
    if not config_path.exists():
        print(f"Creating default configuration file at {config_path}")
        create_default_config(config_path)

    config = DownloadConfig.from_yaml(config_path)
    check_ffmpeg(config.ffmpeg_binary)

    show_name = sys.argv[1] if len(sys.argv) > 1 else input('Enter the TV show name: ')
    show_name = show_name.strip()
    if not show_name:
        print("Error: No TV show name given")
        sys.exit(1)

    output_dir = Path(sys.argv[2]).expanduser() if len(sys.argv) > 2 else config.output_root

    series_downloader = SeriesDownloader(output_dir, config=config)
    try:
        series_downloader.process_show(show_name)
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(130)
    except Exception:
        sys.exit(1)

if __name__ == "__main__":
    main()
