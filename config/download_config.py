from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import yaml
import logging

DEFAULT_USER_AGENT = 'Mozilla/5.0 (X11; Linux x86_64; rv:127.0) Gecko/20100101 Firefox/127.0'

@dataclass
class ProgressConfig:
    enabled: bool = True
    bar_width: int = 50
    require_bitrate: bool = True

@dataclass
class DownloadConfig:
    ffmpeg_path: Optional[str] = None
    output_dir: str = '~/Videos'
    output_extension: str = 'mp4'
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: int = 30
    stream_api_url: Optional[str] = None
    skip_existing: bool = True
    progress_config: ProgressConfig = None

    def __post_init__(self):
        if self.progress_config is None:
            self.progress_config = ProgressConfig()
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_yaml(cls, config_path: Path) -> 'DownloadConfig':
        if not config_path.exists():
            return cls()
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
            progress_data = config_data.pop('progress_settings', None) or {}
            config_data['progress_config'] = ProgressConfig(**progress_data)
            return cls(**config_data)

    def to_yaml(self, config_path: Path):
        config_dict = self.__dict__.copy()
        config_dict['progress_settings'] = config_dict.pop('progress_config').__dict__
        config_dict.pop('logger', None)  # Remove logger before saving
        with open(config_path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False)

    @property
    def output_root(self) -> Path:
        return Path(self.output_dir).expanduser()

    @property
    def ffmpeg_binary(self) -> str:
        return self.ffmpeg_path or 'ffmpeg'

    def get_ffmpeg_headers(self, referer: str) -> List[str]:
        """HTTP request headers sent by ffmpeg when fetching the stream"""
        origin = referer.rstrip('/')
        headers = [
            f'user-agent: {self.user_agent}',
            'accept: */*',
            'accept-language: en-US,en;q=0.5'
        ]
        if origin:
            headers.extend([f'referer: {origin}/', f'origin: {origin}'])
        headers.extend([
            'dnt: 1',
            'sec-fetch-dest: empty',
            'sec-fetch-mode: cors',
            'sec-fetch-site: cross-site',
            'sec-gpc: 1',
            'te: trailers',
            'Accept-Encoding: deflate, gzip, zstd'
        ])
        return headers

    def get_request_headers(self) -> dict:
        return {'User-Agent': self.user_agent}
