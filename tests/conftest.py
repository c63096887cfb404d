"""Shared fixtures: recorded ffmpeg output and event collectors."""

import pytest

from config.download_config import DownloadConfig
from utils.progress import ProgressTracker

FFMPEG_HLS_STDERR = """\
[hls @ 0x55d0c8a3f2c0] Skip ('#EXT-X-VERSION:3')
[hls @ 0x55d0c8a3f2c0] Opening 'https://cdn.example.org/seg-1-v1-a1.ts' for reading
Input #0, hls, from 'https://cdn.example.org/index.m3u8':
  Duration: 00:01:00.00, start: 1.400000, bitrate: 0 kb/s
  Program 0
    Metadata:
      variant_bitrate : 8000000
  Stream #0:0: Video: h264 (High) ([27][0][0][0] / 0x001B), yuv420p, 1920x1080, 23.98 fps
    Metadata:
      variant_bitrate : 8000000
Output #0, mp4, to 'Show - S01E01.mp4':
Stream mapping:
  Stream #0:0 -> #0:0 (copy)
Press [q] to stop, [?] for help
size=       0KiB time=N/A bitrate=N/A speed=N/A
size=     500KiB time=00:00:30.00 bitrate= 136.5kbits/s speed=60.0x
size=     600KiB time=00:00:31.00 bitrate= 158.6kbits/s speed=31.0x
size=   58594KiB time=00:01:00.00 bitrate=8000.0kbits/s speed=45.2x
[out#0/mp4 @ 0x55d0c8b1e940] video:57000KiB audio:1500KiB subtitle:0KiB other streams:0KiB
size=   58594KiB time=00:01:00.00 bitrate=8000.0kbits/s speed=45.2x
"""


@pytest.fixture
def ffmpeg_lines():
    return FFMPEG_HLS_STDERR.splitlines()


@pytest.fixture
def events():
    return []


@pytest.fixture
def tracker(events):
    return ProgressTracker([events.append])


@pytest.fixture
def config():
    return DownloadConfig(stream_api_url='https://streams.example.org/api/{imdb_id}/{season}/{episode}')
