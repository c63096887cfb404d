import logging
import subprocess
from pathlib import Path
from typing import List, Optional
from models.series_info import EpisodeStream
from config.download_config import DownloadConfig
from utils.progress import ProgressListener, ProgressTracker, TerminalProgressRenderer

class StreamDownloader:
    def __init__(self, config: DownloadConfig, listeners: Optional[List[ProgressListener]] = None):
        self.config = config
        self.listeners = listeners
        self.logger = logging.getLogger(__name__)

    def build_command(self, stream: EpisodeStream, output_file: Path) -> List[str]:
        headers = self.config.get_ffmpeg_headers(stream.referer)
        cmd = [self.config.ffmpeg_binary, '-hide_banner', '-y']
        cmd.extend(['-headers', '\r\n'.join(headers) + '\r\n'])
        cmd.extend(['-i', stream.stream_url])
        cmd.extend(['-c', 'copy'])
        cmd.append(str(output_file))
        return cmd

    def create_tracker(self) -> ProgressTracker:
        progress_config = self.config.progress_config
        if self.listeners is not None:
            listeners = list(self.listeners)
        elif progress_config.enabled:
            listeners = [TerminalProgressRenderer(bar_width=progress_config.bar_width)]
        else:
            listeners = []
        return ProgressTracker(listeners, require_bitrate=progress_config.require_bitrate)

    def download(self, stream: EpisodeStream, output_file: Path) -> Path:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            cmd = self.build_command(stream, output_file)

            self.logger.info(f'Downloading from {stream.stream_url}')
            self.logger.debug(f"FFmpeg command: {' '.join(cmd)}")

            tracker = self.create_tracker()
            process = subprocess.Popen(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, universal_newlines=True, bufsize=1)

            error_lines = []
            try:
                while True:
                    line = process.stderr.readline()
                    if not line and process.poll() is not None:
                        break
                    if not line.strip():
                        continue
                    if 'Error' in line or 'error' in line:
                        self.logger.error(f'FFmpeg error: {line.strip()}')
                        error_lines.append(line.strip())
                    tracker.consume_line(line)
            finally:
                if process.poll() is None:
                    self.logger.warning(f'Stopping ffmpeg for {output_file.name}')
                    process.kill()
                    process.wait()
                process.stderr.close()

            print()

            if process.returncode != 0:
                if error_lines:
                    self.logger.error('FFmpeg error output:\n' + '\n'.join(error_lines))
                raise subprocess.CalledProcessError(process.returncode, cmd)

            if output_file.exists():
                self.logger.info(f'Successfully downloaded {output_file.name}')
                return output_file
            else:
                raise FileNotFoundError(f'Expected output file {output_file} was not created')

        except Exception as e:
            self.logger.error(f'Error downloading {output_file.name}: {e}')
            raise
