import logging
import math
import sys
from typing import Callable, Iterable, List, Optional, TextIO

from models.progress import (BitrateFact, DurationFact, ProgressEvent, ProgressEventKind,
                             ProgressFact, ProgressSample, TrackerPhase, TrackerState)
from utils.line_classifier import MalformedTimestamp, classify_line

ProgressListener = Callable[[ProgressEvent], None]

BAR_WIDTH = 50
BAR_FILLED = '█'
BAR_EMPTY = '-'

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def format_remaining(total_seconds: int) -> str:
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f'{hours:02d}:{minutes:02d}:{seconds:02d}'

class ProgressTracker:
    """Follow an ffmpeg stderr stream and report download progress.

    Feed lines with ``consume_line``. The tracker remembers the first
    announced duration, the latest variant bitrate and the previous stats
    sample, and publishes a ``ProgressEvent`` to every listener whenever a
    sample is accepted. ETA is derived from the size growth between two
    samples against the final size implied by bitrate and total duration.
    """

    def __init__(self, listeners: Optional[Iterable[ProgressListener]] = None, *,
                 require_bitrate: bool = True):
        self.listeners: List[ProgressListener] = list(listeners or [])
        self.require_bitrate = require_bitrate
        self.state = TrackerState()
        self.logger = logging.getLogger(__name__)

    @property
    def phase(self) -> TrackerPhase:
        return self.state.phase

    @property
    def complete(self) -> bool:
        return self.state.phase is TrackerPhase.COMPLETE

    def add_listener(self, listener: ProgressListener):
        self.listeners.append(listener)

    def consume_line(self, line: str):
        """Apply one line of ffmpeg output. Returns the fact it carried, if any."""
        if self.complete:
            return None

        try:
            fact = classify_line(line)
        except MalformedTimestamp as e:
            self.logger.debug(f'Dropping malformed line: {e}')
            return None

        if isinstance(fact, DurationFact):
            self._handle_duration(fact)
        elif isinstance(fact, BitrateFact):
            self.state.variant_bitrate = fact.bits_per_second
        elif isinstance(fact, ProgressFact):
            self._handle_progress(fact)
        return fact

    def _handle_duration(self, fact: DurationFact):
        if self.state.total_duration is not None:
            return
        if fact.duration.total_milliseconds() == 0:
            self.logger.debug('Ignoring zero-length duration announcement')
            return
        self.state.total_duration = fact.duration
        self.state.phase = TrackerPhase.AWAITING_SAMPLES
        self._emit(ProgressEvent(kind=ProgressEventKind.DURATION, total_duration=fact.duration))

    def _handle_progress(self, fact: ProgressFact):
        if self.state.total_duration is None:
            return
        if self.require_bitrate and not self.state.variant_bitrate:
            return

        percent = self.percent_for(fact)
        remaining_seconds = self.estimate_remaining(fact)
        if remaining_seconds is not None:
            self.state.last_remaining = format_remaining(remaining_seconds)

        self.state.last_sample = ProgressSample(fact.position, fact.size_kib)
        self.state.phase = TrackerPhase.STREAMING
        self._emit(ProgressEvent(
            kind=ProgressEventKind.PROGRESS,
            total_duration=self.state.total_duration,
            position=fact.position,
            percent=percent,
            remaining=self.state.last_remaining,
            remaining_seconds=remaining_seconds
        ))

        if percent >= 100:
            self.state.phase = TrackerPhase.COMPLETE
            self._emit(ProgressEvent(
                kind=ProgressEventKind.COMPLETE,
                total_duration=self.state.total_duration,
                position=fact.position,
                percent=100.0,
                remaining=self.state.last_remaining
            ))

    def percent_for(self, fact: ProgressFact) -> float:
        duration_ms = self.state.total_duration.total_milliseconds()
        return min(100.0, 100.0 * fact.position.total_milliseconds() / duration_ms)

    def estimate_remaining(self, fact: ProgressFact) -> Optional[int]:
        """Seconds left until the download finishes, or None when no estimate is possible.

        Needs a previous sample with strictly positive time and size deltas and a
        known variant bitrate.
        """
        previous = self.state.last_sample
        if previous is None or not self.state.variant_bitrate:
            return None

        time_delta_ms = fact.position.total_milliseconds() - previous.position.total_milliseconds()
        size_delta = fact.size_kib - previous.size_kib
        if time_delta_ms <= 0 or size_delta <= 0:
            return None

        rate = size_delta / (time_delta_ms / 1000)  # KiB/s
        estimated_final_size = self.state.variant_bitrate * self.state.total_duration.total_seconds() / 8 / 1024
        remaining_size = estimated_final_size - fact.size_kib
        return max(0, round_half_up(remaining_size / rate))

    def _emit(self, event: ProgressEvent):
        for listener in self.listeners:
            try:
                listener(event)
            except Exception as e:
                self.logger.warning(f'Progress listener failed on {event.kind.value} event: {e}', exc_info=True)

class TerminalProgressRenderer:
    """Draws progress events as a single line rewritten in place."""

    def __init__(self, stream: Optional[TextIO] = None, bar_width: int = BAR_WIDTH):
        self.stream = stream
        self.bar_width = bar_width
        self.logger = logging.getLogger(__name__)

    def __call__(self, event: ProgressEvent):
        if event.kind is ProgressEventKind.DURATION:
            self._write(f'\nTotal Duration: {event.total_duration}\n')
        elif event.kind is ProgressEventKind.PROGRESS:
            self._write(self.format_line(event.percent, event.remaining))
        elif event.kind is ProgressEventKind.COMPLETE:
            self._write('\nDownload complete!\n\n')

    def format_line(self, percent: float, remaining: str) -> str:
        filled = round_half_up(self.bar_width * percent / 100)
        bar = BAR_FILLED * filled + BAR_EMPTY * (self.bar_width - filled)
        return f'\rProgress: [{bar}] {round_half_up(percent):>3}% (remaining: {remaining})'

    def _write(self, text: str):
        stream = self.stream or sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except (OSError, ValueError) as e:
            self.logger.debug(f'Progress output unavailable: {e}')
