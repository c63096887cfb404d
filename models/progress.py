from dataclasses import dataclass
from enum import Enum
from typing import Optional

@dataclass(frozen=True)
class Timestamp:
    hours: int
    minutes: int
    seconds: int
    centiseconds: int

    def total_milliseconds(self) -> int:
        return (self.hours * 3600 + self.minutes * 60 + self.seconds) * 1000 + self.centiseconds * 10

    def total_seconds(self) -> float:
        return self.total_milliseconds() / 1000

    def __str__(self) -> str:
        return f'{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}.{self.centiseconds:02d}'

@dataclass(frozen=True)
class DurationFact:
    duration: Timestamp

@dataclass(frozen=True)
class BitrateFact:
    bits_per_second: int

@dataclass(frozen=True)
class ProgressFact:
    position: Timestamp
    size_kib: int

@dataclass(frozen=True)
class ProgressSample:
    position: Timestamp
    size_kib: int

class TrackerPhase(Enum):
    AWAITING_DURATION = 'awaiting_duration'
    AWAITING_SAMPLES = 'awaiting_samples'
    STREAMING = 'streaming'
    COMPLETE = 'complete'

@dataclass
class TrackerState:
    total_duration: Optional[Timestamp] = None
    variant_bitrate: Optional[int] = None  # bits per second
    last_sample: Optional[ProgressSample] = None
    last_remaining: str = '00:00:00'
    phase: TrackerPhase = TrackerPhase.AWAITING_DURATION

class ProgressEventKind(Enum):
    DURATION = 'duration'
    PROGRESS = 'progress'
    COMPLETE = 'complete'

@dataclass(frozen=True)
class ProgressEvent:
    kind: ProgressEventKind
    total_duration: Timestamp
    position: Optional[Timestamp] = None
    percent: float = 0.0
    remaining: str = '00:00:00'
    remaining_seconds: Optional[int] = None
