import logging
import re
from typing import List, Optional, Union

from models.progress import BitrateFact, DurationFact, ProgressFact, Timestamp

logger = logging.getLogger(__name__)

Fact = Union[DurationFact, BitrateFact, ProgressFact]

DURATION_MARKER = 'Duration:'
BITRATE_MARKER = 'variant_bitrate :'

TIMESTAMP_RE = re.compile(r'(\d{2}):(\d{2}):(\d{2})\.(\d{2})')
DURATION_RE = re.compile(r'Duration:\s*([^,\s]*)')
BITRATE_RE = re.compile(r'variant_bitrate :\s*(\d+)')
TIME_RE = re.compile(r'time=\s*(\S+)')
SIZE_RE = re.compile(r'size=\s*(\d+)KiB')

class MalformedTimestamp(ValueError):
    """A time marker was found but the text after it is not HH:MM:SS.cc."""

class MalformedDuration(MalformedTimestamp):
    pass

def parse_timestamp(text: str) -> Timestamp:
    match = TIMESTAMP_RE.fullmatch(text.strip())
    if not match:
        raise MalformedTimestamp(f'Invalid time format: {text!r}')
    hours, minutes, seconds, centiseconds = (int(group) for group in match.groups())
    if minutes > 59 or seconds > 59:
        raise MalformedTimestamp(f'Time field out of range: {text!r}')
    return Timestamp(hours, minutes, seconds, centiseconds)

def match_duration(line: str) -> Optional[DurationFact]:
    if DURATION_MARKER not in line:
        return None
    match = DURATION_RE.search(line)
    try:
        return DurationFact(parse_timestamp(match.group(1)))
    except MalformedTimestamp as e:
        raise MalformedDuration(f'Invalid duration format: {match.group(1)!r}') from e

def match_bitrate(line: str) -> Optional[BitrateFact]:
    if BITRATE_MARKER not in line:
        return None
    match = BITRATE_RE.search(line)
    if not match:
        return None
    return BitrateFact(int(match.group(1)))

def match_progress(line: str) -> Optional[ProgressFact]:
    time_match = TIME_RE.search(line)
    size_match = SIZE_RE.search(line)
    if not time_match or not size_match:
        return None
    return ProgressFact(parse_timestamp(time_match.group(1)), int(size_match.group(1)))

MATCHERS = (match_duration, match_bitrate, match_progress)

def classify_line(line: str) -> Optional[Fact]:
    """Return the fact carried by ``line``, or None.

    Each matcher runs independently so a line satisfying more than one shape is
    noticed; the earliest matcher in ``MATCHERS`` wins. Raises
    ``MalformedTimestamp`` (or ``MalformedDuration``) when a marker is present
    but its time value cannot be parsed.
    """
    if not line or not line.strip():
        return None

    facts: List[Fact] = []
    error = None
    for matcher in MATCHERS:
        try:
            fact = matcher(line)
        except MalformedTimestamp as e:
            if error is None:
                error = e
            continue
        if fact is not None:
            facts.append(fact)

    if len(facts) > 1:
        logger.debug(f'Line matched {len(facts)} fact types, using {type(facts[0]).__name__}: {line.strip()}')
    if facts:
        return facts[0]
    if error is not None:
        raise error
    return None
