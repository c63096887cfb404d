"""Hypothesis strategies for ffmpeg progress output."""

from hypothesis import strategies as st

from models.progress import Timestamp


@st.composite
def generate_timestamp(draw, max_hours=3):
    """Generate a random Timestamp."""
    return Timestamp(
        hours=draw(st.integers(min_value=0, max_value=max_hours)),
        minutes=draw(st.integers(min_value=0, max_value=59)),
        seconds=draw(st.integers(min_value=0, max_value=59)),
        centiseconds=draw(st.integers(min_value=0, max_value=99)),
    )


@st.composite
def generate_duration(draw):
    """Generate a non-zero total duration."""
    duration = draw(generate_timestamp())
    if duration.total_milliseconds() == 0:
        duration = Timestamp(0, 0, 1, 0)
    return duration


def duration_line(ts):
    return f"  Duration: {ts}, start: 0.000000, bitrate: 0 kb/s"


def bitrate_line(bits):
    return f"      variant_bitrate : {bits}"


def progress_line(ts, size_kib):
    return f"frame=  100 fps=25 q=-1.0 size={size_kib:>8}KiB time={ts} bitrate= 100.0kbits/s speed=1.0x"


@st.composite
def generate_sample_lines(draw, min_size=1, max_size=30):
    """Generate stats lines with non-decreasing time and size."""
    count = draw(st.integers(min_value=min_size, max_value=max_size))
    times = sorted(draw(st.lists(st.integers(min_value=0, max_value=4 * 3600 * 1000),
                                 min_size=count, max_size=count)))
    sizes = sorted(draw(st.lists(st.integers(min_value=0, max_value=10 ** 7),
                                 min_size=count, max_size=count)))
    lines = []
    for ms, size in zip(times, sizes):
        cs = ms // 10
        ts = Timestamp(cs // 360000, (cs // 6000) % 60, (cs // 100) % 60, cs % 100)
        lines.append(progress_line(ts, size))
    return lines
