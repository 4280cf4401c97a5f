"""Parse ffmpeg's silencedetect diagnostics into silence intervals and a duration.

ffmpeg writes lines such as::

    Duration: 00:01:02.50, start: 0.000000, bitrate: 1205 kb/s
    [silencedetect @ 0x55d0c8] silence_start: 1.5
    [silencedetect @ 0x55d0c8] silence_end: 3.2 | silence_duration: 1.7

The silence tags are the fourth whitespace-delimited field of their line with
the timestamp in the fifth; the duration is the second field of a line whose
first field is ``Duration:``. Everything else is ignored.
"""

import logging
from typing import Iterable

from silencetrim.models import Interval

logger = logging.getLogger(__name__)

SILENCE_START = "silence_start:"
SILENCE_END = "silence_end:"
DURATION = "Duration:"


class ReportError(ValueError):
    """The detector's output cannot be trusted."""


class MalformedReportError(ReportError):
    pass


class MissingDurationError(ReportError):
    pass


def _lines(report: Iterable[str] | str) -> Iterable[str]:
    if isinstance(report, str):
        return report.splitlines()
    return report


def parse_timestamp(value: str) -> float:
    """Convert ``H:M:S(.f)`` to seconds. Raises ValueError on anything else."""
    parts = value.rstrip(",").split(":")
    if len(parts) != 3:
        raise ValueError(f"Not an H:M:S timestamp: {value!r}")
    hours, minutes, seconds = (float(p) for p in parts)
    return 3600 * hours + 60 * minutes + seconds


def parse_duration(report: Iterable[str] | str) -> float:
    """Return the media duration announced in the report, in seconds."""
    for line in _lines(report):
        words = line.split()
        if len(words) < 2 or words[0] != DURATION:
            continue
        try:
            return parse_timestamp(words[1])
        except ValueError:
            # "Duration: N/A" for streams without a known length
            continue
    raise MissingDurationError("ffmpeg output: no Duration line found")


def parse_silence(
    report: Iterable[str] | str, duration: float | None = None
) -> list[Interval]:
    """Collect silence intervals in the order ffmpeg reported them.

    A ``silence_end`` with no pending ``silence_start`` raises
    MalformedReportError. A ``silence_start`` still pending at the end of the
    report means the silence runs to EOF: it is closed at *duration* when one
    is given and dropped otherwise.
    """
    silence: list[Interval] = []
    pending: float | None = None

    for line in _lines(report):
        words = line.split()
        if len(words) < 5:
            continue
        tag, val = words[3], words[4]
        if tag not in (SILENCE_START, SILENCE_END):
            continue
        try:
            loc = float(val)
        except ValueError:
            continue

        if tag == SILENCE_START:
            if pending is not None:
                logger.warning(
                    "Discarding silence_start at %g with no silence_end", pending
                )
            pending = loc
        else:
            if pending is None:
                raise MalformedReportError(
                    f"ffmpeg output: silence_end at {loc:g} before silence_start"
                )
            silence.append(Interval(pending, max(loc, pending)))
            pending = None

    if pending is not None and duration is not None:
        silence.append(Interval(pending, max(duration, pending)))

    return silence


def parse_report(report: Iterable[str] | str) -> tuple[list[Interval], float]:
    """Parse a complete silencedetect report into ``(silences, duration)``."""
    lines = list(_lines(report))
    duration = parse_duration(lines)
    return parse_silence(lines, duration=duration), duration
