"""Timeline policy: turn detected silence into the segments worth keeping.

Silence intervals are assumed sorted and non-overlapping, which is what
ffmpeg's silencedetect produces. Nothing here performs I/O or mutates its
arguments.
"""

from dataclasses import replace

from silencetrim.models import Interval, PolicyParams


def compute_removal(
    silence: list[Interval],
    max_pause: float,
    intro_padding: float,
    outro_padding: float,
    duration: float,
) -> list[Interval]:
    """Decide which stretches of silence to cut out.

    - The first silence, if it starts the file, is shaved down to
      ``intro_padding`` seconds before the first sound.
    - Any later silence longer than ``max_pause`` loses its middle, leaving
      ``max_pause / 2`` seconds on each side of the cut.
    - The last silence, if it runs to the end of the media, is cut from
      ``outro_padding`` seconds after its start onwards.
    """
    removal: list[Interval] = []
    if not silence:
        return removal

    pad = max_pause / 2.0
    last = len(silence) - 1

    for i, s in enumerate(silence):
        length = s.end - s.start
        if i == 0:
            # ffmpeg may report a slightly negative start for leading silence
            cut_end = s.end - intro_padding
            if intro_padding > 0 and s.start <= 0 and length > intro_padding and cut_end > 0:
                removal.append(Interval(0.0, cut_end))
        elif s.end < duration:
            if length > max_pause:
                removal.append(Interval(s.start + pad, s.end - pad))

        if i == last and s.end >= duration:
            if outro_padding > 0 and length > outro_padding:
                removal.append(Interval(s.start + outro_padding))

    return removal


def invert(removal: list[Interval]) -> list[Interval]:
    """Return the complement of *removal* over ``[0, end of media)``.

    Removals may touch or overlap; only keep segments of positive length are
    emitted. No trailing segment follows an open-ended removal.
    """
    keep: list[Interval] = []
    cursor = 0.0

    for r in removal:
        if r.start > cursor:
            keep.append(Interval(cursor, r.start))
        if r.end is None:
            return keep
        cursor = max(cursor, r.end)

    keep.append(Interval(cursor))
    return keep


def filter_min_keep(
    keep: list[Interval], min_keep: float, duration: float
) -> list[Interval]:
    """Drop keep segments shorter than *min_keep* seconds."""
    if min_keep <= 0:
        return list(keep)
    return [k for k in keep if k.length(duration) >= min_keep]


def shrink_short_clips(keep: list[Interval], max_pause: float) -> list[Interval]:
    """Trim the padding around short interior clips.

    An interior clip sits between two cuts and so carries ``max_pause / 2`` of
    silence on each side. When the sound inside it is shorter than that
    padding, both paddings are reduced to the length of the sound. The first
    and last segments are left alone.
    """
    pad = max_pause / 2.0
    result = list(keep)

    for i in range(1, len(result) - 1):
        seg = result[i]
        length = seg.end - seg.start
        if length >= 2 * pad + 1:
            continue
        new_pad = length - 2 * pad
        if 0 < new_pad < pad:
            shift = pad - new_pad
            result[i] = replace(seg, start=seg.start + shift, end=seg.end - shift)

    return result


def compute_keep_timeline(
    silence: list[Interval], duration: float, params: PolicyParams
) -> list[Interval]:
    """Full policy: removal, inversion, minimum-keep filter, then clip shrinking."""
    removal = compute_removal(
        silence,
        params.max_pause,
        params.intro_padding,
        params.outro_padding,
        duration,
    )
    keep = invert(removal)
    keep = filter_min_keep(keep, params.min_keep, duration)
    if params.shrink_padding:
        keep = shrink_short_clips(keep, params.max_pause)
    return keep


def total_length(intervals: list[Interval], duration: float) -> float:
    """Sum of interval lengths, open ends bounded at *duration*."""
    return sum(max(i.length(duration), 0.0) for i in intervals)
