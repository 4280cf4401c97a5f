"""Shared data types used across silencetrim."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Interval:
    """A time range in seconds.

    ``end`` is ``None`` for an open-ended interval that runs until the end of
    the media. A closed interval always has ``end >= start``.
    """

    start: float
    end: float | None = None

    def __post_init__(self) -> None:
        if self.end is not None and self.end < self.start:
            raise ValueError(f"Interval end {self.end} precedes start {self.start}")

    @property
    def is_open(self) -> bool:
        return self.end is None

    def length(self, duration: float) -> float:
        end = duration if self.end is None else self.end
        return end - self.start

    def __str__(self) -> str:
        if self.end is None:
            return f"{self.start:g}-"
        return f"{self.start:g}-{self.end:g}"


@dataclass(frozen=True)
class PolicyParams:
    """Knobs for turning detected silence into a keep timeline."""

    max_pause: float
    intro_padding: float = 0.0
    outro_padding: float = 0.0
    min_keep: float = 0.0
    shrink_padding: bool = True


@dataclass
class SilenceAnalysis:
    """Result of scanning a media file: what is silent and what survives."""

    duration: float
    silences: list[Interval] = field(default_factory=list)
    keep: list[Interval] = field(default_factory=list)
