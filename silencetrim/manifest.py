"""Trim settings and the JSON manifest shared by the CLI, web UI and engine."""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path

from silencetrim.models import PolicyParams


@dataclass
class TrimConfig:
    """Configuration for silence detection and the keep-timeline policy."""

    noise_db: float = -30.0
    max_pause: float = 1.0
    min_silence: float | None = None
    intro_padding: float = 0.0
    outro_padding: float = 0.0
    min_keep: float = 0.0
    shrink_padding: bool = True

    def __post_init__(self) -> None:
        if self.max_pause <= 0:
            raise ValueError("max_pause must be greater than 0")
        if self.noise_db >= 0:
            raise ValueError("noise_db must be negative (e.g. -30)")
        for name in ("intro_padding", "outro_padding", "min_keep"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.min_silence is not None and self.min_silence <= 0:
            raise ValueError("min_silence must be greater than 0")

    @classmethod
    def from_dict(cls, options: dict) -> "TrimConfig":
        if not isinstance(options, dict):
            raise ValueError("'trim' must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown trim option(s): {', '.join(unknown)}")
        try:
            return cls(**options)
        except TypeError as e:
            raise ValueError(f"Invalid trim option value: {e}") from e

    @property
    def detect_duration(self) -> float:
        """Shortest silence the detector reports."""
        return self.min_silence if self.min_silence is not None else self.max_pause

    def policy(self) -> PolicyParams:
        return PolicyParams(
            max_pause=self.max_pause,
            intro_padding=self.intro_padding,
            outro_padding=self.outro_padding,
            min_keep=self.min_keep,
            shrink_padding=self.shrink_padding,
        )


@dataclass
class Manifest:
    """Top-level editing manifest."""

    input: Path
    output: Path
    version: str = "1"
    trim: TrimConfig = field(default_factory=TrimConfig)
    keep_temp: bool = False


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate a manifest from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "input" not in data or "output" not in data:
        raise ValueError("Manifest must contain 'input' and 'output' fields")

    trim = TrimConfig.from_dict(data["trim"]) if "trim" in data else TrimConfig()

    return Manifest(
        version=data.get("version", "1"),
        input=Path(data["input"]),
        output=Path(data["output"]),
        trim=trim,
        keep_temp=bool(data.get("keep_temp", False)),
    )
