"""Pipeline orchestrator for a single Manifest."""

import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from silencetrim import ffutil
from silencetrim.analyzers.silence import analyze_silence
from silencetrim.editors.cut import apply_cuts
from silencetrim.manifest import Manifest
from silencetrim.models import Interval
from silencetrim.timeline import total_length

logger = logging.getLogger(__name__)


class NothingToKeepError(ValueError):
    """The policy removed every part of the input."""


@dataclass
class EngineResult:
    output_path: Path
    silences_detected: int = 0
    segments_kept: int = 0
    duration_original: float = 0.0
    duration_final: float = 0.0
    keep_segments: list[Interval] = field(default_factory=list)
    work_dir: Path | None = None


def _is_whole_file(keep: list[Interval]) -> bool:
    return len(keep) == 1 and keep[0].start <= 0 and keep[0].is_open


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
) -> EngineResult:
    """Execute the full trimming pipeline.

    Args:
        manifest: Validated editing manifest.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    ffutil.check_ffmpeg()

    work_dir = Path(tempfile.mkdtemp(prefix="silencetrim_"))
    try:
        _progress("Scanning audio for silence", 0.0)
        analysis = analyze_silence(manifest.input, manifest.trim)
        keep = analysis.keep
        _progress("Computing keep timeline", 0.4)

        if not keep:
            raise NothingToKeepError(
                f"Every segment of {manifest.input} would be removed"
            )

        if _is_whole_file(keep):
            _progress("Nothing to trim, copying input", 0.5)
            shutil.copy2(manifest.input, manifest.output)
        else:
            _progress(f"Cutting {len(keep)} segments", 0.5)
            apply_cuts(manifest.input, keep, manifest.output, work_dir)

        duration_final = total_length(keep, analysis.duration)
        logger.info(
            "%s: %.1fs -> %.1fs", manifest.output, analysis.duration, duration_final
        )
        _progress("Done", 1.0)
    finally:
        if manifest.keep_temp:
            logger.info("Keeping temp directory %s", work_dir)
        else:
            shutil.rmtree(work_dir, ignore_errors=True)

    return EngineResult(
        output_path=manifest.output,
        silences_detected=len(analysis.silences),
        segments_kept=len(keep),
        duration_original=analysis.duration,
        duration_final=duration_final,
        keep_segments=keep,
        work_dir=work_dir if manifest.keep_temp else None,
    )
