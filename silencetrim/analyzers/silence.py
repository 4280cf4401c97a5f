"""Silence detection analyzer."""

import logging
from pathlib import Path

from silencetrim import ffutil
from silencetrim.manifest import TrimConfig
from silencetrim.models import SilenceAnalysis
from silencetrim.report import parse_report
from silencetrim.timeline import compute_keep_timeline

logger = logging.getLogger(__name__)


def analyze_silence(input_path: Path, config: TrimConfig) -> SilenceAnalysis:
    """Detect silence and work out which segments of the input to keep.

    The detector's report supplies both the silent intervals and the input's
    duration, so no separate probe is needed.
    """
    report = ffutil.detect_silence(
        input_path,
        noise_db=config.noise_db,
        min_duration=config.detect_duration,
    )
    silences, duration = parse_report(report)
    logger.info("silent segments: %s", " ".join(str(s) for s in silences) or "none")

    keep = compute_keep_timeline(silences, duration, config.policy())
    logger.info("keeping segments: %s", " ".join(str(k) for k in keep) or "none")

    return SilenceAnalysis(duration=duration, silences=silences, keep=keep)
