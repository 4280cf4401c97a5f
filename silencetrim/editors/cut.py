"""Cut editor: extracts keep segments and joins them."""

from pathlib import Path

from silencetrim import ffutil
from silencetrim.models import Interval


def apply_cuts(
    input_path: Path,
    keep: list[Interval],
    output_path: Path,
    work_dir: Path,
) -> Path:
    """Cut each keep segment into *work_dir* and concatenate them in order."""
    if not keep:
        raise ValueError("No keep segments to cut")

    chunks = ffutil.extract_segments(input_path, keep, work_dir)
    ffutil.concat_chunks(chunks, output_path, work_dir)
    return output_path
