"""FFmpeg subprocess helpers."""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from silencetrim.models import Interval

logger = logging.getLogger(__name__)

# Container used when the input has no extension; Matroska accepts any codec
DEFAULT_EXT = ".mkv"


class FFmpegNotFoundError(RuntimeError):
    pass


def check_ffmpeg() -> None:
    """Raise FFmpegNotFoundError if ffmpeg is not on PATH."""
    if shutil.which("ffmpeg") is None:
        raise FFmpegNotFoundError("ffmpeg not found on PATH")


def _run(cmd: list[str]) -> subprocess.CompletedProcess:
    logger.debug("Running: %s", shlex.join(cmd))
    return subprocess.run(cmd, capture_output=True, text=True, check=True)


def detect_silence(
    input_path: Path, noise_db: float, min_duration: float
) -> list[str]:
    """Run FFmpeg silencedetect over the audio and return its stderr lines.

    The returned report carries both the ``silence_start``/``silence_end``
    events and the ``Duration:`` banner of the input.
    """
    cmd = [
        "ffmpeg",
        "-nostdin",
        "-i", str(input_path),
        "-af", f"silencedetect=noise={noise_db:g}dB:d={min_duration:g}",
        "-f", "null", "-",
    ]
    result = _run(cmd)
    return result.stderr.splitlines()


def extract_segments(
    input_path: Path, keep: list[Interval], work_dir: Path
) -> list[Path]:
    """input's extension (Matroska when it has none), and returned in timeline order.

    Chunks are written to *work_dir* as ``0.mp4``, ``1.mp4``, ... using the
    input's extension, and returned in timeline order.
    """
    if not keep:
        raise ValueError("extract_segments called with empty segment list")

    ext = input_path.suffix or DEFAULT_EXT
    cmd = [
        "ffmpeg",
        "-nostdin",
        "-loglevel", "error",
        "-y",
        "-i", str(input_path),
    ]
    chunks: list[Path] = []
    for i, seg in enumerate(keep):
        chunk = work_dir / f"{i}{ext}"
        chunks.append(chunk)
        if seg.start != 0:
            cmd += ["-ss", f"{seg.start:f}"]
        if seg.end is not None:
            cmd += ["-t", f"{seg.end - seg.start:f}"]
        cmd.append(str(chunk))

    _run(cmd)
    return chunks


def _concat_entry(path: Path) -> str:
    # concat demuxer quoting: close the quote, escape, reopen
    escaped = str(path.resolve()).replace("'", "'\\''")
    return f"file '{escaped}'\n"


def concat_chunks(chunks: list[Path], output_path: Path, work_dir: Path) -> None:
    """Join chunk files, in order, into *output_path* without re-encoding."""
    if not chunks:
        raise ValueError("concat_chunks called with empty chunk list")

    file_list = work_dir / "list.txt"
    file_list.write_text("".join(_concat_entry(c) for c in chunks), encoding="utf-8")

    cmd = [
        "ffmpeg",
        "-nostdin",
        "-f", "concat",
        "-safe", "0",
        "-i", str(file_list),
        "-y",
        "-c", "copy",
        str(output_path),
    ]
    _run(cmd)
