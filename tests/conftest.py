"""Shared test fixtures."""

from pathlib import Path

import pytest

from silencetrim.models import Interval

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def silencedetect_lines() -> list[str]:
    return (FIXTURES_DIR / "silencedetect.txt").read_text().splitlines()


def assert_intervals(got: list[Interval], want: list[tuple]) -> None:
    """Compare intervals against (start, end) pairs; ``end=None`` means open."""
    assert len(got) == len(want), f"{[str(g) for g in got]} != {want}"
    for g, (start, end) in zip(got, want):
        assert g.start == pytest.approx(start)
        if end is None:
            assert g.is_open, f"{g} should be open-ended"
        else:
            assert not g.is_open, f"{g} should be closed"
            assert g.end == pytest.approx(end)
