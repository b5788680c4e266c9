"""Global pytest fixtures for corpus-mixer."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

TEST_SAMPLE_RATE = 8000

ManifestRow = tuple[str, str]


def _write_wav(path: Path, seconds: float, sample_rate: int = TEST_SAMPLE_RATE) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    frames = int(round(seconds * sample_rate))
    sf.write(str(path), np.zeros(frames, dtype=np.float32), sample_rate, subtype="PCM_16")
    return path


def _write_manifest(path: Path, rows: Sequence[ManifestRow | str]) -> Path:
    lines = []
    for row in rows:
        lines.append(row if isinstance(row, str) else "|".join(row))
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path


@pytest.fixture
def write_wav() -> Callable[..., Path]:
    """Write a silent 16-bit mono WAV of the requested duration."""
    return _write_wav


@pytest.fixture
def make_dataset() -> Callable[..., Path]:
    """Create ``root/<name>`` with both manifests and placeholder clips.

    Clips listed in ``missing`` are referenced by the manifests but not created.
    """

    def _make(
        root: Path,
        name: str,
        *,
        train: Sequence[ManifestRow | str] = (),
        val: Sequence[ManifestRow | str] = (),
        missing: Sequence[str] = (),
        clip_seconds: float = 0.05,
    ) -> Path:
        directory = root / name
        (directory / "wavs").mkdir(parents=True, exist_ok=True)
        _write_manifest(directory / "list_train.txt", train)
        _write_manifest(directory / "list_val.txt", val)
        for row in (*train, *val):
            if isinstance(row, str):
                continue
            reference = row[0]
            if reference in missing:
                continue
            _write_wav(directory / reference, clip_seconds)
        return directory

    return _make


@pytest.fixture
def fake_probe() -> Callable[[dict[str, float]], Callable[[Path], float]]:
    """Build a duration probe that looks durations up by clip file name."""

    def _build(durations: dict[str, float]) -> Callable[[Path], float]:
        def _probe(path: Path) -> float:
            return durations.get(Path(path).name, 0.0)

        return _probe

    return _build
