"""Tests for the clip duration probe."""

from __future__ import annotations

from pathlib import Path

import pytest

from corpus_mixer.utils.audio_io import ClipHeader, probe_duration, read_header


def test_probe_duration_uses_file_size_over_byte_rate(tmp_path: Path, write_wav) -> None:
    clip = write_wav(tmp_path / "clip.wav", 2.0, sample_rate=8000)

    duration = probe_duration(clip)

    assert duration == pytest.approx(clip.stat().st_size / 16000)
    assert duration == pytest.approx(2.0, abs=0.01)


def test_read_header_reports_container_fields(tmp_path: Path, write_wav) -> None:
    clip = write_wav(tmp_path / "clip.wav", 0.5, sample_rate=8000)

    header = read_header(clip)

    assert header.sample_rate == 8000
    assert header.channels == 1
    assert header.subtype == "PCM_16"
    assert header.bytes_per_second == 16000


def test_probe_duration_missing_file_is_zero(tmp_path: Path) -> None:
    assert probe_duration(tmp_path / "absent.wav") == 0.0


def test_probe_duration_malformed_header_is_zero(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.wav"
    bogus.write_bytes(b"definitely not a RIFF header")

    assert probe_duration(bogus) == 0.0


def test_header_without_fixed_width_falls_back_to_frames() -> None:
    header = ClipHeader(
        sample_rate=16000, channels=1, frames=32000, subtype="VORBIS", total_bytes=1234
    )
    assert header.duration_seconds == pytest.approx(2.0)
