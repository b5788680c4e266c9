"""Audio container probing used to derive clip durations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import soundfile as sf

from .logging import get_logger

LOGGER = get_logger(__name__)

__all__ = ["ClipHeader", "probe_duration", "read_header"]

# Bytes per sample for fixed-width container subtypes.
_SAMPLE_WIDTHS: dict[str, int] = {
    "PCM_S8": 1,
    "PCM_U8": 1,
    "ULAW": 1,
    "ALAW": 1,
    "PCM_16": 2,
    "PCM_24": 3,
    "PCM_32": 4,
    "FLOAT": 4,
    "DOUBLE": 8,
}


@dataclass(frozen=True, slots=True)
class ClipHeader:
    """Header fields needed to turn a file size into a playback duration."""

    sample_rate: int
    channels: int
    frames: int
    subtype: str
    total_bytes: int

    @property
    def bytes_per_second(self) -> int:
        width = _SAMPLE_WIDTHS.get(self.subtype, 0)
        return self.sample_rate * self.channels * width

    @property
    def duration_seconds(self) -> float:
        """Total byte size over byte rate; frame count when the width is not fixed."""
        if self.bytes_per_second > 0:
            return self.total_bytes / float(self.bytes_per_second)
        if self.sample_rate <= 0:
            return 0.0
        return self.frames / float(self.sample_rate)


def read_header(path: str | Path) -> ClipHeader:
    """Read the container header of ``path``.

    Raises ``OSError`` when the file cannot be opened and ``RuntimeError`` when the
    container cannot be decoded.
    """
    file_path = Path(path)
    total_bytes = file_path.stat().st_size
    info = sf.info(str(file_path))
    return ClipHeader(
        sample_rate=int(info.samplerate),
        channels=int(info.channels),
        frames=int(info.frames),
        subtype=str(info.subtype),
        total_bytes=int(total_bytes),
    )


def probe_duration(path: str | Path) -> float:
    """Return the playback duration of ``path`` in seconds.

    Unreadable files and undecodable headers yield ``0.0``; callers treat a zero
    duration as unusable.
    """
    try:
        header = read_header(path)
    except OSError as exc:
        LOGGER.debug("Unable to open %s: %s", path, exc)
        return 0.0
    except RuntimeError as exc:
        LOGGER.debug("Unable to decode audio header of %s: %s", path, exc)
        return 0.0
    return header.duration_seconds
