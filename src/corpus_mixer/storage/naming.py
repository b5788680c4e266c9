"""Helpers for naming clips in the shared pool and the merged manifest lines."""

from __future__ import annotations

__all__ = [
    "MANIFEST_DELIMITER",
    "format_manifest_line",
    "pooled_clip_name",
    "strip_clip_prefix",
]

MANIFEST_DELIMITER = "|"


def strip_clip_prefix(reference: str, prefix: str = "wavs/") -> str:
    """Return the clip reference without its clip-directory prefix.

    >>> strip_clip_prefix("wavs/0001.wav")
    '0001.wav'
    >>> strip_clip_prefix("0001.wav")
    '0001.wav'
    """
    return reference.removeprefix(prefix)


def pooled_clip_name(sequence_id: int, clip_basename: str) -> str:
    """Return the collision-free name of a clip inside the shared pool."""
    if sequence_id < 0:
        raise ValueError("sequence_id must be a non-negative integer.")
    return f"{sequence_id}_{clip_basename}"


def format_manifest_line(
    sequence_id: int,
    clip_basename: str,
    transcript_text: str,
    *,
    clip_dir: str = "wavs",
) -> str:
    """Return a merged manifest line; the trailing field is the speaker index."""
    clip_reference = f"{clip_dir}/{pooled_clip_name(sequence_id, clip_basename)}"
    fields = (clip_reference, transcript_text, str(sequence_id))
    return MANIFEST_DELIMITER.join(fields) + "\n"
