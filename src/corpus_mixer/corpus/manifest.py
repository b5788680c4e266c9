"""Parsing of pipe-delimited transcript manifests."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..storage.naming import MANIFEST_DELIMITER
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

__all__ = ["MalformedLine", "ManifestRecord", "iter_manifest", "parse_line"]


@dataclass(frozen=True, slots=True)
class ManifestRecord:
    """A manifest line split into its clip reference and transcript."""

    line_number: int
    clip_reference: str
    transcript_text: str


@dataclass(frozen=True, slots=True)
class MalformedLine:
    """A manifest line without the clip/transcript delimiter."""

    line_number: int
    raw: str

    def describe(self) -> str:
        return f"line {self.line_number} has no '{MANIFEST_DELIMITER}' delimiter: {self.raw!r}"


def parse_line(line: str, line_number: int) -> ManifestRecord | MalformedLine:
    """Split one manifest line.

    Field 0 is the clip reference and field 1 the transcript. Fields after a second
    delimiter are dropped.
    """
    fields = line.split(MANIFEST_DELIMITER)
    if len(fields) < 2:
        return MalformedLine(line_number=line_number, raw=line)
    if len(fields) > 2:
        LOGGER.debug(
            "Dropping %d extra field(s) on manifest line %d: %r",
            len(fields) - 2,
            line_number,
            line,
        )
    return ManifestRecord(
        line_number=line_number,
        clip_reference=fields[0],
        transcript_text=fields[1],
    )


def iter_manifest(handle: Iterable[str]) -> Iterator[ManifestRecord | MalformedLine]:
    """Lazily yield parsed records from an open manifest; blank lines are skipped."""
    for line_number, line in enumerate(handle, start=1):
        stripped = line.rstrip("\r\n")
        if not stripped.strip():
            continue
        yield parse_line(stripped, line_number)
