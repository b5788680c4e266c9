"""Data structures shared by the corpus loading, aggregation and writing stages."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = [
    "AggregateOutcome",
    "Dataset",
    "LineEntry",
    "LoadOutcome",
    "LoadedDataset",
    "Rejected",
    "RejectionReason",
]


@dataclass(frozen=True, slots=True)
class LineEntry:
    """One usable manifest row of a source dataset."""

    source_relative_path: str
    clip_basename: str
    transcript_text: str
    resolved_absolute_path: Path
    duration_seconds: float = 0.0


@dataclass(frozen=True, slots=True)
class LoadedDataset:
    """A structurally valid dataset whose manifests were read and probed."""

    name: str
    directory: Path
    train_entries: tuple[LineEntry, ...]
    val_entries: tuple[LineEntry, ...]

    def iter_entries(self) -> Iterator[LineEntry]:
        yield from self.train_entries
        yield from self.val_entries


@dataclass(frozen=True, slots=True)
class Dataset:
    """An accepted source corpus with its speaker identity."""

    sequence_id: int
    name: str
    total_duration_minutes: float
    train_entries: tuple[LineEntry, ...]
    val_entries: tuple[LineEntry, ...]
    vocoder_tag: str = "Vatras"
    directory: Path | None = None

    def copy_order(self) -> Iterator[LineEntry]:
        """Entries in the order their clips are copied: validation first."""
        yield from self.val_entries
        yield from self.train_entries


class RejectionReason(str, Enum):
    """Why a dataset was excluded from the merged corpus."""

    STRUCTURAL_INVALID = "structural_invalid"
    MISSING_TRAIN_CLIP = "missing_train_clip"
    MALFORMED_TRAIN_LINE = "malformed_train_line"
    EMPTY = "empty"
    BELOW_THRESHOLD = "below_threshold"


@dataclass(frozen=True, slots=True)
class Rejected:
    """A dataset excluded from every output, with the diagnostics that explain why."""

    name: str
    reason: RejectionReason
    details: tuple[str, ...] = field(default_factory=tuple)


# Stage outcomes: the stage's value on success, ``Rejected`` otherwise.
LoadOutcome = LoadedDataset | Rejected
AggregateOutcome = Dataset | Rejected
