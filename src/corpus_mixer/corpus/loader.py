"""Loading of validated datasets: manifest parsing, clip resolution and duration probing.

The two manifests follow different policies:

* training pass: the first missing clip or malformed line rejects the whole dataset;
* validation pass: a missing clip or malformed line only drops that line.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..exceptions import DatasetReadError
from ..storage.naming import strip_clip_prefix
from ..storage.paths import DatasetLayout
from ..utils.audio_io import probe_duration
from ..utils.logging import get_logger
from .manifest import MalformedLine, ManifestRecord, iter_manifest
from .models import LineEntry, LoadedDataset, LoadOutcome, Rejected, RejectionReason

LOGGER = get_logger(__name__)

__all__ = ["DurationProbe", "load_dataset"]

DurationProbe = Callable[[Path], float]


class _TrainPassAbort(Exception):
    def __init__(self, reason: RejectionReason, detail: str) -> None:
        super().__init__(detail)
        self.reason = reason
        self.detail = detail


def _build_entry(
    record: ManifestRecord,
    clip_path: Path,
    *,
    layout: DatasetLayout,
    probe: DurationProbe,
) -> LineEntry:
    return LineEntry(
        source_relative_path=record.clip_reference,
        clip_basename=strip_clip_prefix(record.clip_reference, layout.clip_prefix),
        transcript_text=record.transcript_text,
        resolved_absolute_path=clip_path,
        duration_seconds=probe(clip_path),
    )


def _load_train_entries(
    directory: Path,
    manifest_path: Path,
    *,
    layout: DatasetLayout,
    probe: DurationProbe,
) -> tuple[LineEntry, ...]:
    entries: list[LineEntry] = []
    with manifest_path.open("r", encoding="utf-8") as handle:
        for record in iter_manifest(handle):
            if isinstance(record, MalformedLine):
                raise _TrainPassAbort(
                    RejectionReason.MALFORMED_TRAIN_LINE,
                    f"{manifest_path}: {record.describe()}",
                )
            clip_path = directory / record.clip_reference
            if not clip_path.is_file():
                raise _TrainPassAbort(
                    RejectionReason.MISSING_TRAIN_CLIP,
                    f"File {clip_path} does not exist.",
                )
            entries.append(_build_entry(record, clip_path, layout=layout, probe=probe))
    return tuple(entries)


def _load_val_entries(
    directory: Path,
    manifest_path: Path,
    *,
    layout: DatasetLayout,
    probe: DurationProbe,
    long_clip_warning_seconds: float,
) -> tuple[LineEntry, ...]:
    entries: list[LineEntry] = []
    with manifest_path.open("r", encoding="utf-8") as handle:
        for record in iter_manifest(handle):
            if isinstance(record, MalformedLine):
                LOGGER.warning("Skipping %s: %s", manifest_path, record.describe())
                continue
            clip_path = directory / record.clip_reference
            if not clip_path.is_file():
                LOGGER.warning("File '%s' does not exist. Skipping line.", clip_path)
                continue
            entry = _build_entry(record, clip_path, layout=layout, probe=probe)
            if entry.duration_seconds >= long_clip_warning_seconds:
                LOGGER.warning(
                    "%s is %.2fs long (>= %.1fs). Keeping it anyway.",
                    clip_path,
                    entry.duration_seconds,
                    long_clip_warning_seconds,
                )
            entries.append(entry)
    return tuple(entries)


def load_dataset(
    directory: Path,
    *,
    layout: DatasetLayout | None = None,
    probe: DurationProbe = probe_duration,
    long_clip_warning_seconds: float = 10.0,
) -> LoadOutcome:
    """Load both manifests of a structurally valid dataset.

    Returns a :class:`LoadedDataset`, or :class:`Rejected` when the training pass
    aborts. ``probe`` maps a clip path to its duration in seconds. A manifest that
    cannot be opened or is not UTF-8 raises :class:`DatasetReadError`.
    """
    layout = layout or DatasetLayout()
    name = directory.name
    train_path = directory / layout.train_manifest
    val_path = directory / layout.val_manifest
    try:
        train_entries = _load_train_entries(directory, train_path, layout=layout, probe=probe)
    except _TrainPassAbort as abort:
        LOGGER.warning("Discarding dataset %s: %s", name, abort.detail)
        return Rejected(name=name, reason=abort.reason, details=(abort.detail,))
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetReadError(train_path, str(exc)) from exc

    try:
        val_entries = _load_val_entries(
            directory,
            val_path,
            layout=layout,
            probe=probe,
            long_clip_warning_seconds=long_clip_warning_seconds,
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetReadError(val_path, str(exc)) from exc

    LOGGER.debug(
        "Loaded dataset %s: %d train / %d val entries",
        name,
        len(train_entries),
        len(val_entries),
    )
    return LoadedDataset(
        name=name,
        directory=directory,
        train_entries=train_entries,
        val_entries=val_entries,
    )
