"""Writing accepted datasets into the merged manifests and the shared clip pool."""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from ..exceptions import ClipCopyError, OutputWriteError
from ..storage.naming import format_manifest_line, pooled_clip_name
from ..utils.logging import get_logger
from .models import Dataset, LineEntry

LOGGER = get_logger(__name__)

__all__ = ["MixedCorpusWriter", "MixingContext"]


@dataclass(slots=True)
class MixingContext:
    """Output state shared by the write phase of a single run.

    Both streams are append-only and written from one thread.
    """

    train_stream: TextIO
    val_stream: TextIO
    clip_pool_dir: Path
    clip_dir: str = "wavs"
    written_ids: list[int] = field(default_factory=list)


class MixedCorpusWriter:
    """Appends manifest lines and copies renamed clips for accepted datasets."""

    def __init__(self, context: MixingContext) -> None:
        self._context = context

    @property
    def context(self) -> MixingContext:
        return self._context

    def write(self, dataset: Dataset) -> None:
        """Write one dataset; datasets must arrive in ascending ``sequence_id`` order."""
        written = self._context.written_ids
        if written and dataset.sequence_id <= written[-1]:
            raise ValueError(
                f"Dataset {dataset.name} (id {dataset.sequence_id}) written out of order "
                f"after id {written[-1]}."
            )

        self._write_lines(self._context.train_stream, dataset, dataset.train_entries)
        self._write_lines(self._context.val_stream, dataset, dataset.val_entries)
        for entry in dataset.copy_order():
            self._copy_clip(dataset, entry)

        written.append(dataset.sequence_id)
        LOGGER.info(
            "Wrote dataset %s: %d train / %d val lines",
            dataset.name,
            len(dataset.train_entries),
            len(dataset.val_entries),
        )

    def write_all(self, datasets: Iterable[Dataset]) -> None:
        for dataset in sorted(datasets, key=lambda item: item.sequence_id):
            self.write(dataset)

    def _write_lines(
        self,
        stream: TextIO,
        dataset: Dataset,
        entries: Iterable[LineEntry],
    ) -> None:
        for entry in entries:
            line = format_manifest_line(
                dataset.sequence_id,
                entry.clip_basename,
                entry.transcript_text,
                clip_dir=self._context.clip_dir,
            )
            try:
                stream.write(line)
            except OSError as exc:
                raise OutputWriteError(
                    f"Failed to write manifest line for {entry.resolved_absolute_path}: {exc}"
                ) from exc

    def _copy_clip(self, dataset: Dataset, entry: LineEntry) -> Path:
        destination = self._context.clip_pool_dir / pooled_clip_name(
            dataset.sequence_id, entry.clip_basename
        )
        try:
            shutil.copyfile(entry.resolved_absolute_path, destination)
        except OSError as exc:
            raise ClipCopyError(entry.resolved_absolute_path, destination, str(exc)) from exc
        return destination
