"""End-to-end mixing run: discover, validate, load, aggregate, write, emit metadata."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO, TypeVar

from ..config.load import DEFAULT_ENV, load_config
from ..corpus.aggregate import CorpusAggregator
from ..corpus.loader import DurationProbe, load_dataset
from ..corpus.metadata import MetadataDefaults, dump_metadata
from ..corpus.models import Dataset, LoadedDataset, Rejected, RejectionReason
from ..corpus.validation import ValidationResult, validate_dataset
from ..corpus.writer import MixedCorpusWriter, MixingContext
from ..exceptions import (
    DatasetReadError,
    DatasetsDirectoryMissingError,
    NoValidDatasetsError,
    OutputWriteError,
)
from ..storage.paths import PathsConfig, build_paths
from ..utils.audio_io import probe_duration
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

__all__ = [
    "MixResult",
    "PipelineContext",
    "build_default_context",
    "discover_datasets",
    "run_mix",
]

_T = TypeVar("_T")
_R = TypeVar("_R")


@dataclass(slots=True)
class PipelineContext:
    """Runtime context for a mixing run."""

    config: Mapping[str, Any]
    paths: PathsConfig
    environment: str

    def _section(self, key: str) -> Mapping[str, Any]:
        section = self.config.get(key)
        return section if isinstance(section, Mapping) else {}

    @property
    def min_total_seconds(self) -> float:
        return float(self._section("acceptance").get("min_total_seconds", 300.0))

    @property
    def long_clip_warning_seconds(self) -> float:
        return float(self._section("acceptance").get("long_clip_warning_seconds", 10.0))

    @property
    def vocoder_tag(self) -> str:
        return str(self._section("metadata").get("vocoder_tag", "Vatras"))

    @property
    def metadata_defaults(self) -> MetadataDefaults:
        section = self._section("metadata")
        return MetadataDefaults(
            name=str(section.get("name", "")),
            acoustic_model_tag=str(section.get("acoustic_model_tag", "")),
            train_list=str(section.get("train_list", "")),
            indent=int(section.get("indent", 4)),
        )

    @property
    def max_workers(self) -> int:
        return max(1, int(self._section("runtime").get("max_workers", 1)))


@dataclass(slots=True)
class MixResult:
    """Summary of a completed run."""

    datasets: list[Dataset] = field(default_factory=list)
    rejected: list[Rejected] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    train_manifest: Path | None = None
    val_manifest: Path | None = None
    metadata_path: Path | None = None

    @property
    def speaker_count(self) -> int:
        return len(self.datasets)


def build_default_context(
    env: str = DEFAULT_ENV,
    *,
    config_dir: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> PipelineContext:
    """Load configuration and resolve paths for a run."""
    config = load_config(env, config_dir=config_dir, overrides=overrides)
    return PipelineContext(config=config, paths=build_paths(config), environment=env)


def _fan_out(func: Callable[[_T], _R], items: Sequence[_T], max_workers: int) -> list[_R]:
    """Map ``func`` over ``items`` keeping input order; threads when ``max_workers`` > 1."""
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="corpus-load") as pool:
        return list(pool.map(func, items))


def discover_datasets(datasets_dir: Path) -> list[Path]:
    """Return candidate dataset entries in name order."""
    try:
        return sorted(datasets_dir.iterdir(), key=lambda path: path.name)
    except OSError as exc:
        raise DatasetReadError(datasets_dir, str(exc)) from exc


def _report_invalid(result: ValidationResult) -> Rejected:
    LOGGER.warning("Errors in dataset of %s", result.directory.name)
    for problem in result.problems:
        LOGGER.warning("\t%s", problem)
    return Rejected(
        name=result.directory.name,
        reason=RejectionReason.STRUCTURAL_INVALID,
        details=result.problems,
    )


def _open_output(stack: ExitStack, path: Path) -> TextIO:
    try:
        handle = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Error occurred while creating {path}: {exc}") from exc
    return stack.enter_context(handle)


def _partition(outcomes: Iterable[_T | Rejected], rejected: list[Rejected]) -> list[_T]:
    accepted: list[_T] = []
    for outcome in outcomes:
        if isinstance(outcome, Rejected):
            rejected.append(outcome)
        else:
            accepted.append(outcome)
    return accepted


def run_mix(
    context: PipelineContext,
    *,
    probe: DurationProbe = probe_duration,
) -> MixResult:
    """Merge every acceptable dataset under ``datasets_dir`` into the mixed outputs.

    Raises :class:`~corpus_mixer.exceptions.CorpusMixerError` subclasses for the
    conditions that end the run; per-dataset and per-line problems are logged and
    reported in :attr:`MixResult.rejected`.
    """
    paths = context.paths
    layout = paths.layout
    max_workers = context.max_workers
    result = MixResult(
        train_manifest=paths.merged_train_manifest,
        val_manifest=paths.merged_val_manifest,
        metadata_path=paths.metadata_path,
    )

    if not paths.datasets_dir.is_dir():
        raise DatasetsDirectoryMissingError(paths.datasets_dir)
    paths.ensure_output_directories()

    with ExitStack() as stack:
        train_stream = _open_output(stack, paths.merged_train_manifest)
        val_stream = _open_output(stack, paths.merged_val_manifest)
        metadata_stream = _open_output(stack, paths.metadata_path)

        candidates = discover_datasets(paths.datasets_dir)
        validations = _fan_out(
            lambda directory: validate_dataset(directory, layout), candidates, max_workers
        )
        valid_dirs: list[Path] = []
        for validation in validations:
            if validation.ok:
                valid_dirs.append(validation.directory)
            else:
                result.rejected.append(_report_invalid(validation))
        if not valid_dirs:
            raise NoValidDatasetsError(paths.datasets_dir)

        loaded: list[LoadedDataset] = _partition(
            _fan_out(
                lambda directory: load_dataset(
                    directory,
                    layout=layout,
                    probe=probe,
                    long_clip_warning_seconds=context.long_clip_warning_seconds,
                ),
                valid_dirs,
                max_workers,
            ),
            result.rejected,
        )

        aggregator = CorpusAggregator(
            min_total_seconds=context.min_total_seconds,
            vocoder_tag=context.vocoder_tag,
        )
        result.datasets = _partition(
            (aggregator.aggregate(dataset) for dataset in loaded),
            result.rejected,
        )

        writer = MixedCorpusWriter(
            MixingContext(
                train_stream=train_stream,
                val_stream=val_stream,
                clip_pool_dir=paths.mixed_wavs_dir,
                clip_dir=layout.clip_dir,
            )
        )
        writer.write_all(result.datasets)
        result.metadata = dump_metadata(
            metadata_stream, result.datasets, context.metadata_defaults
        )

    LOGGER.info(
        "Mixed %d dataset(s) into %s (%d rejected)",
        result.speaker_count,
        paths.mixed_lists_dir,
        len(result.rejected),
    )
    return result
