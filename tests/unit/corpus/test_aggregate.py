"""Tests for duration aggregation and sequence id assignment."""

from __future__ import annotations

from pathlib import Path

import pytest

from corpus_mixer.corpus.aggregate import CorpusAggregator, total_duration_seconds
from corpus_mixer.corpus.models import Dataset, LineEntry, LoadedDataset, Rejected, RejectionReason


def _entry(name: str, seconds: float) -> LineEntry:
    return LineEntry(
        source_relative_path=f"wavs/{name}",
        clip_basename=name,
        transcript_text=name,
        resolved_absolute_path=Path("/data") / name,
        duration_seconds=seconds,
    )


def _loaded(name: str, train: list[float], val: list[float] | None = None) -> LoadedDataset:
    return LoadedDataset(
        name=name,
        directory=Path("/data") / name,
        train_entries=tuple(_entry(f"t{i}.wav", s) for i, s in enumerate(train)),
        val_entries=tuple(_entry(f"v{i}.wav", s) for i, s in enumerate(val or [])),
    )


def test_total_duration_sums_train_and_val() -> None:
    assert total_duration_seconds(_loaded("a", [100.0, 50.0], [25.0])) == 175.0
    assert total_duration_seconds(_loaded("a", [])) is None


def test_threshold_is_inclusive() -> None:
    aggregator = CorpusAggregator()

    kept = aggregator.aggregate(_loaded("exact", [150.0, 150.0]))
    dropped = aggregator.aggregate(_loaded("short", [150.0, 149.999]))

    assert isinstance(kept, Dataset)
    assert isinstance(dropped, Rejected)
    assert dropped.reason is RejectionReason.BELOW_THRESHOLD


def test_empty_dataset_is_rejected_separately() -> None:
    outcome = CorpusAggregator().aggregate(_loaded("empty", []))

    assert isinstance(outcome, Rejected)
    assert outcome.reason is RejectionReason.EMPTY


def test_sequence_ids_are_contiguous_over_accepted_datasets() -> None:
    aggregator = CorpusAggregator()
    outcomes = [
        aggregator.aggregate(_loaded("a", [400.0])),
        aggregator.aggregate(_loaded("b", [10.0])),
        aggregator.aggregate(_loaded("c", [], [])),
        aggregator.aggregate(_loaded("d", [200.0], [200.0])),
    ]

    accepted = [outcome for outcome in outcomes if isinstance(outcome, Dataset)]

    assert [(dataset.name, dataset.sequence_id) for dataset in accepted] == [("a", 0), ("d", 1)]
    assert aggregator.next_sequence_id == 2


def test_length_is_minutes_and_vocoder_tag_carried() -> None:
    dataset = CorpusAggregator(vocoder_tag="Vatras").aggregate(_loaded("a", [300.0], [60.0]))

    assert isinstance(dataset, Dataset)
    assert dataset.total_duration_minutes == pytest.approx(6.0)
    assert dataset.vocoder_tag == "Vatras"


def test_custom_threshold() -> None:
    outcome = CorpusAggregator(min_total_seconds=5.0).aggregate(_loaded("a", [5.0]))
    assert isinstance(outcome, Dataset)
