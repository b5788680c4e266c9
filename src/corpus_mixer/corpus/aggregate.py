"""Duration totals, the acceptance threshold and sequence id assignment."""

from __future__ import annotations

from ..utils.logging import get_logger
from .models import AggregateOutcome, Dataset, LoadedDataset, Rejected, RejectionReason

LOGGER = get_logger(__name__)

__all__ = [
    "CorpusAggregator",
    "DEFAULT_MIN_TOTAL_SECONDS",
    "DEFAULT_VOCODER_TAG",
    "SECONDS_PER_MINUTE",
    "total_duration_seconds",
]

DEFAULT_MIN_TOTAL_SECONDS = 300.0
DEFAULT_VOCODER_TAG = "Vatras"
SECONDS_PER_MINUTE = 60.0


def total_duration_seconds(loaded: LoadedDataset) -> float | None:
    """Sum clip durations over train and val entries; ``None`` when there are none."""
    durations = [entry.duration_seconds for entry in loaded.iter_entries()]
    if not durations:
        return None
    return sum(durations)


class CorpusAggregator:
    """Accepts or rejects loaded datasets and hands out contiguous sequence ids.

    Ids are assigned in the order datasets are accepted, starting at
    ``first_sequence_id``; rejected datasets never consume an id.
    """

    def __init__(
        self,
        *,
        min_total_seconds: float = DEFAULT_MIN_TOTAL_SECONDS,
        vocoder_tag: str = DEFAULT_VOCODER_TAG,
        first_sequence_id: int = 0,
    ) -> None:
        self.min_total_seconds = min_total_seconds
        self.vocoder_tag = vocoder_tag
        self.next_sequence_id = first_sequence_id

    def aggregate(self, loaded: LoadedDataset) -> AggregateOutcome:
        total = total_duration_seconds(loaded)
        if total is None:
            detail = (
                f"Double check dataset {loaded.directory}: "
                "train and val lists contain no usable lines."
            )
            LOGGER.warning("%s", detail)
            return Rejected(name=loaded.name, reason=RejectionReason.EMPTY, details=(detail,))

        if total < self.min_total_seconds:
            detail = (
                f"Dataset {loaded.directory} is too short "
                f"({total:.3f}s < {self.min_total_seconds:.1f}s). Discarding."
            )
            LOGGER.warning("%s", detail)
            return Rejected(
                name=loaded.name,
                reason=RejectionReason.BELOW_THRESHOLD,
                details=(detail,),
            )

        dataset = Dataset(
            sequence_id=self.next_sequence_id,
            name=loaded.name,
            # Consumers read this field as "length" (historically "hours"); it is minutes.
            total_duration_minutes=total / SECONDS_PER_MINUTE,
            train_entries=loaded.train_entries,
            val_entries=loaded.val_entries,
            vocoder_tag=self.vocoder_tag,
            directory=loaded.directory,
        )
        self.next_sequence_id += 1
        LOGGER.info(
            "Accepted dataset %s as speaker %d (%.2f minutes)",
            dataset.name,
            dataset.sequence_id,
            dataset.total_duration_minutes,
        )
        return dataset
