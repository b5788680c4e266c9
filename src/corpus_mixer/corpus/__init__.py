"""Corpus stages: validation, loading, aggregation, writing and metadata."""

from __future__ import annotations

from .aggregate import CorpusAggregator, total_duration_seconds
from .loader import load_dataset
from .manifest import MalformedLine, ManifestRecord, iter_manifest
from .metadata import MetadataDefaults, build_metadata_payload, dump_metadata, write_metadata
from .models import Dataset, LineEntry, LoadedDataset, Rejected, RejectionReason
from .validation import ValidationResult, validate_dataset
from .writer import MixedCorpusWriter, MixingContext

__all__ = [
    "CorpusAggregator",
    "Dataset",
    "LineEntry",
    "LoadedDataset",
    "MalformedLine",
    "ManifestRecord",
    "MetadataDefaults",
    "MixedCorpusWriter",
    "MixingContext",
    "Rejected",
    "RejectionReason",
    "ValidationResult",
    "build_metadata_payload",
    "dump_metadata",
    "iter_manifest",
    "load_dataset",
    "total_duration_seconds",
    "validate_dataset",
    "write_metadata",
]
