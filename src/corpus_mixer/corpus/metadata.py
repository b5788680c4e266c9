"""Aggregate corpus metadata (``model_info.json``)."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from ..exceptions import OutputWriteError
from .models import Dataset

__all__ = [
    "MetadataDefaults",
    "build_metadata_payload",
    "dump_metadata",
    "render_metadata",
    "write_metadata",
]


@dataclass(frozen=True, slots=True)
class MetadataDefaults:
    """Placeholder values carried verbatim into the metadata record."""

    name: str = ""
    acoustic_model_tag: str = ""
    train_list: str = ""
    indent: int = 4


def build_metadata_payload(
    datasets: Sequence[Dataset],
    defaults: MetadataDefaults | None = None,
) -> dict[str, Any]:
    """Return the metadata record; ``length`` is the dataset duration in minutes."""
    defaults = defaults or MetadataDefaults()
    actors = [
        {
            "id": dataset.sequence_id,
            "name": dataset.name,
            "waveglow": dataset.vocoder_tag,
            "length": dataset.total_duration_minutes,
        }
        for dataset in sorted(datasets, key=lambda item: item.sequence_id)
    ]
    return {
        "name": defaults.name,
        "n_speakers": len(actors),
        "tacotron": defaults.acoustic_model_tag,
        "train_list": defaults.train_list,
        "actors": actors,
    }


def render_metadata(payload: dict[str, Any], *, indent: int = 4) -> str:
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def dump_metadata(
    handle: TextIO,
    datasets: Sequence[Dataset],
    defaults: MetadataDefaults | None = None,
) -> dict[str, Any]:
    """Serialise the metadata record into an open handle and return the payload."""
    defaults = defaults or MetadataDefaults()
    payload = build_metadata_payload(datasets, defaults)
    try:
        handle.write(render_metadata(payload, indent=defaults.indent))
    except OSError as exc:
        raise OutputWriteError(f"Couldn't write data into model info: {exc}") from exc
    return payload


def write_metadata(
    path: Path,
    datasets: Sequence[Dataset],
    defaults: MetadataDefaults | None = None,
) -> dict[str, Any]:
    try:
        handle = path.open("w", encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(f"Error occurred while creating {path}: {exc}") from exc
    with handle:
        return dump_metadata(handle, datasets, defaults)
