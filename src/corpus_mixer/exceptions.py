"""Exception types for corpus-mixer."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ClipCopyError",
    "CorpusMixerError",
    "DatasetReadError",
    "DatasetsDirectoryMissingError",
    "NoValidDatasetsError",
    "OutputWriteError",
]


class CorpusMixerError(RuntimeError):
    """Base class for errors that terminate a mixing run."""


class DatasetsDirectoryMissingError(CorpusMixerError):
    """Raised when the input ``datasets`` directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No folders with datasets at {path}. Quitting.")
        self.path = path


class NoValidDatasetsError(CorpusMixerError):
    """Raised when discovery finds no structurally valid dataset."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No valid dataset found in {path}.")
        self.path = path


class OutputWriteError(CorpusMixerError):
    """Raised when an output directory, manifest or metadata file cannot be written."""


class ClipCopyError(OutputWriteError):
    """
    Raised when a clip cannot be copied into the shared clip pool.

    A merged manifest line would otherwise reference a file that does not exist,
    so the whole run stops.
    """

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        super().__init__(f"Failed to copy file from {source} to {destination}: {reason}")
        self.source = source
        self.destination = destination


class DatasetReadError(CorpusMixerError):
    """Raised when a dataset directory or manifest cannot be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Couldn't read {path}. Reason: {reason}")
        self.path = path
