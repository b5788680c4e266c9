"""Structural validation of source dataset directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..storage.paths import DatasetLayout

__all__ = ["ValidationResult", "validate_dataset"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking one dataset directory; ``problems`` lists every missing item."""

    directory: Path
    problems: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.problems


def validate_dataset(directory: Path, layout: DatasetLayout | None = None) -> ValidationResult:
    """Check for both manifests and the clip directory without short-circuiting."""
    layout = layout or DatasetLayout()
    problems: list[str] = []
    if not (directory / layout.train_manifest).exists():
        problems.append(f"{layout.train_manifest} not found")
    if not (directory / layout.val_manifest).exists():
        problems.append(f"{layout.val_manifest} not found")
    if not (directory / layout.clip_dir).exists():
        problems.append(f"{layout.clip_dir} directory not found")
    return ValidationResult(directory=directory, problems=tuple(problems))
