"""Command-line entrypoint for corpus-mixer."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

from corpus_mixer.config.load import DEFAULT_ENV, ConfigError
from corpus_mixer.exceptions import CorpusMixerError
from corpus_mixer.pipelines.orchestrator import build_default_context, run_mix
from corpus_mixer.utils.logging import configure_logging, set_log_level

app = typer.Typer(
    help="Merge speech datasets under ./datasets into one multi-speaker corpus.",
    add_completion=False,
)


@app.command()
def mix(
    env: str = typer.Option(
        DEFAULT_ENV,
        "--env",
        help="Configuration profile to load (default: default).",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Directory holding configuration profiles.",
    ),
    workdir: Optional[Path] = typer.Option(
        None,
        "--workdir",
        help="Directory containing datasets/ and receiving the mixed outputs.",
    ),
    max_workers: Optional[int] = typer.Option(
        None,
        "--max-workers",
        min=1,
        help="Threads used to validate and probe datasets.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level.",
    ),
) -> None:
    """Validate, load and merge every dataset, then write model_info.json."""

    overrides: dict[str, Any] = {}
    if workdir is not None:
        overrides["paths"] = {"working_dir": str(workdir.expanduser().resolve())}
    if max_workers is not None:
        overrides["runtime"] = {"max_workers": max_workers}

    try:
        context = build_default_context(env, config_dir=config_dir, overrides=overrides)
    except ConfigError as exc:
        typer.echo(f"Failed to load configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    logging_settings = context.config.get("logging")
    configure_logging(
        logging_settings if isinstance(logging_settings, dict) else None,
        force=False,
    )
    if log_level:
        set_log_level(log_level)

    try:
        run_mix(context)
    except CorpusMixerError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    typer.echo("Done.")


def main() -> None:
    """Entrypoint used by the console script."""
    app()


if __name__ == "__main__":
    main()
