"""Run orchestration."""

from __future__ import annotations

from .orchestrator import MixResult, PipelineContext, build_default_context, run_mix

__all__ = ["MixResult", "PipelineContext", "build_default_context", "run_mix"]
