"""
Orchestration.
Single synchronous run: reset staging → scan → extract → rewrite → stage → index.
"""

from .pipeline import Orchestrator, PipelineResult, RunState, run_pipeline

__all__ = ["run_pipeline", "Orchestrator", "PipelineResult", "RunState"]
