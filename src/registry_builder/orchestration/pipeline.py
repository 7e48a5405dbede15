"""
End-to-end registry run: reset staging → scan → extract → rewrite → stage → write index.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from registry_builder.config import RegistryConfig, load_config
from registry_builder.errors import RegistryError
from registry_builder.parser import extract_references, read_module, scan_modules
from registry_builder.rewriter import rewrite_import_nodes, rewrite_module
from registry_builder.staging import IndexGenerator, StagingDirectory

logger = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    CLEANING = "cleaning"
    PROCESSING = "processing"
    INDEXING = "indexing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class PipelineResult:
    """Result of one registry run."""
    state: RunState
    staged: list[str] = field(default_factory=list)
    imports: dict[str, list[str]] = field(default_factory=dict)
    index_path: Path | None = None
    staging_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "staged": self.staged,
            "imports": self.imports,
            "index_path": str(self.index_path) if self.index_path else None,
            "staging_path": str(self.staging_path) if self.staging_path else None,
            "error": self.error,
        }


class Orchestrator:
    """
    Runs the pipeline as a strictly sequential state machine:
    IDLE → CLEANING → PROCESSING(i) → INDEXING → DONE, or ABORTED from
    CLEANING/PROCESSING on the first RegistryError. Nothing is retried or rolled back.
    """

    def __init__(self, config: RegistryConfig):
        self.config = config
        self.state = RunState.IDLE
        self.current_index: int | None = None
        self.staging = StagingDirectory(config.staging_path)
        self._result: PipelineResult | None = None

    def _enter(self, state: RunState, index: int | None = None) -> None:
        self.state = state
        self.current_index = index
        if index is None:
            logger.debug("-> %s", state.value)
        else:
            logger.debug("-> %s(%d)", state.value, index)

    def run(self) -> PipelineResult:
        """Run once from CLEANING; raises the aborting RegistryError after entering ABORTED."""
        cfg = self.config
        result = PipelineResult(
            state=RunState.IDLE,
            index_path=cfg.index_path,
            staging_path=cfg.staging_path,
        )
        self._result = result
        index = IndexGenerator(cfg.index_path, cfg.staging_dir)
        try:
            self._enter(RunState.CLEANING)
            self.staging.reset()

            paths = scan_modules(cfg.source_dir, cfg.extension, cfg.index_name, sort=cfg.sort_modules)
            for i, path in enumerate(paths):
                self._enter(RunState.PROCESSING, i)
                module = read_module(path)
                refs = extract_references(module.content, module.path)
                if cfg.rewrite_mode == "imports":
                    content = rewrite_import_nodes(module.content, refs)
                else:
                    content = rewrite_module(module.content, [r.specifier for r in refs])
                self.staging.write(module.name, content)
                index.record(module.name)
                result.staged.append(module.name)
                result.imports[module.name] = [r.specifier for r in refs]
        except RegistryError as e:
            self._enter(RunState.ABORTED, self.current_index)
            result.state = RunState.ABORTED
            result.error = str(e)
            raise

        self._enter(RunState.INDEXING)
        try:
            index.flush()
        except RegistryError as e:
            self._enter(RunState.ABORTED)
            result.state = RunState.ABORTED
            result.error = str(e)
            raise

        self._enter(RunState.DONE)
        result.state = RunState.DONE
        logger.info(
            "Registry built: %d module(s) staged in %s, index %s",
            len(result.staged), cfg.staging_path, cfg.index_path,
        )
        return result

    @property
    def last_result(self) -> PipelineResult | None:
        return self._result


def run_pipeline(
    root: str | Path = ".",
    *,
    config: RegistryConfig | None = None,
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> PipelineResult:
    """
    Load configuration for root and run the registry pipeline once.
    Failures come back as PipelineResult.error (state ABORTED) instead of raising.
    """
    if config is None:
        try:
            config = load_config(config_path, root=root, overrides=overrides)
        except (RegistryError, FileNotFoundError) as e:
            logger.error("Invalid configuration: %s", e)
            return PipelineResult(state=RunState.ABORTED, error=f"Invalid configuration: {e}")

    orchestrator = Orchestrator(config)
    try:
        return orchestrator.run()
    except RegistryError as e:
        logger.error("Registry run aborted: %s", e)
        return orchestrator.last_result or PipelineResult(state=RunState.ABORTED, error=str(e))
