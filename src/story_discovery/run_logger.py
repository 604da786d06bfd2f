"""Run logger for recording intermediate discovery results to JSON files."""

import dataclasses
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from story_discovery.data import PaginationState


class StageRecord(BaseModel):
    """Record of a single discovery stage execution."""

    stage: str
    component: str
    input: Any = None
    output: Any = None
    timestamp: str = ""
    duration_seconds: float = 0.0


class RunRecord(BaseModel):
    """Record of a complete discovery run."""

    run_id: str
    generation: int
    request: dict[str, Any]
    started_at: str
    completed_at: str | None = None
    stages: list[StageRecord] = []
    story_count: int = 0
    pagination: dict[str, Any] | None = None
    discarded: bool = False


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, tuples, dicts, and primitives.
    """
    if obj is None:
        return None
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _serialize(dataclasses.asdict(obj))
    if isinstance(obj, BaseModel):
        return obj.model_dump()
    if isinstance(obj, list | tuple):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


class RunLogger:
    """Accumulates discovery stage records and writes a JSON log file per run.

    When ``enabled=False``, all methods are no-ops.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, all methods become no-ops.
    """

    def __init__(self, log_dir: Path, *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._records: dict[int, RunRecord] = {}
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether logging is active."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    def start_run(self, generation: int, request: Any) -> None:
        """Initialize a new run record.

        Args:
            generation: Generation number the run was issued under.
            request: The discovery request.
        """
        if not self._enabled:
            return

        self._records[generation] = RunRecord(
            run_id=str(uuid.uuid4()),
            generation=generation,
            request=_serialize(request),
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_stage(
        self,
        generation: int,
        stage: str,
        component: str,
        input_data: Any,
        output_data: Any,
        duration_seconds: float,
    ) -> None:
        """Append a stage record to the run issued under ``generation``.

        Args:
            generation: Run to append to.
            stage: Stage name (e.g. "query_build", "fetch").
            component: Component class or function name.
            input_data: Stage input (will be serialized).
            output_data: Stage output (will be serialized).
            duration_seconds: Wall-clock time for this stage.
        """
        record = self._records.get(generation)
        if not self._enabled or record is None:
            return

        record.stages.append(
            StageRecord(
                stage=stage,
                component=component,
                input=_serialize(input_data),
                output=_serialize(output_data),
                timestamp=datetime.now(tz=UTC).isoformat(),
                duration_seconds=round(duration_seconds, 4),
            )
        )

    def finish_run(
        self,
        generation: int,
        stories: list[Any],
        pagination: PaginationState | None,
        *,
        discarded: bool = False,
    ) -> Path | None:
        """Write the run record to a JSON file.

        Args:
            generation: Run to finish.
            stories: Stories produced by the run.
            pagination: Derived pagination, or None if the run was discarded early.
            discarded: True if a newer generation superseded this run.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        record = self._records.pop(generation, None)
        if not self._enabled or record is None:
            return None

        record.completed_at = datetime.now(tz=UTC).isoformat()
        record.story_count = len(stories)
        record.pagination = _serialize(pagination)
        record.discarded = discarded

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00_g3.json (colons -> dashes)
        ts = record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filename = f"run_{ts}_g{record.generation}.json"
        filepath = self._log_dir / filename

        filepath.write_text(record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
