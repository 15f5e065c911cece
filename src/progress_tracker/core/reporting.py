from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional
import json
import datetime as _dt
import os

from progress_tracker import __version__
from progress_tracker.core.estimator import TimeEstimator, format_duration
from progress_tracker.core.process import ProcessState

# Exit codes (keep deterministic; 0 means success)
EXIT_OK = 0
EXIT_INCOMPLETE = 1


@dataclass
class Provenance:
    tool_version: str = __version__
    run_id: Optional[str] = None


@dataclass
class RunReport:
    style: str
    total_steps: int
    current_step: int
    percent: float
    completed: bool

    started_at: str
    finished_at: str
    duration_sec: float

    provenance: Provenance = field(default_factory=Provenance)

    average_step_sec: Optional[float] = None
    estimated_remaining_sec: Optional[float] = None
    estimated_finish: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def write_json(self, path: str, indent: Optional[int] = 2) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_json(indent=indent))

    def exit_code(self) -> int:
        return EXIT_OK if self.completed else EXIT_INCOMPLETE


def _iso(value: Optional[_dt.datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.replace(microsecond=0).isoformat()


def _seconds(value: Optional[_dt.timedelta]) -> Optional[float]:
    if value is None:
        return None
    return round(value.total_seconds(), 6)


def build_report(
    process: ProcessState,
    estimator: TimeEstimator,
    style: str = "regular",
    provenance: Optional[Dict[str, Any]] = None,
) -> RunReport:
    """Snapshot the current state of a tracked run into a stable RunReport."""
    elapsed = estimator.elapsed()
    return RunReport(
        style=style,
        total_steps=process.total_steps,
        current_step=process.current_step,
        percent=round(process.progress * 100, 2),
        completed=process.is_complete,
        started_at=_iso(estimator.runtime_begin),
        finished_at=_iso(estimator.runtime_begin + elapsed),
        duration_sec=_seconds(elapsed),
        provenance=Provenance(**(provenance or {})),
        average_step_sec=_seconds(estimator.average_time_per_step),
        estimated_remaining_sec=_seconds(estimator.estimated_remaining_runtime),
        estimated_finish=_iso(estimator.estimated_finish),
    )


def render_text(report: RunReport) -> str:
    """Human-readable one-line summary for CLI/stdout."""
    status = "DONE" if report.completed else "INCOMPLETE"
    avg = format_duration(
        None
        if report.average_step_sec is None
        else _dt.timedelta(seconds=report.average_step_sec)
    )
    return (
        f"[{status}] style={report.style} steps={report.current_step}/{report.total_steps} "
        f"({report.percent:.1f}%) duration={report.duration_sec:.2f}s avg/step={avg}"
    )
