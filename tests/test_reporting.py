import json
import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from progress_tracker import __version__
from progress_tracker.core.estimator import TimeEstimator
from progress_tracker.core.process import ProcessState
from progress_tracker.core.reporting import (
    EXIT_INCOMPLETE,
    EXIT_OK,
    build_report,
    render_text,
)


def _run(clock, total, steps, seconds):
    proc = ProcessState(total)
    est = TimeEstimator(proc, clock=clock)
    clock.advance(seconds=seconds)
    proc.update(steps)
    return proc, est


def test_report_of_incomplete_run(clock):
    proc, est = _run(clock, 150, 47, 94)
    rep = build_report(proc, est, style="advanced")

    assert not rep.completed
    assert rep.exit_code() == EXIT_INCOMPLETE
    assert rep.percent == 31.33
    assert rep.started_at == "2024-03-01T09:30:00"
    assert rep.finished_at == "2024-03-01T09:31:34"
    assert rep.duration_sec == 94.0
    assert rep.average_step_sec == 2.0
    assert rep.estimated_remaining_sec == 206.0
    assert rep.estimated_finish == "2024-03-01T09:35:00"
    assert rep.provenance.tool_version == __version__


def test_report_before_any_step(clock):
    proc = ProcessState(3)
    est = TimeEstimator(proc, clock=clock)
    rep = build_report(proc, est)
    assert rep.average_step_sec is None
    assert rep.estimated_finish is None
    assert "avg/step=--:--:--" in render_text(rep)


def test_completed_run_text_and_exit_code(clock):
    proc, est = _run(clock, 10, 10, 5)
    rep = build_report(proc, est, style="simple")
    assert rep.exit_code() == EXIT_OK
    assert render_text(rep) == (
        "[DONE] style=simple steps=10/10 (100.0%) duration=5.00s avg/step=00:00:00"
    )


def test_json_output(clock, tmp_path):
    proc, est = _run(clock, 4, 2, 8)
    rep = build_report(proc, est, provenance={"run_id": "abc"})

    data = json.loads(rep.to_json())
    assert data["current_step"] == 2
    assert data["provenance"] == {"tool_version": __version__, "run_id": "abc"}

    out = tmp_path / "nested" / "report.json"
    rep.write_json(str(out))
    assert json.loads(out.read_text(encoding="utf-8")) == data
