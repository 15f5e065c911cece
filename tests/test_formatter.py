import pathlib
import sys
from dataclasses import replace

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from progress_tracker.core.errors import InvalidArgument
from progress_tracker.core.estimator import TimeEstimator
from progress_tracker.core.formatter import (
    ADVANCED,
    PRESETS,
    REGULAR,
    SIMPLE,
    BarConfig,
    format_line,
    format_percentage,
)
from progress_tracker.core.process import ProcessState

BAR_47_OF_150 = "█" * 9 + "▋" + " " * 21


def _process(total, current):
    proc = ProcessState(total)
    proc.update(current)
    return proc


def test_simple_preset_scenario():
    proc = _process(150, 47)
    assert format_line(proc, SIMPLE) == " 31%|" + BAR_47_OF_150 + "|"


def test_regular_preset_adds_ratio():
    proc = _process(150, 47)
    assert format_line(proc, REGULAR) == " 31%|" + BAR_47_OF_150 + "|[47/150]"


def test_advanced_preset_adds_time_summary(clock):
    proc = ProcessState(150)
    est = TimeEstimator(proc, clock=clock)
    clock.advance(seconds=94)
    proc.update(47)

    line = format_line(proc, ADVANCED, est)
    assert line == " 31%|" + BAR_47_OF_150 + "|[47/150] [09:30|09:35|00:00:02]"


def test_advanced_before_first_step_shows_placeholders(clock):
    proc = ProcessState(10)
    est = TimeEstimator(proc, clock=clock)
    line = format_line(proc, ADVANCED, est)
    assert line.endswith("[0/10] [09:30|--:--|--:--:--]")


def test_label_prefix():
    proc = _process(4, 1)
    cfg = replace(REGULAR, label="Copying", bar_width=4)
    assert format_line(proc, cfg) == "Copying   25%|█   |[1/4]"


def test_custom_boundaries_and_ascii():
    proc = _process(10, 5)
    cfg = BarConfig(bar_width=10, boundary_chars=("[", "]"), ascii=True)
    assert format_line(proc, cfg) == " 50%[#####-----]"


def test_overshoot_reports_more_than_hundred_percent():
    proc = _process(4, 6)
    line = format_line(proc, replace(SIMPLE, bar_width=4))
    assert line == "150%|████|"


def test_time_stats_require_estimator():
    with pytest.raises(InvalidArgument):
        format_line(_process(3, 1), ADVANCED)


@pytest.mark.parametrize(
    "progress, expected",
    [(0.0, "  0%"), (0.3133, " 31%"), (0.999, "100%"), (1.0, "100%"), (12.5, "1250%")],
)
def test_format_percentage(progress, expected):
    assert format_percentage(progress) == expected


def test_presets_registry():
    assert set(PRESETS) == {"simple", "regular", "advanced"}
    assert not SIMPLE.show_ratio and not SIMPLE.show_time_stats
    assert REGULAR.show_ratio and not REGULAR.show_time_stats
    assert ADVANCED.show_ratio and ADVANCED.show_time_stats


@pytest.mark.parametrize(
    "kwargs", [{"bar_width": -1}, {"boundary_chars": ("|",)}, {"boundary_chars": ("<", "|", ">")}]
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(InvalidArgument):
        BarConfig(**kwargs)
