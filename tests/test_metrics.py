from __future__ import annotations

import pytest

from tradersim.sim.metrics import compute_metrics, first_wipeout_day, history_frame
from tradersim.sim.types import HistoryPoint, SimState, initial_state


def _state() -> SimState:
    return SimState(
        day=4,
        equity=130.0,
        peak_equity=130.0,
        wins=3,
        losses=1,
        history=[
            HistoryPoint(day=1, equity=100.0),
            HistoryPoint(day=2, equity=120.0),
            HistoryPoint(day=3, equity=90.0),
            HistoryPoint(day=4, equity=130.0),
        ],
    )


def test_history_frame_drawdown():
    curve = history_frame(_state())
    assert list(curve.index) == [1, 2, 3, 4]
    assert curve.index.name == "day"
    assert curve["drawdown"].loc[3] == pytest.approx(-0.25)
    assert curve["drawdown"].loc[4] == 0.0


def test_compute_metrics():
    m = compute_metrics(_state())
    assert m["total_return_pct"] == pytest.approx(30.0)
    assert m["max_drawdown_pct"] == pytest.approx(-25.0)
    assert m["current_drawdown_pct"] == 0.0
    assert m["num_trades"] == 4
    assert m["win_rate"] == pytest.approx(0.75)
    assert m["status"] == "ok"


def test_fresh_state_metrics():
    m = compute_metrics(initial_state())
    assert m["total_return_pct"] == 0.0
    assert m["max_drawdown_pct"] == 0.0
    assert m["win_rate"] == 0.0
    assert m["regime"] == "choppy"


def test_bankrupt_status_and_zero_peak():
    state = _state()
    state.equity = 0.0
    state.history.append(HistoryPoint(day=5, equity=0.0))
    m = compute_metrics(state)
    assert m["status"] == "bankrupt"
    assert m["max_drawdown_pct"] == pytest.approx(-100.0)
    assert m["current_drawdown_pct"] == pytest.approx(100.0)

    empty = SimState(equity=0.0, peak_equity=0.0, history=[HistoryPoint(day=1, equity=0.0)])
    assert history_frame(empty)["drawdown"].iloc[0] == 0.0


def test_first_wipeout_day():
    state = _state()
    assert first_wipeout_day(history_frame(state)) is None
    assert compute_metrics(state)["wiped_out_day"] is None

    state.equity = 0.0
    state.history += [HistoryPoint(day=5, equity=0.0), HistoryPoint(day=6, equity=0.0)]
    assert first_wipeout_day(history_frame(state)) == 5
    assert compute_metrics(state)["wiped_out_day"] == 5
