from __future__ import annotations

import pytest

from tradersim.sim.metrics import first_wipeout_day, history_frame
from tradersim.sim.plotting import save_drawdown_plot, save_equity_plot
from tradersim.sim.session import Session
from tradersim.sim.types import Action, Mode, Rules, Side

pytest.importorskip("matplotlib")


def test_plots_are_written(tmp_path):
    session = Session(seed=21)
    for _ in range(10):
        session.play_day(Action(side=Side.LONG, size=0.2, leverage=2), Mode.TRADE)
    history = history_frame(session.state)

    save_equity_plot(history, tmp_path / "out" / "equity.png")
    save_drawdown_plot(history, tmp_path / "out" / "drawdown.png")

    assert (tmp_path / "out" / "equity.png").stat().st_size > 0
    assert (tmp_path / "out" / "drawdown.png").stat().st_size > 0


def test_equity_plot_marks_wiped_out_account(tmp_path):
    session = Session(seed=3, rules=Rules(black_swan_prob=1.0, black_swan_impact=-0.5, good_news_prob=0.0))
    session.play_day(Action(side=Side.LONG, size=1.0, leverage=10, use_stop=False), Mode.TRADE)
    history = history_frame(session.state)
    assert first_wipeout_day(history) == 2

    save_equity_plot(history, tmp_path / "wiped.png")
    assert (tmp_path / "wiped.png").stat().st_size > 0
