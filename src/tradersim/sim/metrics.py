from __future__ import annotations

import math

import pandas as pd

from tradersim.sim.types import SimState


def history_frame(state: SimState) -> pd.DataFrame:
    """Equity history indexed by day, with drawdown against the running peak."""
    curve = pd.DataFrame(
        {"equity": [p.equity for p in state.history]},
        index=pd.Index([p.day for p in state.history], name="day"),
    )
    if curve.empty:
        curve["drawdown"] = []
        return curve

    running_max = curve["equity"].cummax()
    curve["drawdown"] = (curve["equity"] / running_max.where(running_max > 0)).fillna(1.0) - 1.0
    return curve


def first_wipeout_day(history: pd.DataFrame) -> int | None:
    """First day whose closing equity was zero, or None if the account survived."""
    wiped = history.index[history["equity"] <= 0]
    return int(wiped[0]) if len(wiped) else None


def current_drawdown(state: SimState) -> float:
    if state.peak_equity <= 0:
        return 0.0
    return (state.peak_equity - state.equity) / state.peak_equity


def win_rate(state: SimState) -> float:
    trades = state.wins + state.losses
    return state.wins / trades if trades else 0.0


def compute_metrics(state: SimState) -> dict:
    curve = history_frame(state)
    status = "bankrupt" if state.equity <= 0 else "ok"
    if curve.empty:
        start_equity = state.equity
        max_drawdown_pct = 0.0
    else:
        start_equity = float(curve["equity"].iloc[0])
        max_drawdown_pct = float(curve["drawdown"].min()) * 100.0

    end_equity = float(state.equity)
    total_return_pct = ((end_equity / start_equity) - 1.0) * 100 if start_equity != 0 else math.nan

    return {
        "day": int(state.day),
        "total_return_pct": float(total_return_pct),
        "max_drawdown_pct": max_drawdown_pct,
        "current_drawdown_pct": current_drawdown(state) * 100.0,
        "num_trades": int(state.wins + state.losses),
        "wins": int(state.wins),
        "losses": int(state.losses),
        "win_rate": win_rate(state),
        "regime": state.regime.value,
        "status": status,
        "start_equity": start_equity,
        "end_equity": end_equity,
        "peak_equity": float(state.peak_equity),
        "wiped_out_day": first_wipeout_day(curve),
    }
