from __future__ import annotations

from pathlib import Path

import pandas as pd

from tradersim.config.defaults import INITIAL_EQUITY
from tradersim.sim.metrics import first_wipeout_day


def _get_plt():
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt  # type: ignore
    except ModuleNotFoundError as exc:
        raise RuntimeError(
            "matplotlib is required for plotting outputs. Install dependencies (pip install -e .[dev])."
        ) from exc
    return plt


def save_equity_plot(history: pd.DataFrame, path: str | Path, reference: float = INITIAL_EQUITY) -> None:
    """Equity curve with the starting balance, the high-water mark and the wipe-out day marked."""
    plt = _get_plt()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(10, 4))
    plt.plot(history.index, history["equity"], label="equity")
    plt.axhline(reference, linestyle="--", color="grey", label="starting equity")
    if not history.empty:
        peak_day = history["equity"].idxmax()
        plt.scatter([peak_day], [history["equity"].loc[peak_day]], color="green", zorder=3, label="peak")
    wiped_day = first_wipeout_day(history)
    if wiped_day is not None:
        plt.axvline(wiped_day, color="red", linestyle=":", label=f"wiped out (day {wiped_day})")
    plt.ylim(bottom=0)
    plt.title("Equity Curve")
    plt.xlabel("Day")
    plt.ylabel("Equity ($)")
    plt.legend(loc="upper left")
    plt.tight_layout()
    plt.savefig(path)
    plt.close()


def save_drawdown_plot(history: pd.DataFrame, path: str | Path) -> None:
    plt = _get_plt()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(10, 4))
    plt.plot(history.index, history["drawdown"])
    plt.title("Drawdown Curve")
    plt.xlabel("Day")
    plt.ylabel("Drawdown")
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
