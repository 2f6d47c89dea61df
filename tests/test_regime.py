from __future__ import annotations

from collections import Counter

import pytest

from tradersim.sim.regime import REGIME_PARAMS, TRANSITIONS, pick_transition
from tradersim.sim.rng import Mulberry32
from tradersim.sim.types import Regime


class _FixedDraw:
    def __init__(self, value: float):
        self.value = value

    def next(self) -> float:
        return self.value


def test_transition_rows_sum_to_one():
    for regime, row in TRANSITIONS.items():
        assert sum(p for _, p in row) == pytest.approx(1.0)
        assert {outcome for outcome, _ in row} == set(Regime)


def test_every_regime_has_params():
    assert set(REGIME_PARAMS) == set(Regime)
    assert REGIME_PARAMS[Regime.BULL].funding_bias == 1
    assert REGIME_PARAMS[Regime.BEAR].funding_bias == -1
    assert REGIME_PARAMS[Regime.CHOPPY].funding_bias == 0


def test_walk_order_is_explicit():
    assert pick_transition(_FixedDraw(0.0), Regime.BULL) is Regime.BULL
    assert pick_transition(_FixedDraw(0.90), Regime.BULL) is Regime.CHOPPY
    assert pick_transition(_FixedDraw(0.97), Regime.BULL) is Regime.BEAR
    assert pick_transition(_FixedDraw(0.75), Regime.CHOPPY) is Regime.BULL
    assert pick_transition(_FixedDraw(0.90), Regime.CHOPPY) is Regime.BEAR


def test_draw_past_table_keeps_current_regime():
    assert pick_transition(_FixedDraw(1.5), Regime.BEAR) is Regime.BEAR


def test_bull_transition_frequencies_converge():
    rng = Mulberry32(2025)
    n = 100_000
    counts = Counter(pick_transition(rng, Regime.BULL) for _ in range(n))
    assert counts[Regime.BULL] / n == pytest.approx(0.82, abs=0.01)
    assert counts[Regime.CHOPPY] / n == pytest.approx(0.14, abs=0.01)
    assert counts[Regime.BEAR] / n == pytest.approx(0.04, abs=0.01)
