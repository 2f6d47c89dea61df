from __future__ import annotations

from dataclasses import dataclass

from tradersim.sim.rng import Mulberry32
from tradersim.sim.types import Regime


@dataclass(frozen=True, slots=True)
class RegimeParams:
    mean_return: float
    sd: float
    funding_bias: int


REGIME_PARAMS: dict[Regime, RegimeParams] = {
    Regime.BULL: RegimeParams(mean_return=0.003, sd=0.02, funding_bias=1),
    Regime.BEAR: RegimeParams(mean_return=-0.003, sd=0.02, funding_bias=-1),
    Regime.CHOPPY: RegimeParams(mean_return=0.0, sd=0.015, funding_bias=0),
}

# Walk order matters: the cumulative draw is matched against these tuples left to right.
TRANSITIONS: dict[Regime, tuple[tuple[Regime, float], ...]] = {
    Regime.BULL: ((Regime.BULL, 0.82), (Regime.CHOPPY, 0.14), (Regime.BEAR, 0.04)),
    Regime.BEAR: ((Regime.BEAR, 0.82), (Regime.CHOPPY, 0.14), (Regime.BULL, 0.04)),
    Regime.CHOPPY: ((Regime.CHOPPY, 0.70), (Regime.BULL, 0.15), (Regime.BEAR, 0.15)),
}


def regime_params(regime: Regime) -> RegimeParams:
    return REGIME_PARAMS[regime]


def pick_transition(rng: Mulberry32, current: Regime) -> Regime:
    """Draw the next regime; falls back to the current one if rounding leaves x past the table."""
    x = rng.next()
    accu = 0.0
    for outcome, probability in TRANSITIONS[current]:
        accu += probability
        if x <= accu:
            return outcome
    return current
