from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tradersim.config.defaults import (
    INITIAL_DISCIPLINE,
    INITIAL_EQUITY,
    INITIAL_HEALTH,
    INITIAL_SKILL,
    INITIAL_STRESS,
    WELCOME_LINE,
)


class Regime(str, Enum):
    BULL = "bull"
    BEAR = "bear"
    CHOPPY = "choppy"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Side(str, Enum):
    FLAT = "flat"
    LONG = "long"
    SHORT = "short"

    @property
    def direction(self) -> int:
        if self is Side.LONG:
            return 1
        if self is Side.SHORT:
            return -1
        return 0


class Mode(str, Enum):
    TRADE = "trade"
    STUDY = "study"
    REST = "rest"


@dataclass(slots=True)
class Rules:
    maker_fee_per_side: float = 0.0002
    taker_fee_per_side: float = 0.0006
    use_maker: bool = True
    funding_mean: float = 0.00005
    funding_sd: float = 0.0002
    maintenance: float = 0.1
    max_leverage: float = 50
    black_swan_prob: float = 0.01
    black_swan_impact: float = -0.1
    good_news_prob: float = 0.008
    good_news_impact: float = 0.06

    @property
    def fee_per_side(self) -> float:
        return self.maker_fee_per_side if self.use_maker else self.taker_fee_per_side


@dataclass(slots=True)
class Action:
    side: Side = Side.FLAT
    size: float = 0.3
    leverage: float = 5
    stop_loss: float = 0.02
    take_profit: float = 0.04
    use_stop: bool = True
    use_take: bool = False


FLAT_ACTION = Action(side=Side.FLAT, size=0.0, leverage=1)


@dataclass(slots=True)
class HistoryPoint:
    day: int
    equity: float


@dataclass(slots=True)
class SimState:
    day: int = 1
    equity: float = INITIAL_EQUITY
    peak_equity: float = INITIAL_EQUITY
    cash_rate: float = 0.0
    regime: Regime = Regime.CHOPPY
    health: float = INITIAL_HEALTH
    stress: float = INITIAL_STRESS
    skill: float = INITIAL_SKILL
    discipline: float = INITIAL_DISCIPLINE
    wins: int = 0
    losses: int = 0
    history: list[HistoryPoint] = field(default_factory=list)
    log: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "equity": self.equity,
            "peak_equity": self.peak_equity,
            "cash_rate": self.cash_rate,
            "regime": self.regime.value,
            "health": self.health,
            "stress": self.stress,
            "skill": self.skill,
            "discipline": self.discipline,
            "wins": self.wins,
            "losses": self.losses,
            "history": [{"day": p.day, "equity": p.equity} for p in self.history],
            "log": list(self.log),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimState:
        return cls(
            day=int(data["day"]),
            equity=float(data["equity"]),
            peak_equity=float(data["peak_equity"]),
            cash_rate=float(data.get("cash_rate", 0.0)),
            regime=Regime(data["regime"]),
            health=float(data["health"]),
            stress=float(data["stress"]),
            skill=float(data["skill"]),
            discipline=float(data["discipline"]),
            wins=int(data["wins"]),
            losses=int(data["losses"]),
            history=[HistoryPoint(day=int(p["day"]), equity=float(p["equity"])) for p in data.get("history", [])],
            log=[str(line) for line in data.get("log", [])],
        )


def initial_state(equity: float = INITIAL_EQUITY) -> SimState:
    return SimState(
        equity=equity,
        peak_equity=equity,
        history=[HistoryPoint(day=1, equity=equity)],
        log=[WELCOME_LINE],
    )


def copy_state(state: SimState) -> SimState:
    """Copy with fresh history/log lists so the original stays untouched."""
    return SimState(
        day=state.day,
        equity=state.equity,
        peak_equity=state.peak_equity,
        cash_rate=state.cash_rate,
        regime=state.regime,
        health=state.health,
        stress=state.stress,
        skill=state.skill,
        discipline=state.discipline,
        wins=state.wins,
        losses=state.losses,
        history=[HistoryPoint(day=p.day, equity=p.equity) for p in state.history],
        log=list(state.log),
    )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_size(value: float) -> float:
    return float(clamp(float(value), 0.0, 1.0))


def clamp_leverage(value: float, max_leverage: float) -> float:
    return float(clamp(float(value), 1.0, max_leverage))
