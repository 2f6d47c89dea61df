from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tradersim.config.defaults import BIG_MOVE_FRACTION, HISTORY_CAP, LOG_CAP, SKILL_CAP
from tradersim.sim.regime import pick_transition, regime_params
from tradersim.sim.rng import Mulberry32, normal
from tradersim.sim.types import (
    FLAT_ACTION,
    Action,
    HistoryPoint,
    Mode,
    Rules,
    Side,
    SimState,
    clamp,
    clamp_leverage,
    clamp_size,
    copy_state,
)

logger = logging.getLogger(__name__)

SKILL_EDGE = 0.0015
STUDY_GAIN_MEAN = 0.01
STUDY_GAIN_SD = 0.005
STUDY_GAIN_MAX = 0.03


@dataclass(slots=True)
class MarketDraw:
    daily_return: float
    funding: float


def _fmt(value: float) -> str:
    text = f"{value:,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _pct(value: float) -> str:
    return f"{value * 100:.2f}%"


def _round_cents(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def _side_label(side: Side) -> str:
    return side.value.capitalize()


def clip_return(realized: float, action: Action) -> float:
    if action.use_stop and realized < -action.stop_loss:
        realized = -action.stop_loss
    if action.use_take and realized > action.take_profit:
        realized = action.take_profit
    return realized


def liquidation_move(maintenance: float, leverage: float) -> float:
    return (1.0 - maintenance) / leverage


def is_liquidated(side: Side, realized: float, maintenance: float, leverage: float) -> bool:
    move = liquidation_move(maintenance, leverage)
    if side is Side.LONG:
        return realized <= -move
    if side is Side.SHORT:
        return realized >= move
    return False


def performance_penalty(state: SimState, leverage: float, max_leverage: float) -> float:
    """Return drag from stress and poor health, scaled by leverage and softened by discipline."""
    return (0.10 * state.stress + 0.05 * (1 - state.health)) * (leverage / max_leverage) * (1 - state.discipline)


def _draw_market(rng: Mulberry32, state: SimState, rules: Rules, side: Side) -> MarketDraw:
    params = regime_params(state.regime)
    edge = state.skill * SKILL_EDGE if side is not Side.FLAT else 0.0
    daily_return = normal(rng, params.mean_return + edge, params.sd)

    if rng.next() < rules.black_swan_prob:
        daily_return += rules.black_swan_impact
    if rng.next() < rules.good_news_prob:
        daily_return += rules.good_news_impact

    funding = normal(rng, rules.funding_mean * params.funding_bias, rules.funding_sd)
    return MarketDraw(daily_return=daily_return, funding=funding)


def _study(state: SimState, rng: Mulberry32) -> str:
    gain = clamp(STUDY_GAIN_MEAN + normal(rng, 0.0, STUDY_GAIN_SD), 0.0, STUDY_GAIN_MAX)
    state.skill = clamp(state.skill + gain * (1 - state.skill), 0.0, SKILL_CAP)
    state.discipline = clamp(state.discipline + 0.02, 0.0, 1.0)
    state.stress = clamp(state.stress - 0.08, 0.0, 1.0)
    state.health = clamp(state.health + 0.02, 0.0, 1.0)
    return f"Studied the market. Skill +{_fmt(gain * 100)} pts, stress eased."


def _rest(state: SimState) -> str:
    state.stress = clamp(state.stress - 0.15, 0.0, 1.0)
    state.health = clamp(state.health + 0.08, 0.0, 1.0)
    state.discipline = clamp(state.discipline + 0.01, 0.0, 1.0)
    return "Rest day. Health recovering, stress fading."


def _narrative(liquidated: bool, mode: Mode, delta: float, prev_equity: float) -> str:
    if liquidated:
        return " Margin call failed. An expensive lesson."
    if mode is Mode.TRADE and abs(delta) > prev_equity * BIG_MOVE_FRACTION:
        return " Big win!" if delta > 0 else " Brutal drawdown."
    if mode is not Mode.TRADE:
        return " Investing in yourself compounds too."
    return ""


def resolve_day(
    state: SimState,
    rules: Rules,
    action: Action,
    mode: Mode,
    note: str | None,
    rng: Mulberry32,
) -> SimState:
    """Resolve one day and return the next state; `state` itself is left untouched.

    Draw order is fixed: regime, base return, black swan, good news, funding,
    then the study gain on study days.
    """
    s = copy_state(state)
    act = action if mode is Mode.TRADE else FLAT_ACTION
    size = clamp_size(act.size)
    leverage = clamp_leverage(act.leverage, rules.max_leverage)
    # a zero-size order opens no exposure
    side = act.side if size > 0 else Side.FLAT

    old_regime = s.regime
    s.regime = pick_transition(rng, old_regime)
    market = _draw_market(rng, s, rules, side)
    fund_cost = side.direction * market.funding

    realized = market.daily_return
    if side is not Side.FLAT:
        realized = clip_return(realized, act)

    liquidated = side is not Side.FLAT and is_liquidated(side, realized, rules.maintenance, leverage)

    notional = s.equity * size * leverage
    round_trip_fee = rules.fee_per_side * 2 * notional
    funding_fee = abs(notional) * abs(fund_cost)

    pnl = 0.0
    desc = "Stayed flat."
    if mode is Mode.STUDY:
        desc = _study(s, rng)
    elif mode is Mode.REST:
        desc = _rest(s)
    elif side is not Side.FLAT:
        adj_return = realized - performance_penalty(s, leverage, rules.max_leverage)
        if liquidated:
            pnl = -s.equity * size
            desc = f"Liquidated: {_side_label(side)} x{_fmt(leverage)}"
            s.losses += 1
            s.stress = clamp(s.stress + 0.2, 0.0, 1.0)
            s.health = clamp(s.health - 0.05, 0.0, 1.0)
            logger.info("day %d: %s x%s liquidated at return %.4f", s.day, side.value, leverage, realized)
        else:
            gross = notional * adj_return * side.direction
            pnl = gross - round_trip_fee - funding_fee
            if pnl >= 0:
                s.wins += 1
            else:
                s.losses += 1
            desc = (
                f"{_side_label(side)} x{_fmt(leverage)} size {_pct(size)} -> day return {_pct(adj_return)}; "
                f"fees ${_fmt(round_trip_fee + funding_fee)}"
            )
            s.stress = clamp(
                s.stress + (leverage / rules.max_leverage) * 0.03 + (0.05 if pnl < 0 else -0.03),
                0.0,
                1.0,
            )

    prev_equity = s.equity
    s.equity = max(0.0, s.equity + pnl + s.equity * s.cash_rate)
    s.peak_equity = max(s.peak_equity, s.equity)
    s.day += 1
    if prev_equity > 0 and s.equity == 0:
        logger.warning("day %d: account wiped out", s.day - 1)

    delta = s.equity - prev_equity
    sign = "+" if delta >= 0 else ""
    pl = f"{sign}${_fmt(delta)} ({_pct(delta / max(prev_equity, 1e-9))})"
    line = (
        f"Day {s.day - 1} | Market: {old_regime.label}->{s.regime.label} | {desc} | Day P&L {pl}."
        + _narrative(liquidated, mode, delta, prev_equity)
    )

    entries = [line]
    if note:
        entries.append(f"Diary: {note}")
    s.log = (entries + s.log)[:LOG_CAP]
    s.history = (s.history + [HistoryPoint(day=s.day, equity=_round_cents(s.equity))])[-HISTORY_CAP:]
    logger.debug("resolved day %d: regime=%s equity=%.2f", s.day - 1, s.regime.value, s.equity)
    return s
