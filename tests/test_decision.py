from __future__ import annotations

from tradersim.players.decision import normalize_decision
from tradersim.sim.types import Mode, Rules, Side


def test_aliases_and_clamps():
    action, mode, warning = normalize_decision(
        {"mode": "trade", "action": "sell", "size": 5.0, "leverage": 999, "use_take": "yes"},
        Rules(max_leverage=25),
    )
    assert mode is Mode.TRADE
    assert action.side is Side.SHORT
    assert action.size == 1.0
    assert action.leverage == 25.0
    assert action.use_take is True
    assert warning is None


def test_mode_aliases():
    _, mode, _ = normalize_decision({"mode": "sleep"}, Rules())
    assert mode is Mode.REST
    _, mode, _ = normalize_decision({"mode": "learn"}, Rules())
    assert mode is Mode.STUDY


def test_unknown_values_fall_back_with_warning():
    action, mode, warning = normalize_decision({"mode": "party", "side": "moon", "leverage": "lots"}, Rules())
    assert mode is Mode.TRADE
    assert action.side is Side.FLAT
    assert action.leverage == 5.0
    assert "party" in warning
    assert "moon" in warning


def test_defaults_for_missing_fields():
    action, mode, warning = normalize_decision({}, Rules())
    assert mode is Mode.TRADE
    assert action.side is Side.FLAT
    assert action.size == 0.3
    assert action.stop_loss == 0.02
    assert action.use_stop is True
    assert action.use_take is False
    assert warning is None
