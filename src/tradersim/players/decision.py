from __future__ import annotations

from typing import Any

from tradersim.sim.types import Action, Mode, Rules, Side, clamp_leverage, clamp_size

SIDE_ALIASES = {
    "buy": "long",
    "sell": "short",
    "hold": "flat",
    "close": "flat",
    "none": "flat",
}
MODE_ALIASES = {
    "learn": "study",
    "sleep": "rest",
}
VALID_SIDES = {s.value for s in Side}
VALID_MODES = {m.value for m in Mode}
DEFAULT_ACTION = Action()


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_float(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def normalize_decision(decision_dict: dict, rules: Rules) -> tuple[Action, Mode, str | None]:
    """Turn a loosely typed decision into a clamped Action and a Mode.

    Unknown sides fall back to flat and unknown modes to trade; the returned
    warning describes what was replaced.
    """
    warnings: list[str] = []

    raw_mode = str(decision_dict.get("mode", "trade")).strip().lower()
    mapped_mode = MODE_ALIASES.get(raw_mode, raw_mode)
    if mapped_mode not in VALID_MODES:
        warnings.append(f"Unknown mode '{raw_mode}' mapped to trade")
        mapped_mode = Mode.TRADE.value

    raw_side = str(decision_dict.get("side", decision_dict.get("action", "flat"))).strip().lower()
    mapped_side = SIDE_ALIASES.get(raw_side, raw_side)
    if mapped_side not in VALID_SIDES:
        warnings.append(f"Unknown side '{raw_side}' mapped to flat")
        mapped_side = Side.FLAT.value

    action = Action(
        side=Side(mapped_side),
        size=clamp_size(_as_float(decision_dict.get("size"), DEFAULT_ACTION.size)),
        leverage=clamp_leverage(_as_float(decision_dict.get("leverage"), DEFAULT_ACTION.leverage), rules.max_leverage),
        stop_loss=max(0.0, _as_float(decision_dict.get("stop_loss"), DEFAULT_ACTION.stop_loss)),
        take_profit=max(0.0, _as_float(decision_dict.get("take_profit"), DEFAULT_ACTION.take_profit)),
        use_stop=_as_bool(decision_dict.get("use_stop"), DEFAULT_ACTION.use_stop),
        use_take=_as_bool(decision_dict.get("use_take"), DEFAULT_ACTION.use_take),
    )
    return action, Mode(mapped_mode), "; ".join(warnings) or None
