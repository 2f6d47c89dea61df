from __future__ import annotations

from tradersim.players.interface import PlayerInput, PlayerOutput
from tradersim.sim.types import Regime

STRESS_REST_THRESHOLD = 0.6
HEALTH_REST_THRESHOLD = 0.4
SKILL_STUDY_TARGET = 0.15
DRAWDOWN_STUDY_THRESHOLD = 0.2


class RulePlayer:
    """Simple deterministic player: rest when worn out, study early, follow the regime otherwise."""

    def __init__(self, size: float = 0.3, leverage: float = 3, stop_loss: float = 0.02, take_profit: float = 0.04):
        self.size = size
        self.leverage = leverage
        self.stop_loss = stop_loss
        self.take_profit = take_profit

    def run(self, input_data: PlayerInput) -> PlayerOutput:
        state = input_data.state
        if state.stress >= STRESS_REST_THRESHOLD or state.health <= HEALTH_REST_THRESHOLD:
            return PlayerOutput(decision={"mode": "rest"}, note="Too tired to trade.")

        drawdown = (state.peak_equity - state.equity) / state.peak_equity if state.peak_equity > 0 else 0.0
        if state.skill < SKILL_STUDY_TARGET or drawdown >= DRAWDOWN_STUDY_THRESHOLD:
            return PlayerOutput(decision={"mode": "study"})

        if state.regime is Regime.BULL:
            side = "long"
        elif state.regime is Regime.BEAR:
            side = "short"
        else:
            return PlayerOutput(decision={"mode": "trade", "side": "flat"})

        # lever down as stress builds
        leverage = max(1.0, self.leverage * (1.0 - state.stress))
        return PlayerOutput(
            decision={
                "mode": "trade",
                "side": side,
                "size": self.size,
                "leverage": round(leverage),
                "stop_loss": self.stop_loss,
                "take_profit": self.take_profit,
                "use_stop": True,
                "use_take": True,
            }
        )
