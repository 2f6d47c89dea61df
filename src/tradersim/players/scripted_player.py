from __future__ import annotations

from typing import Any

from tradersim.players.interface import PlayerInput, PlayerOutput


class ScriptedPlayer:
    """Replays a fixed list of decisions, then repeats the last one."""

    def __init__(self, plan: list[dict[str, Any]], notes: list[str | None] | None = None):
        if not plan:
            raise ValueError("plan must contain at least one decision")
        self.plan = [dict(d) for d in plan]
        self.notes = list(notes or [])
        self.step_count = 0

    def run(self, input_data: PlayerInput) -> PlayerOutput:
        index = min(self.step_count, len(self.plan) - 1)
        note = self.notes[self.step_count] if self.step_count < len(self.notes) else None
        self.step_count += 1
        return PlayerOutput(decision=dict(self.plan[index]), note=note)
