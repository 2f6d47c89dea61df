from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from tradersim.sim.types import Rules, SimState


@dataclass(slots=True)
class PlayerInput:
    state: SimState
    rules: Rules
    step: int


@dataclass(slots=True)
class PlayerOutput:
    decision: dict[str, Any]
    note: str | None = None


class BasePlayer(Protocol):
    def run(self, input_data: PlayerInput) -> PlayerOutput:
        """Choose what to do with the coming day."""
        ...
