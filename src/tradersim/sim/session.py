from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any

from tradersim.config.defaults import SEED_MAX, ensure_seed
from tradersim.config.rules import rules_from_mapping, rules_to_mapping
from tradersim.players.decision import normalize_decision
from tradersim.players.interface import BasePlayer, PlayerInput
from tradersim.sim.engine import resolve_day
from tradersim.sim.metrics import compute_metrics, history_frame
from tradersim.sim.rng import Mulberry32
from tradersim.sim.types import Action, Mode, Rules, SimState, copy_state, initial_state

logger = logging.getLogger(__name__)


class InvalidSnapshotError(ValueError):
    """Raised when a saved snapshot cannot be restored into a session."""


def random_seed() -> int:
    return random.randint(0, SEED_MAX)


class Session:
    """One play-through: the seeded stream, the rules and the current state."""

    def __init__(self, seed: int, rules: Rules | None = None, state: SimState | None = None, rng: Mulberry32 | None = None):
        self.seed = ensure_seed(seed)
        self.rules = rules if rules is not None else Rules()
        self.state = state if state is not None else initial_state()
        self.rng = rng if rng is not None else Mulberry32(self.seed)
        self.decision_warnings: list[str] = []

    @classmethod
    def new(cls, seed: int | None = None, rules: Rules | None = None) -> Session:
        return cls(seed=random_seed() if seed is None else seed, rules=rules)

    @property
    def bankrupt(self) -> bool:
        return self.state.equity <= 0

    def play_day(self, action: Action, mode: Mode = Mode.TRADE, note: str | None = None) -> SimState:
        self.state = resolve_day(self.state, self.rules, action, mode, note, self.rng)
        return self.state

    def reseed(self, seed: int | None = None) -> None:
        self.seed = ensure_seed(random_seed() if seed is None else seed)
        self.rng = Mulberry32(self.seed)

    def reset(self, seed: int | None = None) -> None:
        """Start over from the initial state with a fresh stream; rules are kept."""
        self.state = initial_state()
        self.decision_warnings = []
        self.reseed(seed)
        logger.info("session reset with seed %d", self.seed)

    def run(self, player: BasePlayer, days: int, stop_when_bankrupt: bool = True) -> dict[str, Any]:
        if days < 0:
            raise ValueError(f"days must be non-negative, got {days}")

        for step in range(days):
            if stop_when_bankrupt and self.bankrupt:
                logger.info("stopping after %d days: equity exhausted", step)
                break
            output = player.run(PlayerInput(state=copy_state(self.state), rules=self.rules, step=step))
            action, mode, warning = normalize_decision(output.decision, self.rules)
            if warning:
                self.decision_warnings.append(f"day {self.state.day}: {warning}")
            self.play_day(action, mode, output.note)

        metrics = compute_metrics(self.state)
        metrics["decision_warnings"] = list(self.decision_warnings)
        return {"state": self.state, "history": history_frame(self.state), "metrics": metrics}

    def to_snapshot(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "rng_state": self.rng.state,
            "state": self.state.to_dict(),
            "rules": rules_to_mapping(self.rules),
        }

    @classmethod
    def from_snapshot(cls, snapshot: dict[str, Any]) -> Session:
        """Restore a session; without `rng_state` the stream restarts from `seed`."""
        try:
            seed = int(snapshot["seed"])
            state = SimState.from_dict(snapshot["state"])
            rules = rules_from_mapping(snapshot.get("rules") or {})
            rng_state = snapshot.get("rng_state")
            rng = Mulberry32(seed) if rng_state is None else Mulberry32.from_state(seed, int(rng_state))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSnapshotError(f"Cannot restore snapshot: {exc}") from exc

        return cls(seed=seed, rules=rules, state=state, rng=rng)

    def save_json(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            json.dump(self.to_snapshot(), fp, ensure_ascii=False, indent=2)
        return path

    @classmethod
    def load_json(cls, path: str | Path) -> Session:
        path = Path(path)
        with path.open("r", encoding="utf-8") as fp:
            try:
                snapshot = json.load(fp)
            except json.JSONDecodeError as exc:
                raise InvalidSnapshotError(f"Snapshot {path} is not valid JSON: {exc}") from exc
        if not isinstance(snapshot, dict):
            raise InvalidSnapshotError(f"Snapshot {path} must contain an object, got {type(snapshot).__name__}")
        return cls.from_snapshot(snapshot)
