from __future__ import annotations

from pathlib import Path

INITIAL_EQUITY = 10000.0
INITIAL_HEALTH = 0.85
INITIAL_STRESS = 0.15
INITIAL_SKILL = 0.05
INITIAL_DISCIPLINE = 0.5
SKILL_CAP = 0.5
HISTORY_CAP = 365
LOG_CAP = 200
BIG_MOVE_FRACTION = 0.05
SEED_MAX = 2**32 - 1
WELCOME_LINE = "Welcome to the crypto trader life simulator. Starting capital $10,000. Survive, grow, or get schooled by the market..."


def default_rules_path() -> Path:
    """Return default rules YAML path in the package."""
    return Path(__file__).resolve().parent / "default_rules.yaml"


def ensure_seed(seed: int) -> int:
    """Reduce any integer seed to the unsigned 32-bit range."""
    return int(seed) & SEED_MAX
