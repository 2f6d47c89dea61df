from __future__ import annotations

from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

import yaml

from tradersim.config.defaults import default_rules_path
from tradersim.sim.types import Rules

RULE_FIELDS = {f.name for f in fields(Rules)}
PROBABILITY_FIELDS = ("black_swan_prob", "good_news_prob")
FEE_FIELDS = ("maker_fee_per_side", "taker_fee_per_side")

TRUE_STRINGS = {"1", "true", "yes", "on"}
FALSE_STRINGS = {"0", "false", "no", "off"}


def parse_flag(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def validate_rules(rules: Rules) -> Rules:
    """Reject out-of-range rule values before they reach the engine."""
    problems: list[str] = []
    for name in FEE_FIELDS:
        if getattr(rules, name) < 0:
            problems.append(f"{name} must be >= 0, got {getattr(rules, name)}")
    for name in PROBABILITY_FIELDS:
        value = getattr(rules, name)
        if not 0.0 <= value <= 1.0:
            problems.append(f"{name} must be within [0, 1], got {value}")
    if rules.max_leverage < 1:
        problems.append(f"max_leverage must be >= 1, got {rules.max_leverage}")
    if not 0.0 <= rules.maintenance < 1.0:
        problems.append(f"maintenance must be within [0, 1), got {rules.maintenance}")
    if rules.funding_sd < 0:
        problems.append(f"funding_sd must be >= 0, got {rules.funding_sd}")
    if problems:
        raise ValueError("Invalid rules: " + "; ".join(problems))
    return rules


def rules_from_mapping(raw: dict[str, Any]) -> Rules:
    unknown = sorted(set(raw) - RULE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown rule keys: {unknown}. Supported keys: {sorted(RULE_FIELDS)}")
    values: dict[str, Any] = {}
    for key, value in raw.items():
        values[key] = parse_flag(key, value) if key == "use_maker" else float(value)
    return validate_rules(Rules(**values))


def rules_to_mapping(rules: Rules) -> dict[str, Any]:
    return asdict(rules)


def load_rules(path: str | Path | None = None) -> Rules:
    """Load rules YAML; missing keys fall back to the dataclass defaults."""
    path = Path(path) if path is not None else default_rules_path()
    with path.open("r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Rules file {path} must contain a mapping, got {type(raw).__name__}")
    return rules_from_mapping(raw)
