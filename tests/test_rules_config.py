from __future__ import annotations

import pytest

from tradersim.config.rules import load_rules, rules_from_mapping, validate_rules
from tradersim.sim.types import Rules


def test_packaged_rules_match_defaults():
    assert load_rules() == Rules()


def test_partial_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("max_leverage: 20\nuse_maker: false\n", encoding="utf-8")

    rules = load_rules(path)
    assert rules.max_leverage == 20.0
    assert rules.fee_per_side == rules.taker_fee_per_side
    assert rules.maintenance == Rules().maintenance


def test_unknown_key_is_rejected(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("max_leverge: 20\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unknown rule keys"):
        load_rules(path)


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        load_rules(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"maker_fee_per_side": -0.001},
        {"black_swan_prob": 1.5},
        {"good_news_prob": -0.1},
        {"max_leverage": 0.5},
        {"maintenance": 1.0},
        {"funding_sd": -0.0001},
    ],
)
def test_out_of_range_rules_are_rejected(overrides):
    with pytest.raises(ValueError, match="Invalid rules"):
        validate_rules(Rules(**overrides))


@pytest.mark.parametrize("raw, expected", [(True, True), ("false", False), ("Yes", True), ("0", False), (1, True)])
def test_use_maker_flag_parsing(raw, expected):
    assert rules_from_mapping({"use_maker": raw}).use_maker is expected


def test_use_maker_rejects_ambiguous_values():
    with pytest.raises(ValueError, match="use_maker must be a boolean"):
        rules_from_mapping({"use_maker": "maybe"})
    with pytest.raises(ValueError, match="use_maker must be a boolean"):
        rules_from_mapping({"use_maker": 2})
