from pathlib import Path

import pytest

from rsvp_anchor.config import (
    InvalidConfigurationError,
    RsvpConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
    validate_config,
)


def test_defaults():
    cfg = load_config()
    assert cfg.chunk_size == 1
    assert cfg.initial_rate == 300.0
    assert cfg.min_rate == 60.0
    assert cfg.max_rate == 1200.0
    assert cfg.acceleration_per_word == 0.5


def test_config_from_dict_ignores_unknown_keys():
    cfg = config_from_dict({"chunk_size": 3, "theme": "dark"})
    assert cfg.chunk_size == 3
    assert config_from_dict(None) == RsvpConfig()


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "rsvp.yaml"
    path.write_text("initial_rate: 450\nacceleration_per_word: 0\n", encoding="utf-8")
    cfg = config_from_yaml(path)
    assert cfg.initial_rate == 450
    assert cfg.acceleration_per_word == 0


def test_config_yaml_must_be_mapping(tmp_path: Path):
    path = tmp_path / "rsvp.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(path)


def test_validate_clamps_initial_rate():
    assert validate_config(RsvpConfig(initial_rate=5000)).initial_rate == 1200.0
    assert validate_config(RsvpConfig(initial_rate=10)).initial_rate == 60.0


@pytest.mark.parametrize(
    "cfg",
    [
        RsvpConfig(chunk_size=0),
        RsvpConfig(chunk_size=True),
        RsvpConfig(min_rate=0),
        RsvpConfig(min_rate=500, max_rate=100),
        RsvpConfig(acceleration_per_word=-1),
        RsvpConfig(initial_rate=float("nan")),
    ],
)
def test_validate_rejects_invalid_configuration(cfg: RsvpConfig):
    with pytest.raises(InvalidConfigurationError):
        validate_config(cfg)
