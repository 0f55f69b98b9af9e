"""Tests for waveviewlib.config — ParamSpec validation, presets, ViewConfig."""

from __future__ import annotations

import json

import pytest

from waveviewlib.config import (
    ConfigError,
    VIEW_PARAMS,
    ViewConfig,
    default_config,
    load_preset,
    merge_configs,
    save_preset,
    validate_config,
    validate_config_fields,
)


class TestDefaults:

    def test_default_keys_match_view_config(self):
        assert default_config() == ViewConfig().to_config()

    def test_every_param_has_a_label(self):
        assert all(p.label for p in VIEW_PARAMS)

    def test_defaults_validate(self):
        assert validate_config_fields(default_config()) == []


class TestValidation:

    @pytest.mark.parametrize("key,value", [
        ("num_points", 0),
        ("num_points", 1.5),
        ("num_points", True),
        ("window_duration_sec", 0.0),
        ("phantom_padding_sec", -1.0),
        ("boost_min_threshold", 1.5),
        ("boost_max_multiplier", 0.5),
        ("boost_lerp_speed", 0.0),
        ("boost_epsilon", 0.0),
        ("full_view_threshold", 1.0),
        ("default_sample_rate", -44100),
        ("window_duration_sec", float("nan")),
        ("window_duration_sec", None),
        ("window_duration_sec", "30"),
    ])
    def test_rejects(self, key, value):
        errors = validate_config_fields({key: value})
        assert len(errors) == 1
        assert errors[0].key == key

    def test_accepts_int_for_float_params(self):
        assert validate_config_fields({"window_duration_sec": 10}) == []

    def test_unknown_keys_are_ignored(self):
        assert validate_config_fields({"colour": "red"}) == []

    def test_validate_config_raises_with_every_message(self):
        with pytest.raises(ConfigError) as exc:
            validate_config({"num_points": 0, "boost_lerp_speed": 2.0})
        assert "Display resolution" in str(exc.value)
        assert "Boost smoothing" in str(exc.value)


class TestViewConfig:

    def test_from_partial_config(self):
        cfg = ViewConfig.from_config({"num_points": 256})
        assert cfg.num_points == 256
        assert cfg.phantom_padding_sec == 30.0

    def test_from_none(self):
        assert ViewConfig.from_config(None) == ViewConfig()

    def test_invalid_raises(self):
        with pytest.raises(ConfigError):
            ViewConfig.from_config({"boost_max_multiplier": 0.1})

    def test_merge(self):
        merged = merge_configs(default_config(), {"num_points": 10}, {"num_points": 20})
        assert merged["num_points"] == 20


class TestPresets:

    def test_round_trip_keeps_only_changes(self, tmp_path):
        path = tmp_path / "presets" / "small.json"
        config = merge_configs(default_config(), {"num_points": 300})
        save_preset(config, str(path), description="small ring")

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["schema_version"] == "1.0"
        assert raw["_description"] == "small ring"
        assert raw["num_points"] == 300
        assert "window_duration_sec" not in raw

        assert load_preset(str(path)) == {"num_points": 300}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_preset(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_preset(str(path))

    def test_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_preset(str(path))
