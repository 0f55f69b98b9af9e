from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, fields
from typing import Any

PRESET_SCHEMA_VERSION = "1.0"


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class ConfigFieldError:
    """A single validation error for one configuration field.

    Attributes:
        key:     The config key that failed validation.
        value:   The offending value.
        message: Human-readable explanation of what is wrong.
    """
    key: str
    value: Any
    message: str


@dataclass(frozen=True)
class ParamSpec:
    """Declarative specification for a single configuration parameter.

    Describes type, default, valid range and a human-readable label for
    each display setting the view pipeline reads.
    """
    key: str
    type: type | tuple              # expected Python type(s)
    default: Any
    label: str                       # short UI label
    description: str = ""            # longer tooltip / help text
    min: float | int | None = None   # inclusive lower bound (unless min_exclusive)
    max: float | int | None = None   # inclusive upper bound (unless max_exclusive)
    min_exclusive: bool = False
    max_exclusive: bool = False


# ---------------------------------------------------------------------------
# Display parameters
# ---------------------------------------------------------------------------

VIEW_PARAMS: list[ParamSpec] = [
    ParamSpec(
        key="num_points", type=int, default=1500, min=1,
        label="Display resolution",
        description="Number of magnitudes in every series handed to the renderer.",
    ),
    ParamSpec(
        key="window_duration_sec", type=(int, float), default=30.0,
        min=0.0, min_exclusive=True,
        label="Focus window (s)",
        description="Length of audio shown around the playhead in the focus view.",
    ),
    ParamSpec(
        key="phantom_padding_sec", type=(int, float), default=30.0, min=0.0,
        label="Phantom padding (s)",
        description=(
            "Silent region appended after the end of the track in the focus "
            "view, so the ring scrolls smoothly past end-of-file before it "
            "wraps back to the start."
        ),
    ),
    ParamSpec(
        key="boost_min_threshold", type=(int, float), default=0.5,
        min=0.0, max=1.0, min_exclusive=True,
        label="Boost threshold",
        description=(
            "Windows whose peak is below this fraction of the track's maximum "
            "amplitude are amplified so they stay visible."
        ),
    ),
    ParamSpec(
        key="boost_max_multiplier", type=(int, float), default=2.0, min=1.0,
        label="Maximum boost",
        description="Upper bound for the boost factor and for the output ceiling.",
    ),
    ParamSpec(
        key="boost_lerp_speed", type=(int, float), default=0.15,
        min=0.0, max=1.0, min_exclusive=True,
        label="Boost smoothing",
        description="Per-frame fraction of the distance to the target boost (0.1 = slow, 0.3 = fast).",
    ),
    ParamSpec(
        key="boost_change_threshold", type=(int, float), default=0.1, min=0.0,
        label="Boost hysteresis",
        description="Minimum change of the candidate boost before the target is moved.",
    ),
    ParamSpec(
        key="boost_epsilon", type=(int, float), default=0.01,
        min=0.0, min_exclusive=True,
        label="Boost ratio floor",
        description="Lower bound for the peak ratio when computing the candidate boost.",
    ),
    ParamSpec(
        key="transition_duration_ms", type=(int, float), default=1000,
        min=0.0, min_exclusive=True,
        label="Transition duration (ms)",
        description="Duration of the animated switch between full and focus view.",
    ),
    ParamSpec(
        key="full_view_threshold", type=(int, float), default=0.001,
        min=0.0, max=1.0, max_exclusive=True,
        label="Full-view playhead threshold",
        description="A paused playhead at or below this fraction shows the full-file view.",
    ),
    ParamSpec(
        key="default_sample_rate", type=int, default=44100, min=1,
        label="Fallback sample rate (Hz)",
        description="Used when a caller passes a missing or invalid sample rate.",
    ),
    ParamSpec(
        key="length_tolerance_sec", type=(int, float), default=0.1, min=0.0,
        label="Length tolerance (s)",
        description="Allowed mismatch between buffer length and duration x sample rate.",
    ),
]


def default_config() -> dict[str, Any]:
    """Returns the built-in default configuration."""
    return {p.key: p.default for p in VIEW_PARAMS}


def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple config dicts left-to-right.
    Later values override earlier ones.
    """
    result: dict[str, Any] = {}
    for cfg in configs:
        result.update(cfg)
    return result


def load_preset(path: str) -> dict[str, Any]:
    """
    Load a JSON preset file. Returns a partial config dict.
    Raises ConfigError if the file cannot be read or parsed.
    """
    if not os.path.isfile(path):
        raise ConfigError(f"Preset file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in preset file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read preset file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Preset file must contain a JSON object, got {type(data).__name__}")

    # Strip metadata keys — they are informational, not config
    return {k: v for k, v in data.items() if k not in ("schema_version", "_description")}


def save_preset(config: dict[str, Any], path: str, *, description: str | None = None) -> None:
    """
    Save a config dict as a JSON preset file.
    Only values that differ from the defaults are written.
    """
    preset: dict[str, Any] = {"schema_version": PRESET_SCHEMA_VERSION}
    if description:
        preset["_description"] = description

    defaults = default_config()
    for k, v in config.items():
        if k.startswith("_"):
            continue
        if k in defaults and defaults[k] == v:
            continue
        preset[k] = v

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(preset, f, indent=4, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Validation  (ParamSpec-driven)
# ---------------------------------------------------------------------------

def validate_param_values(
    params: list[ParamSpec],
    values: dict[str, Any],
) -> list[ConfigFieldError]:
    """Validate *values* against a list of :class:`ParamSpec` definitions.

    Returns a (possibly empty) list of :class:`ConfigFieldError` objects.
    Only keys present in *values* are checked; missing keys are not errors
    (they will receive their default).
    """
    errors: list[ConfigFieldError] = []

    for spec in params:
        if spec.key not in values:
            continue

        value = values[spec.key]

        if value is None:
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must not be empty.",
            ))
            continue

        # -- type (bool ⊄ int guard) --
        expected = spec.type
        if expected is not bool and isinstance(value, bool):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, got boolean.",
            ))
            continue
        if not isinstance(value, expected):
            errors.append(ConfigFieldError(
                spec.key, value,
                f"{spec.label} must be {_type_label(expected)}, "
                f"got {type(value).__name__}.",
            ))
            continue

        # -- numeric range --
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                errors.append(ConfigFieldError(
                    spec.key, value,
                    f"{spec.label} must be a finite number.",
                ))
                continue
            if spec.min is not None:
                if spec.min_exclusive and value <= spec.min:
                    errors.append(ConfigFieldError(
                        spec.key, value,
                        f"{spec.label} must be greater than {spec.min}.",
                    ))
                    continue
                if not spec.min_exclusive and value < spec.min:
                    errors.append(ConfigFieldError(
                        spec.key, value,
                        f"{spec.label} must be at least {spec.min}.",
                    ))
                    continue
            if spec.max is not None:
                if spec.max_exclusive and value >= spec.max:
                    errors.append(ConfigFieldError(
                        spec.key, value,
                        f"{spec.label} must be less than {spec.max}.",
                    ))
                    continue
                if not spec.max_exclusive and value > spec.max:
                    errors.append(ConfigFieldError(
                        spec.key, value,
                        f"{spec.label} must be at most {spec.max}.",
                    ))
                    continue

    return errors


def validate_config_fields(config: dict[str, Any]) -> list[ConfigFieldError]:
    """Validate a flat config dict against :data:`VIEW_PARAMS`.

    Returns structured errors.  Never raises.
    """
    return validate_param_values(VIEW_PARAMS, config)


def validate_config(config: dict[str, Any]) -> None:
    """Validate a flat config dict.

    Raises :class:`ConfigError` listing every invalid field.
    """
    errors = validate_config_fields(config)
    if errors:
        lines = [e.message for e in errors]
        raise ConfigError(
            "Configuration has invalid values:\n  • " + "\n  • ".join(lines)
        )


def _type_label(t) -> str:
    """Human-readable label for an expected type or tuple of types."""
    if isinstance(t, tuple):
        return " or ".join(x.__name__ for x in t)
    return t.__name__


# ---------------------------------------------------------------------------
# Immutable view configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ViewConfig:
    """Display settings handed to a :class:`~waveviewlib.engine.ViewEngine`
    at construction.  Field names match the keys of :data:`VIEW_PARAMS`."""
    num_points: int = 1500
    window_duration_sec: float = 30.0
    phantom_padding_sec: float = 30.0
    boost_min_threshold: float = 0.5
    boost_max_multiplier: float = 2.0
    boost_lerp_speed: float = 0.15
    boost_change_threshold: float = 0.1
    boost_epsilon: float = 0.01
    transition_duration_ms: float = 1000
    full_view_threshold: float = 0.001
    default_sample_rate: int = 44100
    length_tolerance_sec: float = 0.1

    @classmethod
    def from_config(cls, config: dict[str, Any] | None = None) -> ViewConfig:
        """Build from a flat config dict, filling missing keys with defaults.

        Unknown keys are ignored.  Raises :class:`ConfigError` on invalid
        values.
        """
        merged = merge_configs(default_config(), config or {})
        validate_config(merged)
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in merged.items() if k in known})

    def to_config(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
