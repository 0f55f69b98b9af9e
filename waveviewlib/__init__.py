from ._version import __version__
from .models import (
    BoostState,
    CacheEntry,
    ViewFrame,
    ViewMode,
    WaveformBuffer,
    WindowDescriptor,
    WindowParamReport,
)
from .config import (
    default_config,
    merge_configs,
    validate_config,
    validate_config_fields,
    validate_param_values,
    load_preset,
    save_preset,
    ConfigError,
    ConfigFieldError,
    ParamSpec,
    ViewConfig,
    VIEW_PARAMS,
)
from .audio import global_max_amplitude
from .decimate import decimate
from .cache import FullFileCache
from .window import (
    circular_slice,
    describe_window,
    prepare_window,
    validate_window_params,
)
from .gain import GainNormalizer
from .blend import blend_series, select_view_mode
from .transition import ViewTransition, ease_in_out_cubic
from .engine import ViewEngine
from .events import EventBus, SESSION_EVENTS, SESSION_RESET, TRACK_LOADED

__all__ = [
    "__version__",
    "BoostState",
    "CacheEntry",
    "ViewFrame",
    "ViewMode",
    "WaveformBuffer",
    "WindowDescriptor",
    "WindowParamReport",
    "default_config",
    "merge_configs",
    "validate_config",
    "validate_config_fields",
    "validate_param_values",
    "load_preset",
    "save_preset",
    "ConfigError",
    "ConfigFieldError",
    "ParamSpec",
    "ViewConfig",
    "VIEW_PARAMS",
    "global_max_amplitude",
    "decimate",
    "FullFileCache",
    "circular_slice",
    "describe_window",
    "prepare_window",
    "validate_window_params",
    "GainNormalizer",
    "blend_series",
    "select_view_mode",
    "ViewTransition",
    "ease_in_out_cubic",
    "ViewEngine",
    "EventBus",
    "SESSION_EVENTS",
    "SESSION_RESET",
    "TRACK_LOADED",
]
