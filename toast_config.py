"""
Toast configuration
Resolves flat or structured ("defaults" section) configuration into one flat
option map and layers it over the built-in defaults
"""

import os
import logging
from typing import Any, Dict, Mapping, Optional

from toast_models import NotificationPosition

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'position': NotificationPosition.TOP_RIGHT,
    'duration': 5000,
    'animation_duration': 300,
    'max_notifications': 5,
    'sound': True,
    'show_close_button': True,
    'pause_on_hover': True,
    'auto_dismiss': True,
    'rtl': False,
    'theme': 'auto',
    'show_time': True,
    'time_format': '12',
    'background_opacity': 0.85,
    'background_blur': 25,
    'border_radius': 16,
    'min_width': 320,
    'max_width': 480,
    'z_index': 999999999,
    'container_id': 'toast-container',
    'css_prefix': 'toast',
    'close_button_style': 'circle',
}

# "defaults" section name -> internal option name
KEY_ALIASES = {
    'max_notifications': 'max_notifications',
    'animation_duration': 'animation_duration',
    'closable': 'show_close_button',
    'pause_on_hover': 'pause_on_hover',
    'blur_strength': 'background_blur',
    'border_radius': 'border_radius',
    'backdrop_opacity': 'background_opacity',
}

# Environment variable -> (key in the "defaults" section, type)
ENV_KEYS = {
    'TOAST_POSITION': ('position', str),
    'TOAST_DURATION': ('duration', int),
    'TOAST_THEME': ('theme', str),
    'TOAST_SOUND': ('sound', bool),
    'TOAST_CLOSABLE': ('closable', bool),
    'TOAST_PAUSE_ON_HOVER': ('pause_on_hover', bool),
    'TOAST_RTL': ('rtl', bool),
    'TOAST_MAX_NOTIFICATIONS': ('max_notifications', int),
    'TOAST_ANIMATION_DURATION': ('animation_duration', int),
    'TOAST_BLUR_STRENGTH': ('blur_strength', int),
    'TOAST_BORDER_RADIUS': ('border_radius', int),
    'TOAST_BACKDROP_OPACITY': ('backdrop_opacity', float),
    'TOAST_SHOW_TIME': ('show_time', bool),
    'TOAST_TIME_FORMAT': ('time_format', str),
    'TOAST_AUTO_DISMISS': ('auto_dismiss', bool),
    'TOAST_MIN_WIDTH': ('min_width', int),
    'TOAST_MAX_WIDTH': ('max_width', int),
    'TOAST_Z_INDEX': ('z_index', int),
    'TOAST_CLOSE_BUTTON_STYLE': ('close_button_style', str),
}

TRUTHY = ('1', 'true', 'yes', 'on')


def _coerce_position(options: Dict[str, Any]) -> Dict[str, Any]:
    if 'position' in options:
        options['position'] = NotificationPosition.coerce(options['position'])
    return options


def resolve_config(config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Flatten a raw configuration mapping.

    A mapping with a ``defaults`` sub-mapping is the structured form: the
    sub-mapping is used and its external key names are copied onto the
    internal ones (see KEY_ALIASES), keeping both. Anything else is taken
    as already flat. ``position`` is always coerced to a NotificationPosition.
    """
    if not config:
        return {}

    defaults = config.get('defaults')
    if isinstance(defaults, Mapping):
        resolved = dict(defaults)
        for external, internal in KEY_ALIASES.items():
            if external in resolved:
                resolved[internal] = resolved[external]
        return _coerce_position(resolved)

    return _coerce_position(dict(config))


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Per-call overrides are always flat; only position is validated"""
    return _coerce_position(dict(options or {}))


def merge_options(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Key-by-key merge where later layers win; None layers are skipped"""
    merged = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def build_config(config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Built-in defaults overlaid with the resolved configuration"""
    return merge_options(DEFAULT_CONFIG, resolve_config(config))


def _parse_env_value(name: str, raw: str, kind):
    if kind is bool:
        return raw.strip().lower() in TRUTHY
    if kind is str:
        return raw
    try:
        return kind(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: expected {kind.__name__}")
        return None


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Build a structured config from TOAST_* environment variables that are set"""
    environ = os.environ if environ is None else environ
    defaults = {}

    for name, (key, kind) in ENV_KEYS.items():
        raw = environ.get(name)
        if raw is None or raw == '':
            continue
        value = _parse_env_value(name, raw, kind)
        if value is not None:
            defaults[key] = value

    return {'defaults': defaults}
