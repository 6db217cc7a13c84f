"""
Configuration for Combine.

Rendering knobs for the markup walk in combine.render. Node computations
never read this module; they take a RenderConfig argument and default to
RenderConfig().

Sources, later wins:
1. Defaults (RenderConfig)
2. [render] table of ~/.config/combine/config.toml if it exists
3. COMBINE_<FIELD> environment variables
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "COMBINE_"


@dataclass(frozen=True)
class RenderConfig:
    """Markup rendering settings."""
    default_tag: str = "div"
    element_separator: str = "__"  # between block and element in BEM class names
    compact_empty_tags: bool = False  # "<div>" instead of "<div >" when no attributes
    sort_css_rules: bool = False  # otherwise first-insertion order of the merged rules
    indent: int = 0  # render_html indent width, 0 = single line


@dataclass
class Config:
    """Root config with all settings."""
    render: RenderConfig = field(default_factory=RenderConfig)


def parse_bool(value: Any) -> bool:
    """TOML booleans pass through; strings "true", "1", "yes" are True."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


_RENDER_FIELDS: dict[str, Callable[[Any], Any]] = {
    "default_tag": str,
    "element_separator": str,
    "compact_empty_tags": parse_bool,
    "sort_css_rules": parse_bool,
    "indent": int,
}


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "combine" / "config.toml"


def render_config_from(table: Mapping[str, Any], base: RenderConfig | None = None) -> RenderConfig:
    """
    Overlay a [render] table on base. Unknown keys are ignored; a value
    that does not parse raises ValueError.
    """
    values = {name: parse(table[name]) for name, parse in _RENDER_FIELDS.items() if name in table}
    return replace(base or RenderConfig(), **values)


def _render_from_env(base: RenderConfig, environ: Mapping[str, str]) -> RenderConfig:
    render = base
    for name in _RENDER_FIELDS:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        with contextlib.suppress(ValueError):
            render = render_config_from({name: raw}, render)
    return render


def _render_from_file(path: Path) -> RenderConfig:
    if not path.exists():
        return RenderConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        render = render_config_from(data.get("render", {}))
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        logger.debug("ignoring unreadable config %s: %s", path, e)
        return RenderConfig()
    logger.debug("loaded config from %s", path)
    return render


def load_config(path: Path | None = None, environ: Mapping[str, str] | None = None) -> Config:
    """Build config from the TOML file and environment (defaults: real ones)."""
    render = _render_from_file(path if path is not None else get_config_path())
    render = _render_from_env(render, os.environ if environ is None else environ)
    return Config(render=render)


# Loaded lazily on first use by combine.render
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
