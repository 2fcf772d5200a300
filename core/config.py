"""
Configuration loading.

The configuration file is a Python module read once at startup. Only the
names in DEFAULT_CONFIG are picked up; anything missing takes the default.

Example:
    LOG_LEVEL = "NOTICE"
    WATCHDOG = {"type": "piwatcher", "watch": 60, "wake": 10}
    WATCHERS = [
        {"type": "temperature", "path": "/sys/class/thermal/thermal_zone0/temp",
         "failure_over": 80000, "period": 30},
        {"type": "url", "url": "http://example.com/check.sh", "execute": True},
    ]
"""

import copy
import importlib.util
from pathlib import Path
from typing import Any, Dict, List

from .exceptions import ConfigurationError
from .piwatcher import PiWatcher, PiWatcherConfig
from .watchdog import DummyWatchdog, Watchdog
from watchers import TemperatureWatcher, UrlWatcher, Watcher, WatcherConfig


DEFAULT_CONFIG = {
    'LOG_LEVEL': 'INFO',
    'LOG_FILE': None,
    'WATCHDOG': None,
    'WATCHERS': [],
}

WATCHDOG_TYPES = ('piwatcher', 'dummy')
WATCHER_TYPES = ('temperature', 'url')


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from a Python file.

    Args:
        config_path: Path to the config file

    Returns:
        Dictionary with configuration values
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    spec = importlib.util.spec_from_file_location("piwatchdog_config", config_file)
    config_module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(config_module)
    except Exception as e:
        raise ConfigurationError(f"Error loading {config_path}: {e}") from e

    config = {}
    for key, default in DEFAULT_CONFIG.items():
        config[key] = getattr(config_module, key, copy.deepcopy(default))

    return config


def _require(section: Dict[str, Any], key: str, where: str) -> Any:
    if section.get(key) is None:
        raise ConfigurationError(f"{where}: missing required setting '{key}'")
    return section[key]


def _flag(section: Dict[str, Any], key: str, where: str) -> bool:
    value = section.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"{where}: '{key}' must be True or False, got {value!r}"
        )
    return value


def _section_type(section: Any, where: str, allowed) -> str:
    if not isinstance(section, dict):
        raise ConfigurationError(f"{where} must be a dict, got {type(section).__name__}")
    kind = str(_require(section, 'type', where)).lower()
    if kind not in allowed:
        raise ConfigurationError(
            f"{where}: unknown type '{kind}' (expected one of {', '.join(allowed)})"
        )
    return kind


def build_watchdog(config: Dict[str, Any]) -> Watchdog:
    """Create the configured watchdog. It is not initialized here."""
    section = config.get('WATCHDOG')
    if not section:
        raise ConfigurationError("No watchdog configured")

    kind = _section_type(section, 'WATCHDOG', WATCHDOG_TYPES)
    if kind == 'dummy':
        return DummyWatchdog(period=section.get('period', 60))

    defaults = PiWatcherConfig()
    return PiWatcher(PiWatcherConfig(
        watch=int(section.get('watch', defaults.watch)),
        wake=int(section.get('wake', defaults.wake)),
        bus=int(section.get('bus', defaults.bus)),
        address=int(section.get('address', defaults.address)),
    ))


def build_watchers(config: Dict[str, Any]) -> List[Watcher]:
    """Create the configured watchers in file order."""
    sections = config.get('WATCHERS') or []
    if not isinstance(sections, (list, tuple)):
        raise ConfigurationError("WATCHERS must be a list")

    watchers: List[Watcher] = []
    names = set()
    for index, section in enumerate(sections):
        where = f"WATCHERS[{index}]"
        kind = _section_type(section, where, WATCHER_TYPES)
        common = WatcherConfig(
            period=float(section.get('period') or 0),
            timeout=float(section.get('timeout') or 0),
        )
        name = section.get('name')

        if kind == 'temperature':
            watcher = TemperatureWatcher(
                path=_require(section, 'path', where),
                failure_over=int(_require(section, 'failure_over', where)),
                config=common,
                name=name,
            )
        else:
            watcher = UrlWatcher(
                url=_require(section, 'url', where),
                execute=_flag(section, 'execute', where),
                xtrace=_flag(section, 'xtrace', where),
                config=common,
                name=name,
            )

        if watcher.name in names:
            raise ConfigurationError(
                f"{where}: duplicate watcher name '{watcher.name}', set a unique 'name'"
            )
        names.add(watcher.name)
        watchers.append(watcher)

    return watchers
