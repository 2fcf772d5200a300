"""
Tests for configuration loading and logging setup.
"""

import logging

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import DummyWatchdog, NOTICE, PiWatcher
from core.config import DEFAULT_CONFIG, build_watchdog, build_watchers, load_config
from core.exceptions import ConfigurationError
from core.logging_setup import configure_logging, parse_level
from watchers import TemperatureWatcher, UrlWatcher


class TestLoadConfig:
    """Test reading the Python configuration module."""

    def test_defaults_for_missing_names(self, write_config):
        config = load_config(write_config("WATCHDOG = {'type': 'dummy'}\n"))

        assert config['LOG_LEVEL'] == 'INFO'
        assert config['LOG_FILE'] is None
        assert config['WATCHERS'] == []
        assert config['WATCHDOG'] == {'type': 'dummy'}
        assert set(config) == set(DEFAULT_CONFIG)

    def test_unknown_names_ignored(self, write_config):
        config = load_config(write_config("SOMETHING_ELSE = 1\nLOG_LEVEL = 'DEBUG'\n"))
        assert 'SOMETHING_ELSE' not in config
        assert config['LOG_LEVEL'] == 'DEBUG'

    def test_default_watchers_not_shared(self, write_config):
        path = write_config("")
        first = load_config(path)
        first['WATCHERS'].append({'type': 'url'})
        assert load_config(path)['WATCHERS'] == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(tmp_path / "nope.py"))

    def test_syntax_error(self, write_config):
        with pytest.raises(ConfigurationError, match="Error loading"):
            load_config(write_config("WATCHDOG = {\n"))

    def test_example_config_loads(self):
        root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        config = load_config(os.path.join(root, "config", "piwatchdog.py"))

        assert isinstance(build_watchdog(config), PiWatcher)
        assert [w.name for w in build_watchers(config)] == ["temperature", "url"]


class TestBuildWatchdog:
    """Test watchdog selection."""

    def test_dummy(self):
        watchdog = build_watchdog({'WATCHDOG': {'type': 'dummy', 'period': 20}})
        assert isinstance(watchdog, DummyWatchdog)
        assert watchdog.period == 20

    def test_piwatcher(self):
        watchdog = build_watchdog({'WATCHDOG': {'type': 'PiWatcher', 'watch': 90, 'wake': 4}})
        assert isinstance(watchdog, PiWatcher)
        assert watchdog.config.watch == 90
        assert watchdog.config.wake == 4
        assert watchdog.config.address == 0x62
        assert watchdog.period == 90

    def test_none_configured(self):
        with pytest.raises(ConfigurationError, match="No watchdog configured"):
            build_watchdog({'WATCHDOG': None})

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError, match="unknown type 'softdog'"):
            build_watchdog({'WATCHDOG': {'type': 'softdog'}})

    def test_dummy_period_must_be_positive(self):
        with pytest.raises(ConfigurationError):
            build_watchdog({'WATCHDOG': {'type': 'dummy', 'period': 0}})


class TestBuildWatchers:
    """Test watcher construction."""

    def test_both_types_in_order(self, tmp_path):
        watchers = build_watchers({'WATCHERS': [
            {'type': 'url', 'url': 'http://host/check.sh', 'execute': True, 'period': 60},
            {'type': 'temperature', 'path': str(tmp_path), 'failure_over': 70000, 'timeout': 3},
        ]})

        url, temperature = watchers
        assert isinstance(url, UrlWatcher)
        assert url.execute and not url.xtrace
        assert url.period == 60 and url.timeout == 30
        assert isinstance(temperature, TemperatureWatcher)
        assert temperature.failure_over == 70000
        assert temperature.period == 30 and temperature.timeout == 3

    def test_empty(self):
        assert build_watchers({'WATCHERS': []}) == []

    def test_duplicate_names_rejected(self):
        with pytest.raises(ConfigurationError, match="duplicate watcher name 'url'"):
            build_watchers({'WATCHERS': [
                {'type': 'url', 'url': 'http://a'},
                {'type': 'url', 'url': 'http://b'},
            ]})

    def test_explicit_names_allow_several_of_a_kind(self):
        watchers = build_watchers({'WATCHERS': [
            {'type': 'url', 'url': 'http://a', 'name': 'gateway'},
            {'type': 'url', 'url': 'http://b', 'name': 'upstream'},
        ]})
        assert [w.name for w in watchers] == ['gateway', 'upstream']

    def test_missing_required_key(self):
        with pytest.raises(ConfigurationError, match=r"WATCHERS\[0\]: missing required setting 'path'"):
            build_watchers({'WATCHERS': [{'type': 'temperature', 'failure_over': 1}]})

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError, match="unknown type"):
            build_watchers({'WATCHERS': [{'type': 'ping'}]})

    def test_not_a_list(self):
        with pytest.raises(ConfigurationError):
            build_watchers({'WATCHERS': {'type': 'url'}})

    @pytest.mark.parametrize("key,value", [
        ('execute', 'false'),
        ('xtrace', 1),
    ])
    def test_flags_must_be_bool(self, key, value):
        with pytest.raises(ConfigurationError, match=f"'{key}' must be True or False"):
            build_watchers({'WATCHERS': [{'type': 'url', 'url': 'http://a', key: value}]})


class TestLogging:
    """Test level names and handler setup."""

    @pytest.mark.parametrize("name,level", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("NOTICE", NOTICE),
        ("WARN", logging.WARNING),
        ("WARNING", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("FATAL", logging.CRITICAL),
    ])
    def test_parse_level(self, name, level):
        assert parse_level(name) == level

    def test_notice_between_info_and_warning(self):
        assert logging.INFO < NOTICE < logging.WARNING
        assert logging.getLevelName(NOTICE) == "NOTICE"

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError, match="Log level not understood: LOUD"):
            parse_level("LOUD")

    def test_configure_sets_root_level(self):
        assert configure_logging("NOTICE") == NOTICE
        assert logging.getLogger().level == NOTICE

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "piwatchdog.log"
        configure_logging("INFO", str(log_file))

        logging.getLogger("piwatchdog.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello file" in log_file.read_text()
