"""
test_config.py
~~~~~~~~~~~~~~

Unit tests for environment settings and logging setup.
"""

import logging
import os

import pytest

from feedforward.config import Settings, load_settings
from feedforward.logging_config import configure_logging


@pytest.mark.unit
class TestSettings:
    """Test reading settings from environment mappings."""

    def test_defaults(self):
        settings = load_settings({})
        assert settings == Settings()
        assert settings.data_dir == './data'
        assert settings.extension == 'network'
        assert settings.backend == 'file'
        assert settings.seed is None
        assert settings.weight_range == (0.0, 1.0)

    def test_reads_all_variables(self):
        settings = load_settings({
            'FEEDFORWARD_DATA_DIR': '/tmp/nets',
            'FEEDFORWARD_EXTENSION': '.nn',
            'FEEDFORWARD_BACKEND': 'SQLite',
            'FEEDFORWARD_LOG_LEVEL': 'debug',
            'FEEDFORWARD_SEED': '42',
            'FEEDFORWARD_WEIGHT_MIN': '-1',
            'FEEDFORWARD_WEIGHT_MAX': '1.5',
        })
        assert settings.data_dir == '/tmp/nets'
        assert settings.extension == 'nn'
        assert settings.backend == 'sqlite'
        assert settings.log_level == 'DEBUG'
        assert settings.seed == 42
        assert settings.weight_range == (-1.0, 1.5)
        assert settings.database_path == os.path.join('/tmp/nets', 'networks.db')

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv('FEEDFORWARD_DATA_DIR', '/srv/networks')
        assert load_settings().data_dir == '/srv/networks'

    @pytest.mark.parametrize("env, name", [
        ({'FEEDFORWARD_BACKEND': 'redis'}, 'FEEDFORWARD_BACKEND'),
        ({'FEEDFORWARD_SEED': 'abc'}, 'FEEDFORWARD_SEED'),
        ({'FEEDFORWARD_WEIGHT_MIN': 'low'}, 'FEEDFORWARD_WEIGHT_MIN'),
        ({'FEEDFORWARD_WEIGHT_MIN': '2', 'FEEDFORWARD_WEIGHT_MAX': '1'},
         'FEEDFORWARD_WEIGHT_MIN'),
    ])
    def test_invalid_values(self, env, name):
        """Test that bad values are reported with the variable name."""
        with pytest.raises(ValueError) as exc_info:
            load_settings(env)
        assert name in str(exc_info.value)

    def test_settings_are_immutable(self):
        with pytest.raises(AttributeError):
            Settings().backend = 'sqlite'


@pytest.mark.unit
class TestConfigureLogging:
    """Test logging setup."""

    def test_explicit_level(self):
        configure_logging('DEBUG')
        assert logging.getLogger('feedforward').level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv('FEEDFORWARD_LOG_LEVEL', 'error')
        configure_logging()
        assert logging.getLogger('feedforward').level == logging.ERROR

    def test_unknown_level_name_falls_back_to_info(self):
        configure_logging('chatty')
        assert logging.getLogger('feedforward').level == logging.INFO

    def test_package_loggers_emit(self, caplog, id_generator):
        """Test that module loggers propagate under the package logger."""
        from feedforward import Network

        configure_logging(logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger='feedforward'):
            net = Network('logged', id_generator=id_generator)
            net.push_input_layer(1)

        assert any(
            record.name == 'feedforward.network' and 'pushed input' in record.getMessage()
            for record in caplog.records
        )
