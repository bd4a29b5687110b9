"""
Tests for container settings loading.
"""

import logging
import os

import pytest

from modkit.config import ConfigurationError, ContainerSettings, load_settings


class TestLoadSettings:
    """Test environment parsing."""

    def test_defaults(self):
        """Test: an empty environment yields the default settings."""
        settings = load_settings(environ={})

        assert settings.debug is False
        assert settings.log_level == 'INFO'
        assert settings.log_format == 'text'
        assert settings.log_file is None
        assert settings.scan_packages == []
        assert settings.strict_scan is False

    def test_all_values(self):
        settings = load_settings(environ={
            'MODKIT_LOG_LEVEL': 'warning',
            'MODKIT_LOG_FORMAT': 'JSON',
            'MODKIT_LOG_FILE': '/tmp/modkit.log',
            'MODKIT_SCAN_PACKAGES': 'myapp.modules, myapp.plugins,,',
            'MODKIT_STRICT_SCAN': 'yes',
        })

        assert settings.log_level == 'WARNING'
        assert settings.log_level_value == logging.WARNING
        assert settings.log_format == 'json'
        assert settings.log_file == '/tmp/modkit.log'
        assert settings.scan_packages == ['myapp.modules', 'myapp.plugins']
        assert settings.strict_scan is True

    def test_debug_forces_debug_level(self):
        settings = load_settings(environ={'MODKIT_DEBUG': 'true', 'MODKIT_LOG_LEVEL': 'ERROR'})

        assert settings.debug is True
        assert settings.log_level == 'DEBUG'

    def test_invalid_bool(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(environ={'MODKIT_DEBUG': 'maybe'})

        assert exc_info.value.key == 'MODKIT_DEBUG'

    def test_invalid_log_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(environ={'MODKIT_LOG_LEVEL': 'LOUD'})

        assert 'MODKIT_LOG_LEVEL' in str(exc_info.value)

    def test_invalid_log_format(self):
        with pytest.raises(ConfigurationError):
            ContainerSettings(log_format='xml')

    def test_reads_process_environment(self, monkeypatch, tmp_path):
        """Test: without an explicit mapping, os.environ and .env are read."""
        dotenv_file = tmp_path / '.env'
        dotenv_file.write_text('MODKIT_STRICT_SCAN=1\nMODKIT_LOG_LEVEL=DEBUG\n')
        monkeypatch.setenv('MODKIT_LOG_LEVEL', 'ERROR')

        try:
            settings = load_settings(dotenv_path=str(dotenv_file))
        finally:
            os.environ.pop('MODKIT_STRICT_SCAN', None)

        # 이미 설정된 프로세스 환경 변수가 우선
        assert settings.log_level == 'ERROR'
        assert settings.strict_scan is True

    def test_to_dict(self):
        settings = ContainerSettings(scan_packages=['a'])

        assert settings.to_dict()['scan_packages'] == ['a']
        assert settings.to_dict()['log_level'] == 'INFO'
