"""RedirectorSettings tests."""

from __future__ import annotations

import pytest

from simple_redirector.mapping import DEFAULT_MAPPING_PATH
from simple_redirector.settings import (
    DEFAULT_PORT,
    DEFAULT_PORT_TLS,
    RedirectorSettings,
    SettingsError,
)


class TestDefaults:
    def test_factory_defaults(self):
        settings = RedirectorSettings()
        assert settings.mapping_path == DEFAULT_MAPPING_PATH
        assert settings.effective_port == DEFAULT_PORT
        assert settings.use_http is True
        assert settings.log_level == 'DEBUG'
        assert settings.validate() == []

    def test_tls_default_port(self):
        settings = RedirectorSettings(use_http=False, cert_file='c', key_file='k')
        assert settings.effective_port == DEFAULT_PORT_TLS

    def test_explicit_port(self):
        assert RedirectorSettings(port=1000).effective_port == 1000
        assert RedirectorSettings(port=1001, use_http=False).effective_port == 1001


class TestValidate:
    def test_bad_log_level(self):
        errors = RedirectorSettings(log_level='TRASH').validate()
        assert any('log level' in e for e in errors)

    def test_lower_case_log_level_ok(self):
        assert RedirectorSettings(log_level='info').validate() == []

    def test_bad_log_format(self):
        assert RedirectorSettings(log_format='xml').validate()

    @pytest.mark.parametrize('port', [-1, 65536])
    def test_port_range(self, port):
        assert RedirectorSettings(port=port).validate()

    def test_tls_requires_cert_and_key(self):
        errors = RedirectorSettings(use_http=False).validate()
        assert len(errors) == 2


class TestFromEnv:
    def test_empty_env(self):
        assert RedirectorSettings.from_env({}) == RedirectorSettings()

    def test_reads_all_keys(self):
        settings = RedirectorSettings.from_env({
            'LOG_LEVEL': 'INFO',
            'LOG_FORMAT': 'console',
            'MAPPING_PATH': './tests/test-redirect-map.yml',
            'TEMPLATE_PATH': './page.j2',
            'BIND_HOST': '127.0.0.1',
            'PORT': '9000',
            'HTTP': 'false',
            'CERT_FILE': './cert',
            'KEY_FILE': './key',
            'PERFORMANCE_MODE': 'true',
        })
        assert settings == RedirectorSettings(
            log_level='INFO',
            log_format='console',
            mapping_path='./tests/test-redirect-map.yml',
            template_path='./page.j2',
            bind_host='127.0.0.1',
            port=9000,
            use_http=False,
            cert_file='./cert',
            key_file='./key',
            performance_mode=True,
        )
        assert settings.json_logs is False

    def test_bad_port(self):
        with pytest.raises(SettingsError):
            RedirectorSettings.from_env({'PORT': 'TRASH'})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv('PORT', '8081')
        assert RedirectorSettings.from_env().port == 8081
