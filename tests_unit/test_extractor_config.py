"""
Unit tests for CLI configuration loading.
"""

import json

import pytest

from cli.config import CONFIG_OPTIONS, ExtractorConfig, load_config
from cli.exceptions import ConfigurationError


class TestConfigOption:
    """Test cases for value conversion."""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("YES", True), ("1", True), ("on", True),
        ("false", False), ("No", False), ("0", False), ("off", False),
        (True, True), (False, False),
    ])
    def test_boolean_conversion(self, raw, expected):
        assert CONFIG_OPTIONS['show_failures'].convert(raw) is expected

    def test_invalid_boolean(self):
        with pytest.raises(ConfigurationError):
            CONFIG_OPTIONS['show_failures'].convert("maybe")

    def test_choices_are_normalized(self):
        assert CONFIG_OPTIONS['default_output_format'].convert(" JSON ") == "json"
        assert CONFIG_OPTIONS['log_level'].convert("debug") == "DEBUG"

    def test_invalid_choice(self):
        with pytest.raises(ConfigurationError) as exc_info:
            CONFIG_OPTIONS['default_output_format'].convert("xml")
        assert exc_info.value.exit_code == 5


class TestLoadConfig:
    """Test cases for load_config."""

    def test_defaults(self):
        config = load_config(environ={})
        assert config == ExtractorConfig(
            default_output_format='table',
            log_level='INFO',
            show_failures=True,
            sources={key: 'default' for key in CONFIG_OPTIONS},
        )

    def test_config_file(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({'default_output_format': 'csv', 'show_failures': 'no'}))

        config = load_config(config_file, environ={})

        assert config.default_output_format == 'csv'
        assert config.show_failures is False
        assert config.log_level == 'INFO'
        assert config.sources['default_output_format'] == str(config_file)

    def test_config_file_from_environment(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({'log_level': 'warning'}))

        config = load_config(environ={'ARUBA_EXTRACTOR_CONFIG': str(config_file)})
        assert config.log_level == 'WARNING'

    def test_environment_overrides_file(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({'default_output_format': 'csv'}))

        config = load_config(config_file, environ={'ARUBA_EXTRACTOR_DEFAULT_OUTPUT_FORMAT': 'json'})

        assert config.default_output_format == 'json'
        assert config.sources['default_output_format'] == 'ARUBA_EXTRACTOR_DEFAULT_OUTPUT_FORMAT'

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({'database_path': 'x.db'}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file, environ={})
        assert "database_path" in str(exc_info.value)

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_config(config_file, environ={})

    def test_non_object_json(self, tmp_path):
        config_file = tmp_path / "settings.json"
        config_file.write_text("[1, 2]")

        with pytest.raises(ConfigurationError):
            load_config(config_file, environ={})

    def test_to_dict(self):
        assert load_config(environ={}).to_dict() == {
            'default_output_format': 'table',
            'log_level': 'INFO',
            'show_failures': True,
        }
