"""Tests for configuration helpers."""

from pathlib import Path

import pytest

from gql_faker.core.config import DEFAULT_PORT, ServerConfig, parse_boolean, parse_header


class TestParseBoolean:
    """Tests for parse_boolean."""

    @pytest.mark.parametrize("value", ["false", "FALSE", "0", "no", "No", " false "])
    def test_false_values(self, value):
        assert parse_boolean(value) is False

    @pytest.mark.parametrize("value", ["true", "1", "yes", "on", ""])
    def test_true_values(self, value):
        assert parse_boolean(value) is True


class TestParseHeader:
    """Tests for parse_header."""

    def test_parse(self):
        assert parse_header("Authorization: bearer abc") == ("authorization", "bearer abc")

    def test_value_with_colon(self):
        assert parse_header("X-Url: http://example.com") == ("x-url", "http://example.com")

    def test_missing_colon(self):
        with pytest.raises(ValueError):
            parse_header("Authorization")


class TestServerConfig:
    """Tests for ServerConfig.from_env."""

    def test_defaults(self):
        config = ServerConfig.from_env({})
        assert config.edit_mode is True
        assert config.port == DEFAULT_PORT
        assert config.schema_dir == Path("schemas")
        assert config.forward_headers == []

    def test_env_overrides_edit_mode(self):
        config = ServerConfig.from_env({"ENABLE_EDIT_MODE": "false"}, edit_mode=True)
        assert config.edit_mode is False

    def test_cli_edit_mode_without_env(self):
        config = ServerConfig.from_env({}, edit_mode=False)
        assert config.edit_mode is False

    def test_port_from_env(self):
        assert ServerConfig.from_env({"PORT": "8080"}).port == 8080

    def test_cli_port_wins(self):
        assert ServerConfig.from_env({"PORT": "8080"}, port=7000).port == 7000

    def test_none_overrides_ignored(self):
        config = ServerConfig.from_env({}, port=None, cors_origin=None)
        assert config.port == DEFAULT_PORT
        assert config.cors_origin is None

    def test_forward_headers_lowercased(self):
        config = ServerConfig.from_env({}, forward_headers=["Authorization", " X-Token ", ""])
        assert config.forward_headers == ["authorization", "x-token"]
