"""Tests for CLI errors module."""

from dbsampler.cli.errors import DbSamplerCLIError, MissingConnectionError


class TestDbSamplerCLIError:
    def test_basic_error_creation(self):
        error = DbSamplerCLIError("test message")
        assert str(error) == "test message"
        assert error.message == "test message"
        assert error.suggestions == []


class TestMissingConnectionError:
    def test_message_and_suggestions(self):
        error = MissingConnectionError("destination", "shop.yml")
        assert str(error) == "No destination database configured in shop.yml"
        assert error.side == "destination"
        assert any("--destination" in s for s in error.suggestions)
