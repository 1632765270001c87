"""Tests for session configuration and logging setup."""

import logging

import pytest
from htclient import SessionConfig, setup_logging
from pydantic import ValidationError


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_defaults(self):
        """Test default values."""
        config = SessionConfig()
        assert config.engine == "requests"
        assert config.max_workers == 4
        assert config.max_connections == 10
        assert config.default_timeout == 60.0
        assert config.user_agent is None

    def test_unknown_engine_rejected(self):
        """Test that only known engines are accepted."""
        with pytest.raises(ValidationError):
            SessionConfig(engine="curl")

    def test_zero_timeout_rejected(self):
        """Test that the engine default timeout must be positive."""
        with pytest.raises(ValidationError):
            SessionConfig(default_timeout=0)

    def test_to_yaml(self):
        """Test config serialization to YAML."""
        yaml_str = SessionConfig(engine="aiohttp", user_agent="app/1.0").to_yaml()
        assert "engine: aiohttp" in yaml_str
        assert "user_agent: app/1.0" in yaml_str
        assert "proxy" not in yaml_str

    def test_from_yaml(self):
        """Test config loading from YAML."""
        yaml_str = """
engine: aiohttp
max_connections: 20
default_timeout: 15
"""
        config = SessionConfig.from_yaml(yaml_str)
        assert config.engine == "aiohttp"
        assert config.max_connections == 20
        assert config.default_timeout == 15.0

    def test_from_empty_yaml(self):
        """Test that an empty document gives the defaults."""
        assert SessionConfig.from_yaml("") == SessionConfig()

    def test_from_yaml_file(self, tmp_path):
        """Test config loading from a YAML file."""
        path = tmp_path / "session.yaml"
        path.write_text("max_workers: 2\ndefault_timeout: 5\n")
        config = SessionConfig.from_yaml_file(path)
        assert config.max_workers == 2
        assert config.default_timeout == 5.0

    def test_logging_options_not_accepted(self):
        """Test that logging is configured with setup_logging, not per session."""
        with pytest.raises(ValidationError):
            SessionConfig(log_level="DEBUG")


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("htclient")
        saved = (logger.level, list(logger.handlers), logger.propagate)
        yield
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            if handler not in saved[1]:
                handler.close()
        logger.setLevel(saved[0])
        for handler in saved[1]:
            logger.addHandler(handler)
        logger.propagate = saved[2]

    def test_configures_package_logger(self):
        """Test level, handler and propagation."""
        logger = setup_logging("debug", force=True)
        assert logger.name == "htclient"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_log_file(self, tmp_path):
        """Test that a file handler is added and written to."""
        log_file = tmp_path / "htclient.log"
        logger = setup_logging("INFO", log_file=str(log_file), force=True)
        assert len(logger.handlers) == 2

        logging.getLogger("htclient.client").info("dispatched")
        for handler in logger.handlers:
            handler.flush()
        assert "dispatched" in log_file.read_text()

    def test_existing_handlers_kept_without_force(self):
        """Test that a second call does not stack handlers."""
        setup_logging("INFO", force=True)
        logger = setup_logging("WARNING")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_invalid_level_falls_back_to_info(self):
        """Test that an unknown level name means INFO."""
        logger = setup_logging("chatty", force=True)
        assert logger.level == logging.INFO
