"""
Unit tests for ServerConfig.
"""

import dataclasses
from pathlib import Path

import pytest

from staticserver.config import ServerConfig
from staticserver.errors import InvalidDirectoryError, StaticServerError


class TestServerConfig:
    """Tests for construction and validation."""

    def test_defaults(self, monkeypatch, site_root: Path):
        """Test default values."""
        monkeypatch.chdir(site_root)
        config = ServerConfig()

        assert config.root == str(site_root.resolve())
        assert config.host == "0.0.0.0"
        assert config.port == 1024
        assert config.buffer_size == 1024
        assert config.timeout == 1.0
        assert config.index_file == "index.html"
        assert config.threaded is False
        assert config.crlf is False
        assert config.log_level == "INFO"

    def test_root_normalized(self, site_root: Path):
        """Test that the root is stored absolute and normalized."""
        config = ServerConfig(root=str(site_root / "sub" / ".."))
        assert config.root == str(site_root.resolve())
        assert config.root_path == site_root.resolve()

    def test_missing_root(self, tmp_path: Path):
        """Test that a missing directory fails at construction."""
        with pytest.raises(InvalidDirectoryError) as exc_info:
            ServerConfig(root=str(tmp_path / "missing"))

        assert "missing" in str(exc_info.value)
        assert isinstance(exc_info.value, StaticServerError)

    def test_file_root(self, site_root: Path):
        """Test that a file is not a directory."""
        with pytest.raises(InvalidDirectoryError):
            ServerConfig(root=str(site_root / "index.html"))

    @pytest.mark.parametrize("port", [-1, 65536, 100000])
    def test_invalid_port(self, site_root: Path, port):
        """Test port range validation."""
        with pytest.raises(ValueError):
            ServerConfig(root=str(site_root), port=port)

    @pytest.mark.parametrize("port", [0, 1, 1024, 65535])
    def test_valid_port(self, site_root: Path, port):
        """Test that the whole 16-bit range is accepted."""
        assert ServerConfig(root=str(site_root), port=port).port == port

    def test_invalid_timeout(self, site_root: Path):
        """Test timeout validation."""
        with pytest.raises(ValueError):
            ServerConfig(root=str(site_root), timeout=0)

    def test_invalid_buffer_size(self, site_root: Path):
        """Test buffer size validation."""
        with pytest.raises(ValueError):
            ServerConfig(root=str(site_root), buffer_size=0)

    def test_log_level(self, site_root: Path):
        """Test log level normalization and validation."""
        assert ServerConfig(root=str(site_root), log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValueError):
            ServerConfig(root=str(site_root), log_level="LOUD")

    def test_frozen(self, config: ServerConfig):
        """Test that the config is read-only."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 80

    def test_line_ending(self, site_root: Path):
        """Test the serialization line ending."""
        assert ServerConfig(root=str(site_root)).line_ending == "\n"
        assert ServerConfig(root=str(site_root), crlf=True).line_ending == "\r\n"


class TestFromEnv:
    """Tests for ServerConfig.from_env()."""

    def test_reads_environment(self, monkeypatch, site_root: Path):
        """Test that SFS_* variables are picked up."""
        monkeypatch.setenv("SFS_DIRECTORY", str(site_root))
        monkeypatch.setenv("SFS_HOST", "127.0.0.1")
        monkeypatch.setenv("SFS_PORT", "8000")
        monkeypatch.setenv("SFS_TIMEOUT", "2.5")
        monkeypatch.setenv("SFS_LOG_LEVEL", "warning")
        monkeypatch.setenv("SFS_THREADED", "yes")
        monkeypatch.setenv("SFS_CRLF", "0")

        config = ServerConfig.from_env()

        assert config.root == str(site_root.resolve())
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.timeout == 2.5
        assert config.log_level == "WARNING"
        assert config.threaded is True
        assert config.crlf is False

    def test_overrides_win(self, monkeypatch, site_root: Path):
        """Test that keyword overrides beat the environment."""
        monkeypatch.setenv("SFS_PORT", "8000")
        config = ServerConfig.from_env(root=str(site_root), port=9000)
        assert config.port == 9000

    def test_none_overrides_ignored(self, monkeypatch, site_root: Path):
        """Test that None means "not given"."""
        monkeypatch.setenv("SFS_PORT", "8000")
        config = ServerConfig.from_env(root=str(site_root), port=None, host=None)
        assert config.port == 8000
        assert config.host == "0.0.0.0"

    def test_bad_port_in_environment(self, monkeypatch, site_root: Path):
        """Test that a non-numeric SFS_PORT is a ValueError."""
        monkeypatch.setenv("SFS_PORT", "http")
        with pytest.raises(ValueError):
            ServerConfig.from_env(root=str(site_root))
