"""Tests for configuration management functionality."""

from pathlib import Path

import pytest

from memberflect.domain.repositories.cache import AccessorCache
from memberflect.domain.services.mapping import Mapper
from memberflect.infrastructure.config import DEFAULT_CONFIG, Config, get_config


@pytest.mark.unit
class TestEngineConfig:
    """Test get_config environment overrides."""

    def test_defaults(self, monkeypatch):
        for key in DEFAULT_CONFIG:
            monkeypatch.delenv(f"MEMBERFLECT_{key}", raising=False)

        assert get_config() == DEFAULT_CONFIG
        assert get_config() is not DEFAULT_CONFIG

    @pytest.mark.parametrize(("raw", "expected"), [("false", False), ("0", False), ("YES", True), ("on", True)])
    def test_bool_override(self, monkeypatch, raw, expected):
        monkeypatch.setenv("MEMBERFLECT_ENABLE_ACCESSOR_CACHE", raw)
        assert get_config()["ENABLE_ACCESSOR_CACHE"] is expected

    def test_cache_reads_override(self, monkeypatch):
        """Test that a disabled accessor cache never stores entries."""
        monkeypatch.setenv("MEMBERFLECT_ENABLE_ACCESSOR_CACHE", "false")
        cache = AccessorCache()

        assert cache.enabled is False
        cache.get_or_compile("key", object)
        assert len(cache) == 0

    def test_mapper_reads_override(self, monkeypatch, resolver, cache):
        monkeypatch.setenv("MEMBERFLECT_MAP_VALIDATE_BEFORE_WRITE", "false")
        assert Mapper(resolver, cache).validate_before_write is False


@pytest.mark.unit
class TestConfig:
    """Test host Config loading."""

    def test_from_env(self, monkeypatch, tmp_path: Path):
        """Test configuration loading from environment variables (mocked)."""
        monkeypatch.setenv("MEMBERFLECT_VERBOSE", "true")
        monkeypatch.setenv("MEMBERFLECT_LOG_DIR", str(tmp_path / "out"))

        config = Config.from_env(env_path=tmp_path / "missing.env")

        assert config.verbose is True
        assert config.log_dir == tmp_path / "out"

    def test_from_env_file(self, monkeypatch, tmp_path: Path):
        """Test loading a .env file through python-dotenv."""
        # Registered so teardown removes whatever load_dotenv sets
        for name in ("MEMBERFLECT_VERBOSE", "MEMBERFLECT_LOG_DIR"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)

        env_file = tmp_path / ".env"
        env_file.write_text(f"MEMBERFLECT_VERBOSE=1\nMEMBERFLECT_LOG_DIR={tmp_path / 'from_file'}\n")

        config = Config.from_env(env_path=env_file)

        assert config.verbose is True
        assert config.log_dir == tmp_path / "from_file"

    def test_from_env_defaults(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("MEMBERFLECT_VERBOSE", raising=False)
        monkeypatch.delenv("MEMBERFLECT_LOG_DIR", raising=False)

        config = Config.from_env(env_path=tmp_path / "missing.env")

        assert config == Config()

    def test_validate_rejects_file(self, tmp_path: Path):
        log_file = tmp_path / "not_a_dir"
        log_file.write_text("")

        with pytest.raises(ValueError):
            Config(log_dir=log_file).validate()

    def test_ensure_log_dir(self, tmp_path: Path):
        config = Config(log_dir=tmp_path / "a" / "b")
        config.validate()
        config.ensure_log_dir()
        assert config.log_dir.is_dir()
