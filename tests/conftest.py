import os
import sys
import pytest
import configparser
from pathlib import Path
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from models.settings import ChecksumSettings
from services.hashing_service import HashingService
from utils.checksum_config import load_configuration
from utils.config.config_normalizer import ConfigNormalizer
from cli.main import checksum_cli

HELLO_WORLD_SHA256 = "64EC88CA00B268E5BA1A35678A1B5316D212F4F366B2477232534A8AECA37F3C"
EMPTY_SHA256 = "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"


# ────────────────────────────────────────────────
# ENVIRONMENT FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_checksum_env(monkeypatch):
    """Make sure CHECKSUM_* overrides from the developer's shell never leak into tests."""
    for env_var in ConfigNormalizer.ENV_VAR_MAPPING:
        monkeypatch.delenv(env_var, raising=False)


# ────────────────────────────────────────────────
# CONFIGURATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def test_config_path(tmp_path):
    """Create a temporary configuration file for checksum tests."""
    config_path = tmp_path / "test_checksum_config.ini"
    config = configparser.ConfigParser()
    config["Hashing"] = {
        "default_algorithm": "sha256",
        "chunk_size": "4096",
        "max_workers": "1",
        "literal_paths": "false",
    }
    config["Output"] = {"format": "plain"}

    with config_path.open("w") as config_file:
        config.write(config_file)

    return config_path


@pytest.fixture
def config(test_config_path):
    """Load the configuration from the test config path."""
    return load_configuration(str(test_config_path))


# ────────────────────────────────────────────────
# SERVICE FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def hashing_service():
    """HashingService with a small chunk size so multi-chunk paths get exercised."""
    return HashingService(chunk_size=7)


@pytest.fixture
def sample_files(tmp_path):
    """A small directory tree with files, a sub-directory and a nested file."""
    (tmp_path / "hello.txt").write_bytes(b"Hello world")
    (tmp_path / "digits.txt").write_bytes(b"123456789")
    (tmp_path / "empty.bin").write_bytes(b"")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "inner.txt").write_bytes(b"inner contents")
    return tmp_path


# ────────────────────────────────────────────────
# CLI FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def cli_runner():
    """Provide a Click test runner."""
    return CliRunner()


@pytest.fixture
def cli():
    """Provide the checksum CLI group."""
    return checksum_cli


@pytest.fixture
def cli_context():
    """A fully initialized context object, as the CLI group would build it."""
    settings = ChecksumSettings(output_format="plain")
    return {
        "config": {},
        "settings": settings,
        "hashing": HashingService(chunk_size=settings.chunk_size),
    }
