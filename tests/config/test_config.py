"""
Tests for configuration management.

Tests config loading from:
1. Environment variables
2. YAML files
3. Combined (env overrides YAML)
"""

import os

import pytest
import yaml
from pydantic import ValidationError

from stfjson.config import BuilderConfig, Config, LoggingConfig, OutputConfig, ReaderConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run without STFJSON_ variables or a stray .env file."""
    for key in list(os.environ.keys()):
        if key.startswith("STFJSON_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes straight to os.environ
    for key in list(os.environ.keys()):
        if key.startswith("STFJSON_"):
            del os.environ[key]


class TestConfigDefaults:
    """Test default configuration values."""

    def test_default_config_creation(self):
        """Test creating config with defaults."""
        config = Config()

        assert config.reader.encoding == "cp437"
        assert config.builder.default_date_format == 1
        assert config.builder.echo_comments is True
        assert config.output.format == "json"
        assert config.output.indent == 2
        assert config.output.ensure_ascii is False
        assert config.logging.level == "INFO"
        assert config.logging.log_to_file is False

    def test_section_creation(self):
        """Test creating sections directly."""
        config = Config(
            reader=ReaderConfig(encoding="latin-1"),
            output=OutputConfig(format="yaml", indent=4),
        )

        assert config.reader.encoding == "latin-1"
        assert config.output.format == "yaml"
        assert config.output.indent == 4
        assert config.builder == BuilderConfig()

    @pytest.mark.parametrize("index", [0, 13, -1])
    def test_date_format_out_of_range(self, index):
        """Test that only format indices 1 to 12 are accepted."""
        with pytest.raises(ValidationError):
            BuilderConfig(default_date_format=index)

    def test_unknown_output_format(self):
        """Test that only json and yaml are accepted."""
        with pytest.raises(ValidationError):
            OutputConfig(format="xml")

    def test_negative_indent(self):
        """Test that indentation cannot be negative."""
        with pytest.raises(ValidationError):
            OutputConfig(indent=-1)


class TestConfigFromEnv:
    """Test loading configuration from environment variables."""

    def test_from_env_basic(self, monkeypatch):
        """Test loading string values."""
        monkeypatch.setenv("STFJSON_ENCODING", "utf-8")
        monkeypatch.setenv("STFJSON_OUTPUT_FORMAT", "yaml")
        monkeypatch.setenv("STFJSON_LOG_LEVEL", "DEBUG")

        config = Config.from_env()

        assert config.reader.encoding == "utf-8"
        assert config.output.format == "yaml"
        assert config.logging.level == "DEBUG"

    def test_from_env_with_numbers(self, monkeypatch):
        """Test integer conversion."""
        monkeypatch.setenv("STFJSON_DEFAULT_DATE_FORMAT", "7")
        monkeypatch.setenv("STFJSON_OUTPUT_INDENT", "0")

        config = Config.from_env()

        assert config.builder.default_date_format == 7
        assert config.output.indent == 0

    def test_from_env_with_booleans(self, monkeypatch):
        """Test boolean conversion."""
        monkeypatch.setenv("STFJSON_ECHO_COMMENTS", "false")
        monkeypatch.setenv("STFJSON_OUTPUT_ENSURE_ASCII", "yes")
        monkeypatch.setenv("STFJSON_LOG_TO_FILE", "1")

        config = Config.from_env()

        assert config.builder.echo_comments is False
        assert config.output.ensure_ascii is True
        assert config.logging.log_to_file is True

    def test_from_env_with_dotenv_file(self, tmp_path):
        """Test loading from .env file."""
        env_file = tmp_path / ".env.test"
        env_file.write_text(
            """
STFJSON_ENCODING=cp850
STFJSON_DEFAULT_DATE_FORMAT=4
"""
        )

        config = Config.from_env(env_file=str(env_file))

        assert config.reader.encoding == "cp850"
        assert config.builder.default_date_format == 4

    def test_empty_env_vars_use_defaults(self, monkeypatch):
        """Test that empty variables fall back to defaults."""
        monkeypatch.setenv("STFJSON_ENCODING", "")
        monkeypatch.setenv("STFJSON_OUTPUT_INDENT", "")

        config = Config.from_env()

        assert config.reader.encoding == "cp437"
        assert config.output.indent == 2

    def test_invalid_number(self, monkeypatch):
        """Test that a non-numeric integer variable fails."""
        monkeypatch.setenv("STFJSON_DEFAULT_DATE_FORMAT", "one")

        with pytest.raises(ValueError):
            Config.from_env()

    def test_out_of_range_date_format(self, monkeypatch):
        """Test that range checks apply to environment values."""
        monkeypatch.setenv("STFJSON_DEFAULT_DATE_FORMAT", "13")

        with pytest.raises(ValidationError):
            Config.from_env()


class TestConfigFromYAML:
    """Test loading configuration from YAML files."""

    def test_from_yaml_basic(self, tmp_path):
        """Test loading a full YAML file."""
        yaml_file = tmp_path / "config.yaml"
        config_data = {
            "reader": {"encoding": "utf-8"},
            "builder": {"default_date_format": 9, "echo_comments": False},
            "output": {"format": "yaml", "indent": 4, "ensure_ascii": True},
            "logging": {"level": "WARNING"},
        }
        yaml_file.write_text(yaml.dump(config_data))

        config = Config.from_yaml(str(yaml_file))

        assert config.reader.encoding == "utf-8"
        assert config.builder.default_date_format == 9
        assert config.builder.echo_comments is False
        assert config.output == OutputConfig(format="yaml", indent=4, ensure_ascii=True)
        assert config.logging.level == "WARNING"

    def test_from_yaml_partial_config(self, tmp_path):
        """Test that missing sections use defaults."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"output": {"indent": 0}}))

        config = Config.from_yaml(yaml_file)

        assert config.output.indent == 0
        assert config.output.format == "json"
        assert config.reader == ReaderConfig()

    def test_from_yaml_empty_file(self, tmp_path):
        """Test that an empty file gives the defaults."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("")

        assert Config.from_yaml(yaml_file) == Config()

    def test_from_yaml_file_not_found(self):
        """Test loading from non-existent file."""
        with pytest.raises(FileNotFoundError):
            Config.from_yaml("/nonexistent/config.yaml")

    def test_from_yaml_invalid_yaml(self, tmp_path):
        """Test loading invalid YAML file."""
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            Config.from_yaml(str(yaml_file))


class TestConfigFromEnvOrYAML:
    """Test combined loading (env overrides YAML)."""

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Test that environment variables override YAML values."""
        yaml_file = tmp_path / "config.yaml"
        config_data = {
            "output": {"format": "json"},
            "logging": {"level": "ERROR"},
        }
        yaml_file.write_text(yaml.dump(config_data))

        monkeypatch.setenv("STFJSON_OUTPUT_FORMAT", "yaml")

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        # Environment should win
        assert config.output.format == "yaml"
        # YAML value preserved where no env override
        assert config.logging.level == "ERROR"

    def test_env_overrides_single_field(self, tmp_path, monkeypatch):
        """Test that one env variable keeps the rest of its YAML section."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"output": {"format": "yaml", "ensure_ascii": True}}))

        monkeypatch.setenv("STFJSON_OUTPUT_INDENT", "4")

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        assert config.output == OutputConfig(format="yaml", indent=4, ensure_ascii=True)

    def test_env_default_value_still_overrides(self, tmp_path, monkeypatch):
        """Test that an env variable set to the default value beats YAML."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"output": {"format": "yaml"}, "builder": {"echo_comments": False}}))

        monkeypatch.setenv("STFJSON_OUTPUT_FORMAT", "json")
        monkeypatch.setenv("STFJSON_ECHO_COMMENTS", "true")

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        assert config.output.format == "json"
        assert config.builder.echo_comments is True

    def test_dotenv_overrides_yaml(self, tmp_path):
        """Test that values from a .env file take part in the merge."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"reader": {"encoding": "latin-1"}, "output": {"indent": 0}}))
        env_file = tmp_path / ".env.test"
        env_file.write_text("STFJSON_ENCODING=utf-8\n")

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file), env_file=str(env_file))

        assert config.reader.encoding == "utf-8"
        assert config.output.indent == 0

    def test_yaml_only_when_no_env(self, tmp_path):
        """Test YAML values used when no environment variables."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(yaml.dump({"builder": {"default_date_format": 3}}))

        config = Config.from_env_or_yaml(yaml_path=str(yaml_file))

        assert config.builder.default_date_format == 3

    def test_env_only_when_no_yaml(self, monkeypatch):
        """Test environment values used when no YAML file."""
        monkeypatch.setenv("STFJSON_LOG_LEVEL", "DEBUG")

        config = Config.from_env_or_yaml(yaml_path="/nonexistent.yaml")

        assert config.logging.level == "DEBUG"

    def test_defaults_when_no_yaml_or_env(self):
        """Test defaults used when neither YAML nor env vars."""
        config = Config.from_env_or_yaml(yaml_path="/nonexistent.yaml")

        assert config == Config()


class TestLoggingConfig:
    """Test logging configuration."""

    def test_matches_setup_logging_arguments(self):
        """Test that the section can be passed straight to setup_logging."""
        assert set(LoggingConfig().model_dump()) == {
            "level",
            "log_to_file",
            "log_dir",
            "file_rotation",
            "file_retention",
            "compression",
            "serialize",
        }
