"""Unit tests for configuration management."""

from pathlib import Path
from tempfile import TemporaryDirectory

from sqlwright.utils.config import (
    ConfigSettings,
    DbConfig,
    find_config_file,
    load_config,
    resolve_db_config,
)


class TestDbConfig:
    """Tests for DbConfig defaults."""

    def test_defaults(self):
        """Test defaults."""
        config = DbConfig()
        assert config.charset == "utf8"
        assert config.collation is None
        assert config.table_prefix == ""
        assert config.param_prefix == ":qp"


class TestConfigSettings:
    """Tests for ConfigSettings Pydantic model."""

    def test_empty_config_settings(self):
        """Test creating empty ConfigSettings with all None values."""
        config = ConfigSettings()
        assert config.dialect is None
        assert config.output_format is None
        assert config.db is None

    def test_nested_db_settings(self):
        """Test that a db mapping is parsed into DbConfig."""
        config = ConfigSettings(db={"charset": "utf8mb4"})
        assert isinstance(config.db, DbConfig)
        assert config.db.charset == "utf8mb4"

    def test_unknown_fields_ignored(self):
        """Test that unknown fields are ignored (forward compatibility)."""
        config = ConfigSettings(dialect="mysql", unknown_field="value")
        assert config.dialect == "mysql"
        assert not hasattr(config, "unknown_field")


class TestFindConfigFile:
    """Tests for finding config files."""

    def test_find_config_in_directory(self):
        """Test finding config file in the given directory."""
        with TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            config_file = tmppath / "sqlwright.toml"
            config_file.write_text("[sqlwright]\n")

            assert find_config_file(tmppath) == config_file

    def test_config_not_found(self):
        """Test when config file doesn't exist."""
        with TemporaryDirectory() as tmpdir:
            assert find_config_file(Path(tmpdir)) is None

    def test_config_is_directory(self):
        """Test when sqlwright.toml is a directory (not a file)."""
        with TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            (tmppath / "sqlwright.toml").mkdir()

            assert find_config_file(tmppath) is None


class TestLoadConfig:
    """Tests for loading configuration from TOML files."""

    def test_load_full_config(self, tmp_path):
        """Test loading a config with top-level and db settings."""
        config_file = tmp_path / "sqlwright.toml"
        config_file.write_text(
            """
[sqlwright]
dialect = "mysql"
output_format = "json"

[sqlwright.db]
charset = "utf8mb4"
collation = "utf8mb4_unicode_ci"
table_prefix = "craft_"
"""
        )

        config = load_config(config_file)
        assert config.dialect == "mysql"
        assert config.output_format == "json"
        assert config.db.charset == "utf8mb4"
        assert config.db.collation == "utf8mb4_unicode_ci"
        assert config.db.table_prefix == "craft_"
        assert config.db.param_prefix == ":qp"

    def test_load_empty_config_file(self, tmp_path):
        """Test loading an empty config file."""
        config_file = tmp_path / "sqlwright.toml"
        config_file.write_text("")

        config = load_config(config_file)
        assert config.dialect is None
        assert config.db is None

    def test_load_config_with_extra_sections(self, tmp_path):
        """Test that other tools' sections are ignored."""
        config_file = tmp_path / "sqlwright.toml"
        config_file.write_text(
            """
[sqlwright]
dialect = "generic"

[other_tool]
setting = "value"
"""
        )

        assert load_config(config_file).dialect == "generic"

    def test_malformed_toml_returns_defaults(self, tmp_path, capsys):
        """Test that malformed TOML warns and falls back to defaults."""
        config_file = tmp_path / "sqlwright.toml"
        config_file.write_text("[sqlwright\ndialect = ")

        config = load_config(config_file)
        assert config == ConfigSettings()
        assert "Warning" in capsys.readouterr().err

    def test_invalid_values_return_defaults(self, tmp_path, capsys):
        """Test that values of the wrong type warn and fall back to defaults."""
        config_file = tmp_path / "sqlwright.toml"
        config_file.write_text(
            """
[sqlwright.db]
charset = ["not", "a", "string"]
"""
        )

        config = load_config(config_file)
        assert config == ConfigSettings()
        assert "Invalid configuration" in capsys.readouterr().err

    def test_no_config_file_returns_defaults(self, tmp_path, monkeypatch):
        """Test that a missing sqlwright.toml yields empty settings."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == ConfigSettings()


class TestResolveDbConfig:
    """Tests for merging CLI overrides into DbConfig."""

    def test_defaults_without_db_section(self):
        """Test defaults without db section."""
        assert resolve_db_config(ConfigSettings()) == DbConfig()

    def test_overrides_applied(self):
        """Test overrides applied."""
        settings = ConfigSettings(db=DbConfig(charset="utf8", table_prefix="x_"))
        db = resolve_db_config(settings, charset="utf8mb4", collation="utf8mb4_bin")

        assert db.charset == "utf8mb4"
        assert db.collation == "utf8mb4_bin"
        assert db.table_prefix == "x_"

    def test_settings_not_modified(self):
        """Test settings not modified."""
        settings = ConfigSettings(db=DbConfig(charset="utf8"))
        resolve_db_config(settings, charset="latin1")
        assert settings.db.charset == "utf8"
