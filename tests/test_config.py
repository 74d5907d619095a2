"""Tests for budgetman.config."""

import os
import tomllib
from pathlib import Path

import pytest

from budgetman.config import (
    DEFAULT_CURRENCY,
    create_default_config,
    get_config_path,
    load_config,
    load_settings,
    save_config,
    settings_from_config,
)
from budgetman.domain.models import DEFAULT_CATEGORIES


class TestConfigPaths:
    """Tests for XDG path resolution."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "budgetman" / "config.toml"

    def test_default_data_dir_uses_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert settings_from_config({}).data_dir == tmp_path / "budgetman"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "missing.toml")

        assert settings.currency == DEFAULT_CURRENCY
        assert settings.categories == DEFAULT_CATEGORIES

    def test_file_values_override_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        save_config(
            {"currency": "£", "categories": ["Groceries", "Bills"], "data_dir": str(tmp_path / "d")},
            config_path,
        )

        settings = load_settings(config_path)

        assert settings.currency == "£"
        assert settings.categories == ("Groceries", "Bills")
        assert settings.data_dir == tmp_path / "d"

    def test_empty_category_list_falls_back(self) -> None:
        assert settings_from_config({"categories": []}).categories == DEFAULT_CATEGORIES

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text("currency = ", encoding="utf-8")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_settings(config_path)


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_defaults_with_secure_permissions(self, tmp_path: Path) -> None:
        config_path = tmp_path / "nested" / "config.toml"

        create_default_config(config_path)

        assert load_config(config_path)["categories"] == list(DEFAULT_CATEGORIES)
        assert os.stat(config_path).st_mode & 0o777 == 0o600
