"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from shopfront.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, load_config
from shopfront.errors import ConfigurationError


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[controller.frontend.supplier]\nname = \"Standard\"\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_loads_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(
            "[controller.frontend.common.decorators]\n"
            'default = ["Log"]\n'
            "[controller.frontend.supplier]\n"
            'name = "Custom"\n'
        )
        store = load_config(config_file)
        assert store.get("controller/frontend/common/decorators/default") == ["Log"]
        assert store.get("controller/frontend/supplier/name") == "Custom"

    def test_returns_empty_store_when_no_file(self, tmp_path: Path) -> None:
        store = load_config(cwd=tmp_path)
        assert store.to_dict() == {}

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert load_config(config_file).to_dict() == {}

    def test_ignores_other_tables(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('json_output = true\n[controller.frontend.supplier]\nname = "Custom"\n')
        assert load_config(config_file).to_dict() == {"controller": {"frontend": {"supplier": {"name": "Custom"}}}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[controller\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)
        assert exc_info.value.code == 400
        assert str(config_file) in exc_info.value.errors

    def test_controller_must_be_table(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('controller = "Standard"\n')
        with pytest.raises(ConfigurationError):
            load_config(config_file)
