"""Tests for ShopSettings — unified settings with TOML source."""

from pathlib import Path

import pytest

from shopfront.config.settings import ShopSettings


class TestShopSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = ShopSettings.from_cli(cwd=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.cache is True
        assert settings.controller == {}

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ShopSettings.from_cli(cwd=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "shopfront.toml"
        toml.write_text('cache = false\n[controller.frontend.supplier]\nname = "Custom"\n')
        settings = ShopSettings.from_cli(cwd=tmp_path)
        assert settings.cache is False
        assert settings.controller["frontend"]["supplier"]["name"] == "Custom"
        assert settings.config_path == toml

    def test_unknown_top_level_keys_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "shopfront.toml").write_text("[unrelated]\nvalue = 1\n")
        settings = ShopSettings.from_cli(cwd=tmp_path)
        assert settings.controller == {}

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[controller.frontend.common]\nmax-size = 10\n")
        settings = ShopSettings.from_cli(config_path=str(custom), cwd=tmp_path)
        assert settings.config_path == custom
        assert settings.controller["frontend"]["common"]["max-size"] == 10

    def test_invalid_toml_raises_click_exception(self, tmp_path: Path) -> None:
        import click

        (tmp_path / "shopfront.toml").write_text("[broken\n")
        with pytest.raises(click.ClickException):
            ShopSettings.from_cli(cwd=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ShopSettings.from_cli(cwd=tmp_path, json_output=True, verbose=True, log_json=True)
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.log_json is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "shopfront.toml").write_text("cache = false\n")
        monkeypatch.setenv("SHOPFRONT_CACHE", "true")
        settings = ShopSettings.from_cli(cwd=tmp_path)
        assert settings.cache is True

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "shopfront.toml").write_text("verbose = true\n")
        settings = ShopSettings.from_cli(cwd=tmp_path, verbose=False)
        assert settings.verbose is False


class TestConfigStore:
    def test_store_rooted_above_controller(self, tmp_path: Path) -> None:
        (tmp_path / "shopfront.toml").write_text(
            '[controller.frontend.common.decorators]\ndefault = ["Log"]\n'
        )
        store = ShopSettings.from_cli(cwd=tmp_path).config_store()
        assert store.get("controller/frontend/common/decorators/default") == ["Log"]

    def test_store_is_independent(self, tmp_path: Path) -> None:
        settings = ShopSettings.from_cli(cwd=tmp_path)
        store = settings.config_store()
        store.set("controller/frontend/supplier/name", "Custom")
        assert settings.config_store().get("controller/frontend/supplier/name") is None
