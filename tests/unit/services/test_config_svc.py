"""Tests for config_svc.py."""

from __future__ import annotations

import pytest

from liveeventops.services.infrastructure import config_svc
from liveeventops.services.infrastructure.config_svc import ConfigService

_ENV_VARS = (
    config_svc.CONFIG_PATH_ENV,
    "AZURE_SUBSCRIPTION_ID",
    "AZURE_RESOURCE_GROUP",
    "LOG_ANALYTICS_WORKSPACE",
    "LOG_ANALYTICS_WORKSPACE_NAME",
    "WEBHOOK_URL",
    "LEO_RESOURCE_GROUP",
    "LEO_WINDOW_MINUTES",
    "LEO_POLLING_MAX_ATTEMPTS",
    "LEO_FLEET_MAX_WORKERS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No stray env vars, no system or working-directory config files."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_svc, "SYSTEM_CONFIG_PATH", str(tmp_path / "etc" / "config.yaml"))
    monkeypatch.chdir(tmp_path)


def _write_yaml(path, text: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestComposition:
    @pytest.mark.unit
    def test_defaults(self):
        cfg = ConfigService().make_diagnostics_config()

        assert cfg.resource_group is None
        assert cfg.window_minutes == 60
        assert cfg.polling.max_attempts == 60
        assert cfg.key_vault.name_prefix == "liveeventops-kv"
        assert cfg.output_dir.startswith("./diagnostics-")

    @pytest.mark.unit
    def test_working_directory_yaml(self, tmp_path):
        _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: from-cwd\npolling:\n  max_attempts: 7\n")

        service = ConfigService()

        assert service.get("resource_group") == "from-cwd"
        assert service.get("polling.max_attempts") == 7
        # Sibling keys survive the deep merge
        assert service.get("polling.timeout_s") == 600

    @pytest.mark.unit
    def test_explicit_path_beats_working_directory(self, tmp_path):
        _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: from-cwd\n")
        explicit = _write_yaml(tmp_path / "custom.yaml", "resource_group: from-explicit\n")

        assert ConfigService(config_path=str(explicit)).get("resource_group") == "from-explicit"

    @pytest.mark.unit
    def test_config_path_env(self, tmp_path, monkeypatch):
        path = _write_yaml(tmp_path / "env.yaml", "window_minutes: 15\n")
        monkeypatch.setenv(config_svc.CONFIG_PATH_ENV, str(path))

        assert ConfigService().make_diagnostics_config().window_minutes == 15

    @pytest.mark.unit
    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: from-yaml\n")
        monkeypatch.setenv("LEO_RESOURCE_GROUP", "from-env")
        monkeypatch.setenv("LEO_POLLING_MAX_ATTEMPTS", "3")

        cfg = ConfigService().make_diagnostics_config()

        assert cfg.resource_group == "from-env"
        assert cfg.polling.max_attempts == 3

    @pytest.mark.unit
    def test_provider_vars_fill_only_unset_fields(self, tmp_path, monkeypatch):
        _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: from-yaml\n")
        monkeypatch.setenv("AZURE_RESOURCE_GROUP", "from-provider")
        monkeypatch.setenv("LOG_ANALYTICS_WORKSPACE", "law-1")

        cfg = ConfigService().make_diagnostics_config()

        assert cfg.resource_group == "from-yaml"
        assert cfg.log_analytics_workspace == "law-1"

    @pytest.mark.unit
    def test_overrides_win_and_none_is_ignored(self, monkeypatch):
        monkeypatch.setenv("LEO_RESOURCE_GROUP", "from-env")

        service = ConfigService(overrides={"resource_group": "from-flag", "output_dir": None, "key_vault": {"name": None}})
        cfg = service.make_diagnostics_config()

        assert cfg.resource_group == "from-flag"
        assert cfg.key_vault.name is None
        assert cfg.output_dir.startswith("./diagnostics-")

    @pytest.mark.unit
    def test_invalid_yaml_is_ignored(self, tmp_path):
        _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: [unclosed\n")
        assert ConfigService().get("resource_group") is None

    @pytest.mark.unit
    def test_cached_until_reload(self, tmp_path):
        path = _write_yaml(tmp_path / "config" / "config.yaml", "resource_group: first\n")
        service = ConfigService()
        assert service.get("resource_group") == "first"

        path.write_text("resource_group: second\n", encoding="utf-8")
        assert service.get("resource_group") == "first"
        service.reload()
        assert service.get("resource_group") == "second"


class TestValidation:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "overrides",
        [
            {"window_minutes": 0},
            {"fleet_max_workers": 0},
            {"polling": {"max_attempts": 0}},
            {"polling": {"poll_interval_s": -1}},
            {"az_timeout_s": 0},
        ],
    )
    def test_out_of_range(self, overrides):
        with pytest.raises(ValueError):
            ConfigService(overrides=overrides).make_diagnostics_config()

    @pytest.mark.unit
    def test_non_numeric_env_value(self, monkeypatch):
        monkeypatch.setenv("LEO_WINDOW_MINUTES", "soon")
        with pytest.raises(ValueError, match="invalid configuration"):
            ConfigService().make_diagnostics_config()
