# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML files and environment variables
#  - Caches composed config for the lifetime of a CLI invocation
#  - Builds the validated DiagnosticsConfig handed to workflows
# ======================================================================

from __future__ import annotations

import copy
import logging
import os
from typing import Any

import yaml

from liveeventops.helpers.dto.config_dto import (
    AlertSettings,
    ConfigResult,
    DiagnosticsConfig,
    KeyVaultSettings,
    PollingPolicy,
)
from liveeventops.helpers.time_helper import output_dir_stamp

ENV_PREFIX = "LEO_"
CONFIG_PATH_ENV = "LIVEEVENTOPS_CONFIG_PATH"
SYSTEM_CONFIG_PATH = "/etc/liveeventops/config.yaml"

# Variables used by the deployment scripts; they only fill fields that are still unset.
PROVIDER_ENV_VARS: tuple[tuple[str, str], ...] = (
    ("AZURE_SUBSCRIPTION_ID", "subscription_id"),
    ("AZURE_RESOURCE_GROUP", "resource_group"),
    ("LOG_ANALYTICS_WORKSPACE", "log_analytics_workspace"),
    ("LOG_ANALYTICS_WORKSPACE_NAME", "log_analytics_workspace"),
    ("WEBHOOK_URL", "webhook_url"),
)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigService:
    """
    Service for loading and caching LiveEventOps configuration.

    Loads config from multiple sources (defaults → YAML → env → overrides),
    caches the result, and converts it into the typed DiagnosticsConfig.
    """

    def __init__(self, config_path: str | None = None, overrides: dict[str, Any] | None = None) -> None:
        """
        Args:
            config_path: Explicit YAML path (takes the place of $LIVEEVENTOPS_CONFIG_PATH)
            overrides: Caller overrides (CLI flags); None values are ignored
        """
        self._config_path = config_path
        self._overrides = _drop_none(overrides or {})
        self._config: dict[str, Any] | None = None
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> ConfigResult:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            ConfigResult wrapping the complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return ConfigResult(config=self._config)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> ConfigService().get("polling.max_attempts")
            60
            >>> ConfigService().get("missing.key", "x")
            'x'
        """
        node: Any = self.get_config().config
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> ConfigResult:
        """Force reload configuration from all sources."""
        self._logger.info("[config_svc] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def make_diagnostics_config(self) -> DiagnosticsConfig:
        """
        Build the validated configuration struct handed to workflows.

        Raises:
            ValueError: A numeric setting is out of range or not a number
        """
        cfg = self.get_config().config
        polling = cfg["polling"]
        key_vault = cfg["key_vault"]
        alerts = cfg["alerts"]

        try:
            result = DiagnosticsConfig(
                output_dir=str(cfg.get("output_dir") or f"./diagnostics-{output_dir_stamp()}"),
                resource_group=_opt_str(cfg.get("resource_group")),
                subscription_id=_opt_str(cfg.get("subscription_id")),
                log_analytics_workspace=_opt_str(cfg.get("log_analytics_workspace")),
                webhook_url=_opt_str(cfg.get("webhook_url")),
                window_minutes=int(cfg["window_minutes"]),
                metric_interval=str(cfg["metric_interval"]),
                az_timeout_s=float(cfg["az_timeout_s"]),
                notification_timeout_s=float(cfg["notification_timeout_s"]),
                fleet_max_workers=int(cfg["fleet_max_workers"]),
                polling=PollingPolicy(
                    timeout_s=float(polling["timeout_s"]),
                    poll_interval_s=float(polling["poll_interval_s"]),
                    max_attempts=int(polling["max_attempts"]),
                ),
                key_vault=KeyVaultSettings(
                    name=_opt_str(key_vault.get("name")),
                    name_prefix=str(key_vault["name_prefix"]),
                ),
                alerts=AlertSettings(
                    action_group=str(alerts["action_group"]),
                    webhook_name=str(alerts["webhook_name"]),
                ),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid configuration: {e}") from e

        _validate(result)
        return result

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/liveeventops/config.yaml (if present)
          3) ./config/config.yaml
          4) explicit config path, else $LIVEEVENTOPS_CONFIG_PATH
          5) Environment variables (LEO_* and the deployment-script variables)
          6) overrides dict passed in

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml(SYSTEM_CONFIG_PATH))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        explicit = self._config_path or os.getenv(CONFIG_PATH_ENV)
        if explicit:
            if not os.path.exists(explicit):
                self._logger.warning(f"[config_svc] Config file not found: {explicit}")
            self._deep_merge(cfg, self._load_yaml(explicit))

        self._apply_env_overrides(cfg)

        if self._overrides:
            self._deep_merge(cfg, copy.deepcopy(self._overrides))

        self._logger.debug("[config_svc] compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """
        Base defaults; all fields present so no KeyErrors downstream.
        """
        return {
            # Azure scope
            "resource_group": None,
            "subscription_id": None,
            "log_analytics_workspace": None,
            # Notifications
            "webhook_url": None,
            "notification_timeout_s": 10,
            # Output (None resolves to ./diagnostics-<timestamp>)
            "output_dir": None,
            # Signal collection
            "window_minutes": 60,
            "metric_interval": "PT5M",
            "az_timeout_s": 120,
            "fleet_max_workers": 1,
            # Power-state confirmation polling
            "polling": {
                "timeout_s": 600,
                "poll_interval_s": 10,
                "max_attempts": 60,
            },
            "key_vault": {
                "name": None,
                "name_prefix": "liveeventops-kv",
            },
            "alerts": {
                "action_group": "liveeventops-incident-response",
                "webhook_name": "github-actions-webhook",
            },
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"[config_svc] Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._logger.warning(f"[config_svc] Ignoring config file {path}: top level is not a mapping")
            return {}
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Map LEO_<FIELD> and LEO_<SECTION>_<FIELD> onto the config, coercing to
        the type of the current value, then fill unset fields from the
        deployment-script variables.
        """
        for key, current in list(cfg.items()):
            if isinstance(current, dict):
                for sub_key, sub_current in current.items():
                    raw = os.getenv(f"{ENV_PREFIX}{key}_{sub_key}".upper())
                    if raw is not None:
                        current[sub_key] = _coerce(raw, sub_current)
            else:
                raw = os.getenv(f"{ENV_PREFIX}{key}".upper())
                if raw is not None:
                    cfg[key] = _coerce(raw, current)

        for env_name, key in PROVIDER_ENV_VARS:
            raw = os.getenv(env_name)
            if raw and not cfg.get(key):
                cfg[key] = raw


def _coerce(raw: str, current: Any) -> Any:
    if isinstance(current, bool):
        return raw.strip().lower() in _TRUE_VALUES
    if isinstance(current, int):
        try:
            return int(raw)
        except ValueError:
            return raw
    if isinstance(current, float):
        try:
            return float(raw)
        except ValueError:
            return raw
    return raw or None


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for k, v in values.items():
        if isinstance(v, dict):
            nested = _drop_none(v)
            if nested:
                cleaned[k] = nested
        elif v is not None:
            cleaned[k] = v
    return cleaned


def _opt_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _validate(cfg: DiagnosticsConfig) -> None:
    if cfg.window_minutes <= 0:
        raise ValueError(f"window_minutes must be > 0, got {cfg.window_minutes}")
    if cfg.az_timeout_s <= 0:
        raise ValueError(f"az_timeout_s must be > 0, got {cfg.az_timeout_s}")
    if cfg.fleet_max_workers < 1:
        raise ValueError(f"fleet_max_workers must be >= 1, got {cfg.fleet_max_workers}")
    if cfg.polling.timeout_s <= 0:
        raise ValueError(f"polling.timeout_s must be > 0, got {cfg.polling.timeout_s}")
    if cfg.polling.poll_interval_s <= 0:
        raise ValueError(f"polling.poll_interval_s must be > 0, got {cfg.polling.poll_interval_s}")
    if cfg.polling.max_attempts < 1:
        raise ValueError(f"polling.max_attempts must be >= 1, got {cfg.polling.max_attempts}")
