"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from geo6.common.constants import DEFAULT_LIMIT, ENV_CLIENT_ID, ENV_PRIVATE_KEY
from geo6.common.errors import ConfigError
from geo6.common.http import RetryConfig, TimeoutConfig
from geo6.common.schema import validate_private_key, validate_provider_config


@dataclass(frozen=True)
class ProviderConfig:
    endpoint_url: str
    client_id: str
    private_key: str
    timeout: TimeoutConfig
    retry: RetryConfig
    referer: str | None = None
    rate_limit_per_sec: float | None = None
    default_locale: str | None = None
    limit: int = DEFAULT_LIMIT


def read_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def _deep_merge(base: Any, overlay: Any) -> Any:
    """Overlay mappings key by key; any other overlay value replaces the base."""
    if not (isinstance(base, dict) and isinstance(overlay, dict)):
        return overlay
    merged = {**base, **overlay}
    for key in base.keys() & overlay.keys():
        merged[key] = _deep_merge(base[key], overlay[key])
    return merged


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    return _deep_merge(base, overlay)


def _credential(explicit: str | None, cfg_value: str | None, env: Mapping[str, str], env_key: str) -> str:
    for candidate in (explicit, env.get(env_key), cfg_value):
        if candidate:
            return str(candidate)
    raise ConfigError(f"Missing credential: set {env_key} or pass it explicitly")


def build_provider_config(
    cfg: dict,
    *,
    client_id: str | None = None,
    private_key: str | None = None,
    env: Mapping[str, str] | None = None,
) -> ProviderConfig:
    env = os.environ if env is None else env
    credentials = cfg.get("credentials") or {}
    resolved_key = _credential(private_key, credentials.get("private_key"), env, ENV_PRIVATE_KEY)

    retry_cfg = cfg["retry"]
    return ProviderConfig(
        endpoint_url=cfg["endpoint_url"],
        client_id=_credential(client_id, credentials.get("client_id"), env, ENV_CLIENT_ID),
        private_key=validate_private_key(resolved_key),
        timeout=TimeoutConfig(connect=float(cfg["timeout"]["connect"]), read=float(cfg["timeout"]["read"])),
        retry=RetryConfig(
            max_attempts=int(retry_cfg["max_attempts"]),
            multiplier=float(retry_cfg.get("multiplier", RetryConfig.multiplier)),
            max_wait=float(retry_cfg.get("max_wait", RetryConfig.max_wait)),
        ),
        referer=cfg.get("referer") or None,
        rate_limit_per_sec=cfg.get("rate_limit_per_sec"),
        default_locale=cfg.get("default_locale") or None,
        limit=int(cfg.get("limit") or DEFAULT_LIMIT),
    )


def load_provider_config(
    config_path: Path,
    *,
    overlay_path: Path | None = None,
    allow_unknown: bool = False,
    client_id: str | None = None,
    private_key: str | None = None,
    env: Mapping[str, str] | None = None,
) -> ProviderConfig:
    cfg = validate_provider_config(
        _load_yaml_with_overlay(config_path, overlay_path),
        allow_unknown=allow_unknown,
    )
    return build_provider_config(cfg, client_id=client_id, private_key=private_key, env=env)
