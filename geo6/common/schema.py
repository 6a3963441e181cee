"""Minimal strict schema for the provider YAML config."""

from __future__ import annotations

import re

from geo6.common.errors import ConfigError

_CRYPT_SALT_RE = re.compile(r"^[./0-9A-Za-z]*$")

TOP_REQUIRED = {"endpoint_url", "timeout", "retry"}
TOP_KNOWN = TOP_REQUIRED | {"referer", "rate_limit_per_sec", "default_locale", "limit", "credentials"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive(value: object, ctx: str) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number, got {value!r}")


def validate_provider_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    if not isinstance(cfg, dict):
        raise ConfigError("Provider config must be a mapping")
    _assert_required_keys(cfg, TOP_REQUIRED, "provider config")
    _assert_no_unknown_keys(cfg, TOP_KNOWN, "provider config", allow_unknown)

    if not str(cfg["endpoint_url"]).startswith(("http://", "https://")):
        raise ConfigError(f"endpoint_url must be an http(s) URL, got {cfg['endpoint_url']!r}")

    _assert_required_keys(cfg["timeout"], {"connect", "read"}, "timeout")
    _assert_positive(cfg["timeout"]["connect"], "timeout.connect")
    _assert_positive(cfg["timeout"]["read"], "timeout.read")

    _assert_required_keys(cfg["retry"], {"max_attempts"}, "retry")
    if not isinstance(cfg["retry"]["max_attempts"], int) or cfg["retry"]["max_attempts"] < 1:
        raise ConfigError("retry.max_attempts must be an integer >= 1")

    if cfg.get("rate_limit_per_sec") is not None:
        _assert_positive(cfg["rate_limit_per_sec"], "rate_limit_per_sec")
    if cfg.get("limit") is not None and (not isinstance(cfg["limit"], int) or cfg["limit"] < 1):
        raise ConfigError("limit must be an integer >= 1")

    return cfg


def validate_private_key(private_key: str) -> str:
    # The key is used verbatim as a crypt(3) salt.
    if not _CRYPT_SALT_RE.match(private_key):
        raise ConfigError("Private key may only contain the characters ./0-9A-Za-z")
    return private_key
