"""
Configuration loading, validation, and typed models.

Supports:
  - Optional YAML config file (config/config.yaml)
  - Environment variable override for the verification secret (JWT_DECODE_SECRET)
  - CLI argument merging via merge_cli_overrides()

The config file is optional: when the default path does not exist the
built-in defaults are used.  An explicitly passed path must exist.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

import yaml

from .signer import EXAMPLE_SECRET
from .verifier import SUPPORTED_ALGORITHMS

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "PROJECT_ROOT",
    "ENV_SECRET",
    "ConfigError",
    "VerificationConfig",
    "ExampleConfig",
    "OutputConfig",
    "LoggingConfig",
    "AppConfig",
    "load_config",
    "merge_cli_overrides",
]

logger = logging.getLogger(__name__)

# Project root directory (tools/jwt-decode)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.yaml")

ENV_SECRET = "JWT_DECODE_SECRET"

_OUTPUT_FORMATS = ("text", "json")


# ---------------------------------------------------------------------------
# Typed configuration models
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


@dataclass(frozen=True)
class VerificationConfig:
    secret: str = ""
    leeway_seconds: int = 0

    def __repr__(self) -> str:
        """Redact secret in repr to prevent accidental logging."""
        shown = "***redacted***" if self.secret else ""
        return f"VerificationConfig(secret={shown!r}, leeway_seconds={self.leeway_seconds})"


@dataclass(frozen=True)
class ExampleConfig:
    secret: str = EXAMPLE_SECRET
    algorithm: str = "HS256"
    lifetime_seconds: int = 3600

    def __repr__(self) -> str:
        return (
            f"ExampleConfig(secret='***redacted***', algorithm={self.algorithm!r}, "
            f"lifetime_seconds={self.lifetime_seconds})"
        )


@dataclass(frozen=True)
class OutputConfig:
    format: str = "text"
    indent: int = 4


@dataclass(frozen=True)
class LoggingConfig:
    file: str = ""
    verbose: bool = False


@dataclass(frozen=True)
class AppConfig:
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    example: ExampleConfig = field(default_factory=ExampleConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(value).__name__}")
    return value


def _int(section: dict, key: str, default: int, label: str) -> int:
    value = section.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{label} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigError(f"{label} must not be negative, got {value}")
    return value


def _bool(section: dict, key: str, default: bool, label: str) -> bool:
    value = section.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"{label} must be true or false, got {value!r}")
    return value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load and validate the YAML configuration file.

    With no *config_path* the default location is tried and silently
    skipped when absent.  ``JWT_DECODE_SECRET`` takes precedence over
    ``verification.secret``.

    Raises:
        ConfigError: If an explicit config file is missing, or any value is invalid.
    """
    explicit = config_path is not None
    path = Path(config_path if explicit else DEFAULT_CONFIG_PATH)

    raw: dict = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Could not parse config file {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(
                f"Invalid config file format: expected YAML mapping, got {type(loaded).__name__}"
            )
        raw = loaded or {}
    elif explicit:
        raise ConfigError(
            f"Config file not found: {config_path}\n"
            "Copy config/config.yaml.example to config/config.yaml and adjust it."
        )

    # --- Verification (env var > YAML) ---
    ver = _section(raw, "verification")
    secret = os.environ.get(ENV_SECRET) or ver.get("secret", "") or ""
    if not isinstance(secret, str):
        raise ConfigError("verification.secret must be a string")
    leeway = _int(ver, "leeway_seconds", 0, "verification.leeway_seconds")

    # --- Example token ---
    ex = _section(raw, "example")
    ex_secret = ex.get("secret", EXAMPLE_SECRET) or EXAMPLE_SECRET
    ex_alg = ex.get("algorithm", "HS256") or "HS256"
    if ex_alg not in SUPPORTED_ALGORITHMS:
        raise ConfigError(
            f"Invalid example.algorithm: {ex_alg!r}. Use one of {', '.join(SUPPORTED_ALGORITHMS)}."
        )
    lifetime = _int(ex, "lifetime_seconds", 3600, "example.lifetime_seconds")

    # --- Output ---
    out = _section(raw, "output")
    fmt = out.get("format", "text") or "text"
    if fmt not in _OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {fmt!r}. Use 'text' or 'json'.")
    indent = _int(out, "indent", 4, "output.indent")

    # --- Logging ---
    log = _section(raw, "logging")

    config = AppConfig(
        verification=VerificationConfig(secret=secret, leeway_seconds=leeway),
        example=ExampleConfig(secret=str(ex_secret), algorithm=ex_alg, lifetime_seconds=lifetime),
        output=OutputConfig(format=fmt, indent=indent),
        logging=LoggingConfig(
            file=log.get("file", "") or "",
            verbose=_bool(log, "verbose", False, "logging.verbose"),
        ),
    )

    logger.debug(
        "Config loaded from %s (secret from %s)",
        path if path.exists() else "defaults",
        "env" if os.environ.get(ENV_SECRET) else ("file" if secret else "none"),
    )
    return config


# ---------------------------------------------------------------------------
# CLI override merging
# ---------------------------------------------------------------------------

def merge_cli_overrides(cfg: AppConfig, args) -> AppConfig:
    """Merge CLI arguments over loaded config, returning a new AppConfig.

    ``args`` is expected to have the attributes produced by the CLI parser:
    secret, secret_env, leeway, json, verbose.  ``None`` / unset values keep
    the configured value.

    Raises:
        ConfigError: If a named secret environment variable is not set.
    """
    verification = cfg.verification

    secret_env = getattr(args, "secret_env", None)
    if secret_env:
        env_value = os.environ.get(secret_env)
        if not env_value:
            raise ConfigError(f"Environment variable {secret_env} is not set or empty.")
        verification = replace(verification, secret=env_value)

    if getattr(args, "secret", None):
        verification = replace(verification, secret=args.secret)

    leeway = getattr(args, "leeway", None)
    if leeway is not None:
        if leeway < 0:
            raise ConfigError(f"--leeway must not be negative, got {leeway}")
        verification = replace(verification, leeway_seconds=leeway)

    output = cfg.output
    if getattr(args, "json", False):
        output = replace(output, format="json")

    log_cfg = cfg.logging
    if getattr(args, "verbose", False):
        log_cfg = replace(log_cfg, verbose=True)

    return replace(cfg, verification=verification, output=output, logging=log_cfg)
