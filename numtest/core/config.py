"""Global configuration

Holds the default tolerance policy used when a comparison is made without an
explicit one. The configuration can be set programmatically or loaded from a YAML
file such as::

    tolerance:
      default_policy: atol
      decimal: 6
      atol: 1.0e-9
      rtol: 1.0e-6
    log_verdicts: true
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from numtest.core.constants import (
    DEFAULT_ATOL,
    DEFAULT_CONFIG_FILE,
    DEFAULT_DECIMAL,
    DEFAULT_POLICY,
    DEFAULT_RTOL,
    POLICY_KINDS,
)
from numtest.core.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ToleranceConfig:
    """Default tolerance settings"""

    default_policy: str = DEFAULT_POLICY  # exact | decimal | atol | rtol
    decimal: int = DEFAULT_DECIMAL
    atol: float = DEFAULT_ATOL
    rtol: float = DEFAULT_RTOL

    def validate(self) -> None:
        if self.default_policy not in POLICY_KINDS:
            raise ConfigError(
                f"tolerance.default_policy must be one of {POLICY_KINDS}, "
                f"got '{self.default_policy}'"
            )
        if isinstance(self.decimal, bool) or not isinstance(self.decimal, int) or self.decimal < 0:
            raise ConfigError(
                f"tolerance.decimal must be a non-negative integer, got {self.decimal!r}"
            )
        for name in ("atol", "rtol"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"tolerance.{name} must be a number, got {value!r}")
            if math.isnan(value) or value < 0:
                raise ConfigError(f"tolerance.{name} must be non-negative, got {value!r}")

    def param(self):
        """Parameter that goes with ``default_policy`` (None for exact)"""
        return {
            "exact": None,
            "decimal": self.decimal,
            "atol": self.atol,
            "rtol": self.rtol,
        }[self.default_policy]


@dataclass
class GlobalConfig:
    """Global configuration"""

    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    log_verdicts: bool = False  # log every verdict at INFO instead of DEBUG

    def validate(self) -> None:
        """Validate the configuration"""
        if not isinstance(self.tolerance, ToleranceConfig):
            raise ConfigError(
                f"tolerance must be a ToleranceConfig, got {type(self.tolerance).__name__}"
            )
        self.tolerance.validate()
        if not isinstance(self.log_verdicts, bool):
            raise ConfigError(f"log_verdicts must be a boolean, got {self.log_verdicts!r}")

    def to_dict(self) -> dict:
        """Serialise to a plain dict (for writing the YAML file)."""
        return {
            "tolerance": {
                "default_policy": self.tolerance.default_policy,
                "decimal": self.tolerance.decimal,
                "atol": self.tolerance.atol,
                "rtol": self.tolerance.rtol,
            },
            "log_verdicts": self.log_verdicts,
        }


# Global instance (thread safe)
_config_lock = threading.Lock()
_global_config: Optional[GlobalConfig] = None


def get_config() -> GlobalConfig:
    """Return the global configuration"""
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        if _global_config is None:
            _global_config = GlobalConfig()
        return _global_config


def set_config(
    tolerance: ToleranceConfig = None,
    log_verdicts: bool = None,
    config: GlobalConfig = None,
) -> GlobalConfig:
    """
    Update the global configuration

    Args:
        tolerance: default tolerance settings (ToleranceConfig)
        log_verdicts: log verdicts at INFO
        config: replace the whole configuration (e.g. one returned by load_config)

    Example:
        set_config(tolerance=ToleranceConfig(default_policy="atol", atol=1e-6))
        set_config(config=load_config("numtest.yaml"))

    Raises:
        ConfigError: the resulting configuration is invalid; the previous one is kept
    """
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        current = config or _global_config or GlobalConfig()
        candidate = GlobalConfig(
            tolerance=tolerance if tolerance is not None else current.tolerance,
            log_verdicts=log_verdicts if log_verdicts is not None else current.log_verdicts,
        )
        candidate.validate()
        _global_config = candidate
        return _global_config


def reset_config():
    """Reset to the default configuration"""
    global _global_config  # pylint: disable=global-statement
    with _config_lock:
        _global_config = GlobalConfig()


# ---------------------------------------------------------------------------
# YAML file
# ---------------------------------------------------------------------------

def _parse_tolerance(raw) -> ToleranceConfig:
    if raw is None:
        return ToleranceConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"'tolerance' must be a mapping, got {type(raw).__name__}")
    return ToleranceConfig(
        default_policy=str(raw.get("default_policy", DEFAULT_POLICY)),
        decimal=raw.get("decimal", DEFAULT_DECIMAL),
        atol=raw.get("atol", DEFAULT_ATOL),
        rtol=raw.get("rtol", DEFAULT_RTOL),
    )


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> GlobalConfig:
    """Load and validate a numtest YAML configuration file.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed :class:`GlobalConfig`. It is not installed globally; pass it to
        :func:`set_config` for that.

    Raises:
        ConfigError: If the file is missing, malformed or holds invalid values.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Configuration file not found: {p}")

    try:
        with open(p, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {p}, got {type(data).__name__}")

    cfg = GlobalConfig(
        tolerance=_parse_tolerance(data.get("tolerance")),
        log_verdicts=data.get("log_verdicts", False),
    )
    cfg.validate()
    logger.info("Loaded numtest config from %s (default policy: %s)", p, cfg.tolerance.default_policy)
    return cfg


def save_config(cfg: GlobalConfig, path: str | Path = DEFAULT_CONFIG_FILE) -> None:
    """Write the config to a YAML file."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.dump(cfg.to_dict(), fh, default_flow_style=False, sort_keys=False)
