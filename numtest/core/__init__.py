"""Core module"""
from numtest.core.config import (
    GlobalConfig,
    ToleranceConfig,
    get_config,
    load_config,
    reset_config,
    save_config,
    set_config,
)
from numtest.core.errors import (
    ConfigError,
    NumtestError,
    PolicyError,
    ShapeFamilyError,
    UnsupportedContainerError,
    UnsupportedValueError,
)
from numtest.core.precision import FLOAT32, FLOAT64, FloatPrecision, precision_of

__all__ = [
    # config
    "GlobalConfig",
    "ToleranceConfig",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
    "save_config",
    # errors
    "NumtestError",
    "PolicyError",
    "ShapeFamilyError",
    "UnsupportedContainerError",
    "UnsupportedValueError",
    "ConfigError",
    # precision
    "FloatPrecision",
    "FLOAT32",
    "FLOAT64",
    "precision_of",
]
