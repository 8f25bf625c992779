"""Shared fixtures for numtest tests."""

from __future__ import annotations

import numpy as np
import pytest

from numtest.core.config import reset_config


@pytest.fixture(autouse=True)
def _default_config():
    """Every test starts and ends with the default global configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture()
def grid_3x3() -> np.ndarray:
    """3x3 float grid, row-major."""
    return np.array(
        [
            [1.1, 2.2, 3.3],
            [4.4, 5.5, 6.6],
            [7.7, 8.8, 9.9],
        ]
    )


@pytest.fixture()
def config_yaml(tmp_path):
    """Write a numtest.yaml and return its path."""
    path = tmp_path / "numtest.yaml"
    path.write_text(
        "tolerance:\n"
        "  default_policy: atol\n"
        "  decimal: 4\n"
        "  atol: 1.0e-3\n"
        "  rtol: 1.0e-6\n"
        "log_verdicts: true\n",
        encoding="utf-8",
    )
    return path
