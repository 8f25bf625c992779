"""Comparison engine tests"""
import logging

import numpy as np
import pytest

from numtest.compare import (
    PASS,
    AbsoluteTolerance,
    CompareEngine,
    DecimalPlaces,
    Exact,
    PolicyKind,
    RelativeTolerance,
    ScalarMismatch,
    ValueMismatch,
    compare,
    make_policy,
)
from numtest.core.config import GlobalConfig, ToleranceConfig, set_config
from numtest.core.errors import PolicyError, ShapeFamilyError


class TestPolicies:
    """Policy construction"""

    @pytest.mark.parametrize("tol", [-1e-9, -1.0, float("nan")])
    def test_invalid_tolerance(self, tol):
        with pytest.raises(PolicyError):
            AbsoluteTolerance(tol)
        with pytest.raises(PolicyError):
            RelativeTolerance(tol)

    @pytest.mark.parametrize("places", [-1, 1.5, True, "2"])
    def test_invalid_places(self, places):
        with pytest.raises(PolicyError):
            DecimalPlaces(places)

    def test_non_numeric_tolerance(self):
        with pytest.raises(PolicyError, match="real number"):
            AbsoluteTolerance("0.1")

    def test_policy_is_a_value_error(self):
        with pytest.raises(ValueError):
            RelativeTolerance(-0.5)

    def test_int_tolerance_normalised(self):
        policy = AbsoluteTolerance(1)
        assert isinstance(policy.tol, float)
        assert policy == AbsoluteTolerance(1.0)

    def test_params(self):
        assert Exact().param is None
        assert DecimalPlaces(3).param == 3
        assert RelativeTolerance(0.5).param == 0.5

    def test_immutable(self):
        policy = AbsoluteTolerance(0.1)
        with pytest.raises(AttributeError):
            policy.tol = 0.2

    @pytest.mark.parametrize(
        "kind, param, expected",
        [
            ("exact", None, Exact()),
            (PolicyKind.DECIMAL, 2, DecimalPlaces(2)),
            ("atol", 1e-6, AbsoluteTolerance(1e-6)),
            ("rtol", 0.01, RelativeTolerance(0.01)),
        ],
    )
    def test_make_policy(self, kind, param, expected):
        assert make_policy(kind, param) == expected

    def test_make_policy_unknown(self):
        with pytest.raises(PolicyError, match="Unknown policy kind"):
            make_policy("fuzzy", 0.1)

    def test_make_policy_missing_param(self):
        with pytest.raises(PolicyError, match="needs a parameter"):
            make_policy("atol")


class TestDispatch:
    """Scalar vs array dispatch"""

    def test_scalars(self):
        verdict = compare(2.0, 2.06, DecimalPlaces(1))
        assert isinstance(verdict, ScalarMismatch)

    def test_containers(self):
        verdict = compare([1.0, 2.0], np.array([1.0, 2.5]), AbsoluteTolerance(0.1))
        assert isinstance(verdict, ValueMismatch)
        assert verdict.index == 1

    def test_numpy_scalars(self):
        assert compare(np.float64(1.5), 1.5, Exact()) == PASS

    def test_scalar_vs_container(self):
        with pytest.raises(ShapeFamilyError, match="scalar with a container"):
            compare(1.0, [1.0], Exact())

    def test_zero_dim_array_is_a_scalar(self):
        assert compare(np.float64(1.0), np.array(1.0), Exact()) == PASS

    @pytest.mark.parametrize("a, b", [(1.0, 2.0), ([1.0], [2.0])])
    def test_rejects_non_policy(self, a, b):
        with pytest.raises(PolicyError, match="TolerancePolicy"):
            compare(a, b, "exact")


class TestDefaultPolicy:
    """Policy taken from configuration"""

    def test_default_is_exact(self):
        assert CompareEngine().default_policy() == Exact()
        assert not compare(1.0, 1.0 + 1e-12)

    def test_global_config(self):
        set_config(tolerance=ToleranceConfig(default_policy="atol", atol=1e-6))
        assert compare(1.0, 1.0 + 1e-9)
        assert not compare(1.0, 1.1)

    def test_engine_config(self):
        engine = CompareEngine(GlobalConfig(tolerance=ToleranceConfig(default_policy="decimal", decimal=1)))
        assert engine.default_policy() == DecimalPlaces(1)
        assert engine.compare(2.0, 2.04)

    def test_explicit_policy_wins(self):
        set_config(tolerance=ToleranceConfig(default_policy="atol", atol=1.0))
        assert not compare(1.0, 1.5, Exact())


class TestLogging:
    """Verdict logging"""

    def test_debug_by_default(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="numtest.compare.engine"):
            compare(1.0, 2.0, Exact(), name="pair")
        records = [r for r in caplog.records if r.name == "numtest.compare.engine"]
        assert any("pair: FAIL" in r.getMessage() and r.levelno == logging.DEBUG for r in records)

    def test_info_when_enabled(self, caplog):
        set_config(log_verdicts=True)
        with caplog.at_level(logging.INFO, logger="numtest.compare.engine"):
            compare([1.0], [1.0], Exact(), name="vec")
        assert any(
            r.getMessage() == "vec: PASS" and r.levelno == logging.INFO for r in caplog.records
        )
