"""
Comparison engine

Chooses the scalar or the array comparator from the inputs and fills in the
default policy from configuration.

Dispatch:
    a         | b         | comparator
    ----------|-----------|---------------------------
    number    | number    | scalar_compare
    container | container | array_compare
    number    | container | ShapeFamilyError
"""

import logging
from typing import Optional

from numtest.core.config import GlobalConfig, get_config
from numtest.core.errors import PolicyError, ShapeFamilyError

from .adapters import is_container
from .array import array_compare
from .report import format_failure
from .scalar import scalar_compare
from .types import TolerancePolicy, Verdict, make_policy

logger = logging.getLogger(__name__)


class CompareEngine:
    """
    Comparison engine

    Usage:
        engine = CompareEngine()
        verdict = engine.compare([1.0, 2.0], np.array([1.0, 2.0]), AbsoluteTolerance(1e-9))
        if not verdict:
            print(format_failure(verdict))
    """

    def __init__(self, config: GlobalConfig = None):
        """
        Args:
            config: configuration; the global one (read at call time) when omitted
        """
        self._config = config

    @property
    def config(self) -> GlobalConfig:
        return self._config if self._config is not None else get_config()

    def default_policy(self) -> TolerancePolicy:
        """Policy from ``config.tolerance``"""
        tolerance = self.config.tolerance
        return make_policy(tolerance.default_policy, tolerance.param())

    def compare(
        self,
        a,
        b,
        policy: Optional[TolerancePolicy] = None,
        name: str = "",
    ) -> Verdict:
        """
        Compare two numbers or two containers

        Args:
            a: number or container
            b: number or container
            policy: tolerance policy (default from config)
            name: label used in log records

        Returns:
            Verdict

        Raises:
            PolicyError: policy is not a TolerancePolicy
            ShapeFamilyError: a number compared with a container
        """
        if policy is None:
            policy = self.default_policy()
        elif not isinstance(policy, TolerancePolicy):
            raise PolicyError(f"Expected a TolerancePolicy, got {type(policy).__name__}")

        a_is_container = is_container(a)
        b_is_container = is_container(b)
        if a_is_container != b_is_container:
            raise ShapeFamilyError(
                f"Cannot compare a {'container' if a_is_container else 'scalar'} "
                f"with a {'container' if b_is_container else 'scalar'}"
            )

        label = name or "values"
        if a_is_container:
            logger.debug("%s: array compare with %s", label, policy.describe())
            verdict = array_compare(a, b, policy)
        else:
            logger.debug("%s: scalar compare with %s", label, policy.describe())
            verdict = scalar_compare(a, b, policy)

        self._log_verdict(label, verdict)
        return verdict

    def _log_verdict(self, label: str, verdict: Verdict) -> None:
        level = logging.INFO if self.config.log_verdicts else logging.DEBUG
        if not logger.isEnabledFor(level):
            return
        if verdict:
            logger.log(level, "%s: PASS", label)
        else:
            logger.log(level, "%s: FAIL\n%s", label, format_failure(verdict))


def compare(
    a,
    b,
    policy: Optional[TolerancePolicy] = None,
    config: GlobalConfig = None,
    name: str = "",
) -> Verdict:
    """
    Convenience function: compare with a throwaway engine

    Args:
        a: number or container
        b: number or container
        policy: tolerance policy (default from config)
        config: configuration (global one when omitted)
        name: label used in log records

    Returns:
        Verdict
    """
    return CompareEngine(config).compare(a, b, policy, name=name)
