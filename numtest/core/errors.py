"""Exception hierarchy shared by the comparison engine and its front end.

Mismatching values are never reported through these exceptions; they come back as
verdicts. Everything here is a caller contract violation.
"""


class NumtestError(Exception):
    """Base exception for numtest contract violations."""


class PolicyError(NumtestError, ValueError):
    """Raised when a tolerance policy is built with an invalid parameter."""


class ShapeFamilyError(NumtestError, TypeError):
    """Raised when two inputs belong to different shape families.

    Flat vs grid, or a scalar vs a container. Distinct from a shape mismatch
    inside one family, which is an ordinary failed verdict.
    """


class UnsupportedContainerError(NumtestError, TypeError):
    """Raised when no adapter can present an object as a flat or grid container."""


class UnsupportedValueError(NumtestError, TypeError):
    """Raised when an element cannot be read as a real number."""


class ConfigError(NumtestError):
    """Raised when the numtest configuration is invalid or cannot be loaded."""
