"""Global constants

Default tolerances and the names policies go by in configuration files.
"""

# ============================================================
# Policy names
# ============================================================

POLICY_EXACT = "exact"
POLICY_DECIMAL = "decimal"
POLICY_ATOL = "atol"
POLICY_RTOL = "rtol"

POLICY_KINDS = (POLICY_EXACT, POLICY_DECIMAL, POLICY_ATOL, POLICY_RTOL)


# ============================================================
# Default tolerances
# ============================================================

DEFAULT_POLICY = POLICY_EXACT
DEFAULT_DECIMAL = 7
DEFAULT_ATOL = 1e-8
DEFAULT_RTOL = 1e-5


# ============================================================
# Rounding
# ============================================================

# Digits of working precision for decimal rounding. A float64 repr carries at most
# 309 integer digits and 324 fractional digits.
ROUNDING_PRECISION = 800


# ============================================================
# Config file
# ============================================================

DEFAULT_CONFIG_FILE = "numtest.yaml"
