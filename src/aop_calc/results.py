# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import math
from dataclasses import dataclass

__version__ = "0.1.0"


# =============================================================================
# Tagged results for values that may be unknown
# =============================================================================

@dataclass(frozen=True)
class Resolved:
    """A principal value that the splitting pass was able to determine."""
    value: float


@dataclass(frozen=True)
class Unresolved:
    """A principal value the splitting pass could not reach."""


PrincipalValue = Resolved | Unresolved


# =============================================================================
# Tagged results for the rate solvers
# =============================================================================

@dataclass(frozen=True)
class Converged:
    """
    Rate found by a solver.

    rate is periodic for internal_rate_of_return and annual when the result
    has passed through calculator.aop.
    """
    rate: float
    iterations: int


@dataclass(frozen=True)
class NotFound:
    """
    No rate found. Not a fault: the caller decides what to show.

    reason:
        "no-sign-change" - cashflow lacks a positive or a negative entry
        "max-iterations" - Newton did not converge within the cap
        "non-finite"     - an iterate became nan or inf
        "no-bracket"     - bracketed search found no sign change
    """
    reason: str
    iterations: int = 0


RateResult = Converged | NotFound


def rate_or_nan(result: RateResult) -> float:
    """Plain float for display code: the rate, or nan when nothing was found."""
    if isinstance(result, Converged):
        return result.rate
    return math.nan
