# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""Internal rate of return (Newton's method over NPV, Brent fallback)."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from scipy.optimize import brentq

from .results import Converged, NotFound, RateResult
from .valuation import net_present_value, net_present_value_derivative

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

MAX_ITERATIONS: int = 50
TOLERANCE: float = 1e-10
DEFAULT_GUESS: float = 0.1


def _has_sign_change(flows: np.ndarray) -> bool:
    # A loan needs a drawdown and at least one repayment.
    return bool((flows > 0).any() and (flows < 0).any())


def internal_rate_of_return(
        cashflow: Sequence[float] | np.ndarray,
        initial_guess: float = DEFAULT_GUESS,
        *,
        max_iterations: int = MAX_ITERATIONS,
        tolerance: float = TOLERANCE,
) -> RateResult:
    """
    Periodic rate at which the NPV of the cashflow is zero.

    Newton's method:
        iₖ₊₁ = iₖ - NPV(iₖ) / NPV'(iₖ)

    Stops as soon as |iₖ₊₁ - iₖ| < tolerance or |NPV(iₖ)| < tolerance and
    returns iₖ₊₁. There is no guard on the derivative; a zero derivative
    shows up as a non-finite iterate.

    Args:
        cashflow: Signed cashflow, disbursement first
        initial_guess: Periodic rate to start from
        max_iterations: Newton step cap
        tolerance: Step and NPV tolerance

    Returns:
        Converged(rate, iterations), or NotFound with reason
        "no-sign-change", "non-finite" or "max-iterations"

    Example:
        >>> result = internal_rate_of_return([-100.0, 60.0, 60.0])
        >>> round(result.rate, 6)
        0.130662
    """
    flows = np.asarray(cashflow, dtype=float)
    if not _has_sign_change(flows):
        return NotFound("no-sign-change")

    rate = float(initial_guess)
    for iteration in range(1, max_iterations + 1):
        value = net_present_value(flows, rate)
        slope = np.float64(net_present_value_derivative(flows, rate))
        with np.errstate(divide="ignore", invalid="ignore"):
            next_rate = float(rate - np.float64(value) / slope)
        logger.debug("Newton iter %s: rate=%s npv=%s next=%s", iteration, rate, value, next_rate)
        if not math.isfinite(next_rate):
            return NotFound("non-finite", iteration)
        step = abs(next_rate - rate)
        rate = next_rate
        if step < tolerance or abs(value) < tolerance:
            return Converged(rate, iteration)
    return NotFound("max-iterations", max_iterations)


def internal_rate_of_return_bracketed(
        cashflow: Sequence[float] | np.ndarray,
        lower: float = -0.99,
        upper: float = 1.0,
        *,
        max_iterations: int = 100,
        tolerance: float = TOLERANCE,
) -> RateResult:
    """
    Periodic IRR by Brent's method (scipy.optimize.brentq) on [lower, upper].

    Slower than Newton but does not depend on a starting guess; useful when
    internal_rate_of_return reports NotFound for an unusual cashflow. The
    bracket must contain a sign change of NPV.

    Returns:
        Converged(rate, iterations), or NotFound("no-sign-change") /
        NotFound("no-bracket")
    """
    flows = np.asarray(cashflow, dtype=float)
    if not _has_sign_change(flows):
        return NotFound("no-sign-change")

    def objective(rate: float) -> float:
        return net_present_value(flows, rate)

    try:
        root, info = brentq(
            objective,
            lower, upper,
            xtol=tolerance,
            maxiter=max_iterations,
            full_output=True,
        )
    except ValueError as e:
        # brentq raises ValueError when f(lower) and f(upper) share a sign
        logger.debug("No IRR bracket in [%s, %s]: %s", lower, upper, e)
        return NotFound("no-bracket")
    except RuntimeError as e:
        logger.debug("Brent failed to converge: %s", e)
        return NotFound("max-iterations", max_iterations)
    return Converged(float(root), info.iterations)
