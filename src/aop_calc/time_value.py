# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import warnings

import numpy as np

__version__ = "0.1.0"


# =============================================================================
# Time-value primitives
# =============================================================================

def effective_rate(periodic_rate: float, periods_per_year: int) -> float:
    """
    Convert a periodic rate to the effective annual rate (EIR).

    Formula:
        EIR = (1 + i)^ppy - 1        ppy > 0
        EIR = e^i - 1                ppy = 0 (continuous compounding)

    Args:
        periodic_rate: Rate per period as decimal (e.g. 0.1/12 for 10% monthly)
        periods_per_year: Compounding periods per year, zero for continuous

    Returns:
        Effective annual rate as decimal

    Example:
        >>> round(effective_rate(0.10 / 12, 12), 6)
        0.104713
    """
    if periods_per_year:
        with np.errstate(over="ignore", invalid="ignore"):
            return float(np.float64(1.0 + periodic_rate) ** periods_per_year - 1.0)
    with np.errstate(over="ignore"):
        return float(np.exp(np.float64(periodic_rate)) - 1.0)


def annuity_factor(periodic_rate: float, period_count: int) -> float:
    """
    Annuity payment factor: the fraction of principal paid each period so that
    the principal is fully amortized after period_count level payments.

    Formula:
        AF = i / [1 - (1 + i)^-n]    i > 0
        AF = 1 / n                   i = 0, n > 0 (linear repayment)
        AF = 1                       n = 0 (degenerate)

    The level payment on a principal P is P × AF. Conversely, a known level
    payment PMT over n periods carries PMT / AF of principal, which is how the
    schedule generator turns a fixed payment into a principal amount.

    Args:
        periodic_rate: Rate per period as decimal
        period_count: Number of level payments

    Returns:
        Payment per unit of principal

    Warns:
        UserWarning: If period_count is zero
    """
    if period_count == 0:
        warnings.warn("period_count is zero, returning degenerate annuity factor 1")
        return 1.0
    if periodic_rate > 0:
        with np.errstate(over="ignore", divide="ignore"):
            return float(periodic_rate / (1.0 - np.float64(1.0 + periodic_rate) ** (-period_count)))
    return 1.0 / period_count
