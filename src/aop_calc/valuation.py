# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

__version__ = "0.1.0"


# =============================================================================
# Cashflow valuation
# =============================================================================
#
# Cashflow convention: element 0 is the disbursement at time 0 (negative for
# the lender's view of a loan), element t is the payment at the end of
# period t. All rates are periodic.
# =============================================================================

def _as_cashflow(cashflow: Sequence[float] | np.ndarray) -> np.ndarray:
    flows = np.asarray(cashflow, dtype=float)
    if flows.ndim != 1 or flows.size == 0:
        raise ValueError(f"cashflow must be a non-empty 1-D sequence, got shape {flows.shape}")
    return flows


def net_present_value(cashflow: Sequence[float] | np.ndarray, periodic_rate: float) -> float:
    """
    Net present value of a cashflow at a periodic rate.

    Formula:
        NPV(i) = CF₀ + Σₜ CFₜ / (1 + i)^t        t = 1 .. N

    CF₀ is already at time 0 and is not discounted. A single-element cashflow
    returns that element.

    Args:
        cashflow: Signed cashflow, disbursement first
        periodic_rate: Discount rate per period as decimal

    Returns:
        Net present value

    Raises:
        ValueError: If cashflow is empty
    """
    flows = _as_cashflow(cashflow)
    t = np.arange(flows.size)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        discounted = flows[1:] / (1.0 + periodic_rate) ** t[1:]
    return float(flows[0] + discounted.sum())


def net_present_value_derivative(
        cashflow: Sequence[float] | np.ndarray,
        periodic_rate: float
) -> float:
    """
    First derivative of net_present_value with respect to the periodic rate.

    Formula:
        dNPV/di = Σₜ -t × CFₜ / (1 + i)^(t+1)     t = 1 .. N

    CF₀ contributes nothing. Used as the Newton denominator in
    solver.internal_rate_of_return.

    Raises:
        ValueError: If cashflow is empty
    """
    flows = _as_cashflow(cashflow)
    t = np.arange(flows.size)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        terms = -t[1:] * flows[1:] / (1.0 + periodic_rate) ** (t[1:] + 1)
    return float(terms.sum())
