# Requires Python 3.12+
"""
ÅOP calculator: the annual cost of a consumer loan, payment plan included.

The annual cost (ÅOP, effective interest rate including fees and costs) is the
internal rate of return of the loan's cashflow, found with Newton's method on
NPV, made effective over the payment frequency.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Tagged results
from aop_calc.results import (
    Resolved,
    Unresolved,
    Converged,
    NotFound,
    rate_or_nan,
)

# Time-value primitives and valuation
from aop_calc.time_value import (
    effective_rate,
    annuity_factor,
)
from aop_calc.valuation import (
    net_present_value,
    net_present_value_derivative,
)

# Rate solver
from aop_calc.solver import (
    internal_rate_of_return,
    internal_rate_of_return_bracketed,
)

# Schedule generator
from aop_calc.schedule import (
    LoanSegment,
    ScheduleOptions,
    ResolvedSegment,
    PaymentPlanEntry,
    PaymentPlanArrays,
    AmortizationResult,
    MultipleUnknownSegmentsWarning,
    split_principal,
    resolve_segments,
    build_amortization_schedule,
)

# Calculator entry points
from aop_calc.calculator import (
    LoanDetails,
    LoanQuote,
    ANNUITY_OPTIONS,
    BNPL_OPTIONS,
    DEFAULT_SCHEDULE_OPTIONS,
    DEFAULT_LOAN,
    aop,
    npv,
    irr,
    eir,
    pmt,
    cfw,
    quote,
)

__all__ = [
    "__version__",
    # Results
    "Resolved",
    "Unresolved",
    "Converged",
    "NotFound",
    "rate_or_nan",
    # Primitives and valuation
    "effective_rate",
    "annuity_factor",
    "net_present_value",
    "net_present_value_derivative",
    # Solver
    "internal_rate_of_return",
    "internal_rate_of_return_bracketed",
    # Schedule
    "LoanSegment",
    "ScheduleOptions",
    "ResolvedSegment",
    "PaymentPlanEntry",
    "PaymentPlanArrays",
    "AmortizationResult",
    "MultipleUnknownSegmentsWarning",
    "split_principal",
    "resolve_segments",
    "build_amortization_schedule",
    # Calculator
    "LoanDetails",
    "LoanQuote",
    "ANNUITY_OPTIONS",
    "BNPL_OPTIONS",
    "DEFAULT_SCHEDULE_OPTIONS",
    "DEFAULT_LOAN",
    "aop",
    "npv",
    "irr",
    "eir",
    "pmt",
    "cfw",
    "quote",
]
