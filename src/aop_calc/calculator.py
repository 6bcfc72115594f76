# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
"""
Calculator entry points: the six stateless operations callers use, plus the
default loan configurations and a one-call quote.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .results import Converged, NotFound, RateResult, rate_or_nan
from .schedule import AmortizationResult, LoanSegment, ScheduleOptions, build_amortization_schedule
from .solver import DEFAULT_GUESS, internal_rate_of_return
from .time_value import annuity_factor, effective_rate
from .valuation import net_present_value

__version__ = "0.1.0"


# =============================================================================
# Default configurations
# =============================================================================

@dataclass(frozen=True)
class LoanDetails:
    """Amount drawn and payment frequency."""
    principal: float
    periods_per_year: int = 12


ANNUITY_SEGMENT = LoanSegment(
    period_count=24,
    nominal_annual_rate_percent=10.0,
    fixed_payment=0.0,
    periodic_fee=25.0,
    use_fixed_payment=False,
)

# Standard annuity loan: 24 monthly payments at 10%, 1800 cost financed
ANNUITY_OPTIONS = ScheduleOptions(
    upfront_cost=1800.0,
    include_cost_in_principal=True,
    round_payment_up=False,
    segments=(ANNUITY_SEGMENT,),
)

# Buy now pay later: 6 interest-free months with nothing to pay, then the annuity
BNPL_OPTIONS = ScheduleOptions(
    upfront_cost=1800.0,
    include_cost_in_principal=True,
    round_payment_up=False,
    segments=(
        LoanSegment(
            period_count=6,
            nominal_annual_rate_percent=0.0,
            fixed_payment=0.0,
            periodic_fee=0.0,
            use_fixed_payment=True,
        ),
        ANNUITY_SEGMENT,
    ),
)

DEFAULT_SCHEDULE_OPTIONS = ANNUITY_OPTIONS
DEFAULT_LOAN = LoanDetails(principal=100000.0, periods_per_year=12)


# =============================================================================
# Entry points
# =============================================================================

def aop(
        cashflow: Sequence[float] | np.ndarray,
        rate: float = DEFAULT_GUESS,
        periods_per_year: int = 12
) -> RateResult:
    """
    Annual cost of the loan (ÅOP): the cashflow's periodic IRR converted to an
    effective annual rate.

        ÅOP = (1 + IRR)^ppy - 1

    Args:
        cashflow: Signed cashflow, disbursement first (AmortizationResult.cashflow)
        rate: Periodic starting guess for the IRR solve
        periods_per_year: Payments per year

    Returns:
        Converged with the annual rate as decimal, or the solver's NotFound
    """
    result = irr(cashflow, rate)
    if isinstance(result, NotFound):
        return result
    return Converged(effective_rate(result.rate, periods_per_year), result.iterations)


def npv(cashflow: Sequence[float] | np.ndarray, rate: float) -> float:
    """Net present value at a periodic rate."""
    return net_present_value(cashflow, rate)


def irr(cashflow: Sequence[float] | np.ndarray, rate: float = DEFAULT_GUESS) -> RateResult:
    """Periodic internal rate of return, Newton's method from `rate`."""
    return internal_rate_of_return(cashflow, rate)


def eir(rate: float, periods_per_year: int) -> float:
    """
    Effective annual rate of a nominal annual rate (decimal).

    periods_per_year = 0 means continuous compounding: e^rate - 1.
    """
    periodic = rate / periods_per_year if periods_per_year else rate
    return effective_rate(periodic, periods_per_year)


def pmt(principal: float, rate: float, period_count: int) -> float:
    """Level payment amortizing `principal` over `period_count` periods at periodic `rate`."""
    return principal * annuity_factor(rate, period_count)


def cfw(
        principal: float,
        periods_per_year: int,
        options: ScheduleOptions | None = None
) -> AmortizationResult:
    """Payment plan and cashflow for a loan; DEFAULT_SCHEDULE_OPTIONS when options is None."""
    return build_amortization_schedule(
        principal,
        periods_per_year,
        options if options is not None else DEFAULT_SCHEDULE_OPTIONS,
    )


# =============================================================================
# Quote
# =============================================================================

@dataclass(frozen=True)
class LoanQuote:
    """
    Everything a loan screen shows for one set of inputs.

    npv is taken at the selected segment's nominal periodic rate and eir is
    that segment's nominal rate made effective. irr and aop come from the
    schedule's cashflow.
    """
    schedule: AmortizationResult
    npv: float
    irr: RateResult
    eir: float
    aop: RateResult

    @property
    def aop_percent(self) -> float:
        return rate_or_nan(self.aop) * 100.0


def quote(
        loan: LoanDetails = DEFAULT_LOAN,
        options: ScheduleOptions | None = None,
        selected_segment: int = 0,
) -> LoanQuote:
    """
    Recalculate a loan from scratch: schedule, NPV, IRR, EIR and ÅOP.

    Nothing is cached; call again whenever loan or options change.

    Args:
        loan: Drawn amount and payment frequency
        options: Cost terms and segments (DEFAULT_SCHEDULE_OPTIONS if None)
        selected_segment: Segment whose nominal rate is used for npv and eir

    Raises:
        IndexError: If selected_segment is not a valid segment index
    """
    opts = options if options is not None else DEFAULT_SCHEDULE_OPTIONS
    nominal = opts.segments[selected_segment].nominal_annual_rate_percent / 100.0
    schedule = cfw(loan.principal, loan.periods_per_year, opts)
    return LoanQuote(
        schedule=schedule,
        npv=npv(schedule.cashflow, nominal / loan.periods_per_year if loan.periods_per_year else nominal),
        irr=irr(schedule.cashflow, DEFAULT_GUESS),
        eir=eir(nominal, loan.periods_per_year),
        aop=aop(schedule.cashflow, DEFAULT_GUESS, loan.periods_per_year),
    )
