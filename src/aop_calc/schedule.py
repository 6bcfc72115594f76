# Requires Python 3.12+
# Uses native type hints: list[x], tuple[x, y], X | None (PEP 585, PEP 604)
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field

import numpy as np

from .results import PrincipalValue, Resolved, Unresolved
from .time_value import annuity_factor

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

MAX_PERIODS: int = 180
BALANCE_EPSILON: float = 0.01


class MultipleUnknownSegmentsWarning(UserWarning):
    """More than one segment asks for a computed payment; only one can be solved."""


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class LoanSegment:
    """
    One block of consecutive periods sharing a rate and a payment policy.

    period_count may be None only for a fixed-payment segment, which then runs
    until the loan is repaid (or the period cap is hit).
    """
    period_count: int | None = None
    nominal_annual_rate_percent: float = 0.0  # 10.0 = 10% p.a.
    fixed_payment: float = 0.0
    periodic_fee: float = 0.0
    use_fixed_payment: bool = False


@dataclass(frozen=True)
class ScheduleOptions:
    """
    Cost terms and segment layout for a schedule build.

    upfront_cost is either folded into the amortized principal
    (include_cost_in_principal) or charged with the first payment.
    round_payment_up rounds computed payments up to a whole currency unit;
    fixed payments are never rounded.
    """
    upfront_cost: float = 0.0
    include_cost_in_principal: bool = True
    round_payment_up: bool = False
    segments: tuple[LoanSegment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "segments", tuple(self.segments))


# =============================================================================
# Outputs
# =============================================================================

@dataclass(frozen=True)
class ResolvedSegment:
    """Segment terms after principal splitting: what the simulation runs on."""
    periodic_rate: float
    periodic_fee: float
    payment: float
    cumulative_end_period: int


@dataclass(frozen=True)
class PaymentPlanEntry:
    period_index: int
    principal_repaid: float
    fee: float
    interest_accrued: float
    total_payment: float
    remaining_balance: float


@dataclass
class PaymentPlanArrays:
    """Column view of a payment plan, one array element per period."""
    period: np.ndarray
    principal_repaid: np.ndarray
    fee: np.ndarray
    interest_accrued: np.ndarray
    total_payment: np.ndarray
    remaining_balance: np.ndarray


@dataclass(frozen=True)
class AmortizationResult:
    """
    A complete schedule build.

    principal is the amortized amount (drawn amount plus any folded-in cost).
    cashflow is [-drawn amount, payment₁, payment₂, ...] and is what the rate
    solver consumes.
    """
    duration_periods: int
    principal: float
    total_paid: float
    total_interest: float
    payment_plan: tuple[PaymentPlanEntry, ...] = field(default=())
    cashflow: tuple[float, ...] = field(default=())

    def plan_arrays(self) -> PaymentPlanArrays:
        plan = self.payment_plan
        return PaymentPlanArrays(
            period=np.array([e.period_index for e in plan], dtype=int),
            principal_repaid=np.array([e.principal_repaid for e in plan], dtype=float),
            fee=np.array([e.fee for e in plan], dtype=float),
            interest_accrued=np.array([e.interest_accrued for e in plan], dtype=float),
            total_payment=np.array([e.total_payment for e in plan], dtype=float),
            remaining_balance=np.array([e.remaining_balance for e in plan], dtype=float),
        )


# =============================================================================
# Principal splitting
# =============================================================================

def _periodic_rate(segment: LoanSegment, periods_per_year: int) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(segment.nominal_annual_rate_percent) / 100.0 / periods_per_year)


def split_principal(
        principal: float,
        periodic_rates: list[float],
        segments: tuple[LoanSegment, ...] | list[LoanSegment],
) -> list[PrincipalValue]:
    """
    Principal outstanding at every segment boundary.

    Boundary j is the balance at the start of segment j; boundary n (n =
    number of segments) is the final balance, zero.

    A fixed payment PMT over n periods at rate i carries a "delta principal"

        ΔP = PMT / AF(i, n)

    so the balance leaving a fixed segment is known from the balance entering
    it, and vice versa:

        Pⱼ₊₁ = (Pⱼ - ΔPⱼ) × (1 + i)^n          forward
        Pⱼ   = ΔPⱼ + Pⱼ₊₁ / (1 + i)^n          backward

    The forward pass starts from the full principal and walks fixed segments
    until the first unknown one; the backward pass starts from zero at the far
    end and walks back until the first unknown one. With a single unknown
    segment k the two passes meet around it: boundaries 0..k come from the
    forward pass and k+1..n from the backward pass. Boundaries between two
    unknown segments stay Unresolved.

    Args:
        principal: Amount amortized from period 1
        periodic_rates: Rate per period for each segment, as decimal
        segments: Segment layout

    Returns:
        List of n + 1 boundary principals
    """
    count = len(segments)
    deltas: list[PrincipalValue] = []
    growth: list[float | None] = []
    for segment, rate in zip(segments, periodic_rates):
        n = segment.period_count
        if n is None:
            deltas.append(Unresolved())
            growth.append(None)
            continue
        with np.errstate(over="ignore"):
            growth.append(float(np.float64(1.0 + rate) ** n))
        if segment.use_fixed_payment:
            with np.errstate(divide="ignore", invalid="ignore"):
                deltas.append(Resolved(float(np.float64(segment.fixed_payment) / annuity_factor(rate, n))))
        else:
            deltas.append(Unresolved())

    boundaries: list[PrincipalValue] = [Unresolved() for _ in range(count + 1)]

    boundaries[0] = Resolved(principal)
    for j, delta in enumerate(deltas):
        if isinstance(delta, Unresolved):
            break
        boundaries[j + 1] = Resolved((boundaries[j].value - delta.value) * growth[j])

    backward: list[PrincipalValue] = [Resolved(0.0)]
    for j in reversed(range(count)):
        delta = deltas[j]
        if isinstance(delta, Unresolved):
            break
        with np.errstate(divide="ignore", invalid="ignore"):
            value = float(delta.value + np.float64(backward[0].value) / growth[j])
        backward.insert(0, Resolved(value))

    # The forward value wins where both passes reach the same boundary
    first = len(boundaries) - len(backward)
    for offset, value in enumerate(backward):
        if isinstance(boundaries[first + offset], Unresolved):
            boundaries[first + offset] = value
    return boundaries


def resolve_segments(
        principal: float,
        periods_per_year: int,
        segments: tuple[LoanSegment, ...] | list[LoanSegment],
        round_payment_up: bool = False,
        max_periods: int = MAX_PERIODS,
) -> list[ResolvedSegment]:
    """
    Turn the segment layout into concrete per-period terms.

    Fixed segments keep their payment. An unknown segment j gets the level
    payment that takes its entry balance Pⱼ down to its exit balance Pⱼ₊₁:

        PMTⱼ = (Pⱼ - Pⱼ₊₁ / (1 + i)^n) × AF(i, n)

    rounded up to a whole unit when round_payment_up is set.

    Only one segment's payment can be solved. If several are unknown a
    MultipleUnknownSegmentsWarning is issued. The first unknown segment is then
    solved against the nearest boundary the backward pass reached (zero at the
    far end), so it repays the loan on its own, and the result stops after it.

    Returns:
        ResolvedSegment list in segment order, possibly shorter than segments
    """
    rates = [_periodic_rate(s, periods_per_year) for s in segments]
    unknown = sum(1 for s in segments if not s.use_fixed_payment)
    if unknown > 1:
        warnings.warn(
            f"{unknown} segments have no fixed payment; only one can be solved, "
            f"the schedule stops after the first unknown segment",
            MultipleUnknownSegmentsWarning,
        )
    boundaries = split_principal(principal, rates, segments)

    resolved: list[ResolvedSegment] = []
    end = 0
    for j, (segment, rate) in enumerate(zip(segments, rates)):
        n = segment.period_count
        end = max_periods if n is None else end + n
        last = False
        if segment.use_fixed_payment:
            payment = segment.fixed_payment
        else:
            entry, exit_ = boundaries[j], boundaries[j + 1]
            if n is None or isinstance(entry, Unresolved):
                logger.debug("Segment %s payment unresolved; schedule stops before it", j)
                break
            if isinstance(exit_, Unresolved):
                # the final boundary is always resolved
                exit_ = next(b for b in boundaries[j + 2:] if isinstance(b, Resolved))
                last = True
            with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
                payment = float(
                    (entry.value - exit_.value / np.float64(1.0 + rate) ** n) * annuity_factor(rate, n)
                )
            if round_payment_up:
                payment = float(np.ceil(payment))
        resolved.append(ResolvedSegment(
            periodic_rate=rate,
            periodic_fee=segment.periodic_fee,
            payment=payment,
            cumulative_end_period=end,
        ))
        if last:
            logger.debug("Segment %s closes the loan; later segments are not resolved", j)
            break
    logger.debug("Resolved segments: %s", resolved)
    return resolved


# =============================================================================
# Month-by-month simulation
# =============================================================================

def _segment_for_period(index: int, resolved: list[ResolvedSegment]) -> ResolvedSegment | None:
    # index is zero-based: period index + 1 is the one being paid
    return next((s for s in resolved if index < s.cumulative_end_period), None)


def build_amortization_schedule(
        principal: float,
        periods_per_year: int,
        options: ScheduleOptions,
        *,
        max_periods: int = MAX_PERIODS,
        balance_epsilon: float = BALANCE_EPSILON,
) -> AmortizationResult:
    """
    Build the payment plan and cashflow for a loan.

    Steps:
        1. Fold upfront_cost into the amortized principal if requested.
        2. Resolve segment payments (resolve_segments).
        3. Simulate period by period on the declining balance:
               interest  = i × balance
               repayment = PMT - interest
           The period that would leave less than balance_epsilon outstanding
           repays the whole balance instead and its payment is recomputed as
           balance + interest + fee, leaving exactly zero.
        4. If the cost was not folded in, it is added to the first period's
           fee and payment.

    The simulation ends when the balance is repaid, after max_periods
    periods, or when no segment covers the next period (a truncated schedule
    is returned, not an error).

    Args:
        principal: Amount drawn by the borrower
        periods_per_year: Payments per year (1, 2, 4, 12, ...)
        options: Cost terms and segment layout
        max_periods: Hard cap on simulated periods
        balance_epsilon: Balance below which the loan counts as repaid

    Returns:
        AmortizationResult; cashflow[0] is -principal (the drawn amount, not
        including any folded-in cost)
    """
    amortized = principal + (options.upfront_cost if options.include_cost_in_principal else 0.0)
    resolved = resolve_segments(
        amortized, periods_per_year, options.segments, options.round_payment_up, max_periods
    )

    plan: list[PaymentPlanEntry] = []
    balance = amortized
    index = 0
    while index < max_periods and balance >= balance_epsilon:
        segment = _segment_for_period(index, resolved)
        if segment is None:
            logger.debug("No segment covers period %s; schedule truncated at balance %s", index + 1, balance)
            break
        interest = segment.periodic_rate * balance
        fee = segment.periodic_fee
        payment = segment.payment + fee
        repayment = segment.payment - interest
        if index == 0 and not options.include_cost_in_principal:
            payment += options.upfront_cost
            fee += options.upfront_cost
        index += 1
        if balance - repayment >= balance_epsilon:
            balance -= repayment
            plan.append(PaymentPlanEntry(index, repayment, fee, interest, payment, balance))
        else:
            plan.append(PaymentPlanEntry(index, balance, fee, interest, balance + interest + fee, 0.0))
            balance = 0.0

    return AmortizationResult(
        duration_periods=len(plan),
        principal=amortized,
        total_paid=sum(e.total_payment for e in plan),
        total_interest=sum(e.interest_accrued for e in plan),
        payment_plan=tuple(plan),
        cashflow=(-principal,) + tuple(e.total_payment for e in plan),
    )
