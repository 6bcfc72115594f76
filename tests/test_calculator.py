"""
Unit tests for the calculator entry points (aop, npv, irr, eir, pmt, cfw)
and the loan quote built from them.

Includes the two standard loan configurations: the 24-month annuity loan and
the buy-now-pay-later loan with six interest-free months up front.

Version: 0.1.0
Last Updated: 2026-10-17
Status: Active
"""

import math
import unittest

from aop_calc import calculator
from aop_calc.calculator import (
    ANNUITY_OPTIONS,
    BNPL_OPTIONS,
    DEFAULT_LOAN,
    DEFAULT_SCHEDULE_OPTIONS,
    LoanDetails,
    aop,
    cfw,
    eir,
    irr,
    npv,
    pmt,
    quote,
)
from aop_calc.results import Converged, NotFound
from aop_calc.time_value import annuity_factor


DECIMAL_PLACES_FOR_ASSERTIONS: int = 8


class TestRateEntryPoints(unittest.TestCase):

    def test_eir_of_nominal_rate(self):
        self.assertAlmostEqual(eir(0.10, 12), (1 + 0.10 / 12) ** 12 - 1, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_eir_continuous(self):
        self.assertAlmostEqual(eir(0.10, 0), math.exp(0.10) - 1, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_eir_overflow_is_infinite(self):
        self.assertEqual(eir(1e30, 12), math.inf)
        self.assertEqual(eir(1000.0, 0), math.inf)

    def test_pmt_zero_rate(self):
        self.assertAlmostEqual(pmt(1000.0, 0.0, 4), 250.0, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_pmt_amortizes(self):
        payment = pmt(10_000.0, 0.01, 12)
        balance = 10_000.0
        for _ in range(12):
            balance -= payment - 0.01 * balance
        self.assertAlmostEqual(balance, 0.0, places=6)

    def test_irr_of_annuity(self):
        cashflow = [-10_000.0] + [pmt(10_000.0, 0.01, 12)] * 12
        result = irr(cashflow)
        self.assertIsInstance(result, Converged)
        self.assertAlmostEqual(result.rate, 0.01, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_aop_is_effective_irr(self):
        cashflow = [-10_000.0] + [pmt(10_000.0, 0.01, 12)] * 12
        result = aop(cashflow, 0.1, 12)
        self.assertIsInstance(result, Converged)
        self.assertAlmostEqual(result.rate, 1.01 ** 12 - 1, places=DECIMAL_PLACES_FOR_ASSERTIONS)

    def test_aop_passes_not_found_through(self):
        self.assertEqual(aop([100.0, 100.0, 100.0], 0.1, 12), NotFound("no-sign-change"))

    def test_npv_at_irr_is_zero(self):
        cashflow = [-10_000.0] + [pmt(10_000.0, 0.01, 12)] * 12
        self.assertAlmostEqual(npv(cashflow, 0.01), 0.0, places=6)


class TestCashflowEntryPoint(unittest.TestCase):

    def test_default_options_are_annuity(self):
        self.assertIs(DEFAULT_SCHEDULE_OPTIONS, ANNUITY_OPTIONS)
        self.assertEqual(cfw(100_000.0, 12), cfw(100_000.0, 12, ANNUITY_OPTIONS))

    def test_standard_annuity_loan(self):
        result = cfw(100_000.0, 12, ANNUITY_OPTIONS)
        self.assertEqual(result.duration_periods, 24)
        self.assertEqual(result.principal, 101_800.0)
        self.assertEqual(result.payment_plan[-1].remaining_balance, 0.0)

        annual = aop(result.cashflow, 0.1, 12)
        self.assertIsInstance(annual, Converged)
        self.assertGreater(annual.rate, 0.10)
        # fees and financed cost also lift it above the plain effective rate
        self.assertGreater(annual.rate, eir(0.10, 12))

    def test_bnpl_loan(self):
        result = cfw(100_000.0, 12, BNPL_OPTIONS)
        plan = result.payment_plan
        self.assertEqual(result.duration_periods, 30)
        for entry in plan[:6]:
            self.assertEqual(entry.total_payment, 0.0)
            self.assertEqual(entry.remaining_balance, 101_800.0)
        self.assertAlmostEqual(plan[6].total_payment, 101_800.0 * annuity_factor(0.10 / 12, 24) + 25.0, places=6)
        self.assertEqual(plan[-1].remaining_balance, 0.0)

    def test_bnpl_cheaper_per_year_than_annuity(self):
        # same repayments spread over a longer horizon
        annuity = aop(cfw(100_000.0, 12, ANNUITY_OPTIONS).cashflow, 0.1, 12)
        bnpl = aop(cfw(100_000.0, 12, BNPL_OPTIONS).cashflow, 0.1, 12)
        self.assertLess(bnpl.rate, annuity.rate)
        self.assertGreater(bnpl.rate, 0.0)

    def test_calls_are_independent(self):
        first = cfw(50_000.0, 12, BNPL_OPTIONS)
        cfw(75_000.0, 12, ANNUITY_OPTIONS)
        self.assertEqual(first, cfw(50_000.0, 12, BNPL_OPTIONS))


class TestQuote(unittest.TestCase):

    def test_default_quote(self):
        result = quote()
        self.assertEqual(result.schedule, cfw(DEFAULT_LOAN.principal, DEFAULT_LOAN.periods_per_year))
        self.assertEqual(result.irr, irr(result.schedule.cashflow, 0.1))
        self.assertEqual(result.aop, aop(result.schedule.cashflow, 0.1, 12))
        self.assertAlmostEqual(result.eir, eir(0.10, 12), places=DECIMAL_PLACES_FOR_ASSERTIONS)
        self.assertAlmostEqual(result.npv, npv(result.schedule.cashflow, 0.10 / 12), places=6)
        # repayments include fees and the financed cost
        self.assertGreater(result.npv, 0.0)
        self.assertGreater(result.aop_percent, 10.0)

    def test_selected_segment_drives_npv_and_eir(self):
        loan = LoanDetails(principal=100_000.0, periods_per_year=12)
        promo = quote(loan, BNPL_OPTIONS, selected_segment=0)
        regular = quote(loan, BNPL_OPTIONS, selected_segment=1)
        self.assertEqual(promo.eir, 0.0)
        self.assertAlmostEqual(promo.npv, sum(promo.schedule.cashflow), places=6)
        self.assertAlmostEqual(regular.eir, eir(0.10, 12), places=DECIMAL_PLACES_FOR_ASSERTIONS)
        self.assertEqual(promo.aop, regular.aop)

    def test_aop_percent_nan_when_not_found(self):
        result = calculator.LoanQuote(
            schedule=cfw(1.0, 12),
            npv=0.0,
            irr=NotFound("max-iterations", 50),
            eir=0.0,
            aop=NotFound("max-iterations", 50),
        )
        self.assertTrue(math.isnan(result.aop_percent))

    def test_bad_segment_index(self):
        with self.assertRaises(IndexError):
            quote(DEFAULT_LOAN, ANNUITY_OPTIONS, selected_segment=3)


if __name__ == '__main__':
    unittest.main(verbosity=2)
