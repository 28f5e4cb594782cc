"""Tests for the bump-and-reprice engine."""

import dataclasses

import pytest
from optgreeks import BumpSizes, OptionParams, calculate_vanilla, numerical_greeks

OPT = OptionParams(strike=100, time_to_maturity=1.0, volatility=0.2,
                   risk_free_rate=0.05)


def _bs_pricer(S, params):
    return calculate_vanilla(S, params).price


class _Recorder:
    """Pricer wrapper that logs every (spot, params) it is asked for."""

    def __init__(self):
        self.calls = []

    def __call__(self, S, params):
        self.calls.append((S, params))
        return _bs_pricer(S, params)


class TestNumericalGreeks:
    def test_vs_analytical_bs(self):
        ng = numerical_greeks(_bs_pricer, 100, OPT)
        ag = calculate_vanilla(100, OPT)
        assert abs(ng.delta - ag.delta) < 1e-5
        assert abs(ng.gamma - ag.gamma) < 1e-5
        assert abs(ng.vega - ag.vega) < 1e-3
        assert abs(ng.rho - ag.rho) < 1e-3

    def test_put_delta_negative(self):
        ng = numerical_greeks(_bs_pricer, 100, OPT.with_field("option_type", "put"))
        assert ng.delta < 0

    def test_payoff_left_to_caller(self):
        ng = numerical_greeks(_bs_pricer, 120, OPT)
        assert ng.payoff == 0.0
        assert ng.time_value == 0.0
        assert ng.price == pytest.approx(_bs_pricer(120, OPT))

    def test_each_bump_touches_one_field(self):
        rec = _Recorder()
        numerical_greeks(rec, 100, OPT)
        base = dataclasses.asdict(OPT)
        for _, params in rec.calls:
            d = dataclasses.asdict(params)
            # spot stencils run on the base params or on a single bumped field
            assert len([k for k in base if base[k] != d[k]]) <= 1
        assert len(rec.calls) < 40

    def test_time_bump_skipped_near_expiry(self):
        rec = _Recorder()
        g = numerical_greeks(rec, 100, OPT.with_field("time_to_maturity", 0.001))
        assert g.theta == 0.0 and g.color == 0.0
        assert all(p.time_to_maturity == 0.001 for _, p in rec.calls)

    def test_spot_floor(self):
        rec = _Recorder()
        numerical_greeks(rec, 0.01, OPT, bumps=BumpSizes(spot_floor=0.005))
        spots = sorted({S for S, _ in rec.calls})
        assert 0.01 + 0.005 in spots
