"""Tests for the closed-form vanilla pricer."""

import math

import pytest
from optgreeks import OptionParams, calculate_vanilla, numerical_greeks

ATM = OptionParams(strike=100, time_to_maturity=1.0, volatility=0.2,
                   risk_free_rate=0.05)


def _vanilla_pricer(S, params):
    return calculate_vanilla(S, params).price


def test_bs_known_values():
    call = calculate_vanilla(100, ATM)
    put = calculate_vanilla(100, ATM.with_field("option_type", "Put"))
    assert abs(call.price - 10.4506) < 1e-3
    assert abs(put.price - 5.5735) < 1e-3
    assert abs(call.delta - 0.6368) < 1e-3
    assert abs(call.gamma - 0.018762) < 1e-5
    assert abs(call.vega - 37.524) < 1e-2
    assert abs(call.rho - 53.232) < 1e-2
    assert abs(call.theta - (-6.414)) < 1e-2


class TestPutCallParity:
    @pytest.mark.parametrize("S,K,T,r,q,sigma", [
        (100, 100, 1.0, 0.05, 0.0, 0.2),
        (80, 110, 0.25, 0.01, 0.03, 0.45),
        (150, 90, 3.0, 0.07, 0.02, 0.1),
    ])
    def test_parity(self, S, K, T, r, q, sigma):
        call = OptionParams(strike=K, time_to_maturity=T, volatility=sigma,
                            risk_free_rate=r, dividend_yield=q, option_type="Call")
        put = call.with_field("option_type", "Put")
        c = calculate_vanilla(S, call).price
        p = calculate_vanilla(S, put).price
        assert abs((c - p) - (S * math.exp(-q * T) - K * math.exp(-r * T))) < 1e-6

    def test_shared_greeks(self):
        call = ATM.with_field("dividend_yield", 0.02)
        put = call.with_field("option_type", "put")
        gc = calculate_vanilla(105, call)
        gp = calculate_vanilla(105, put)
        for name in ("gamma", "vega", "speed", "zomma", "color", "vanna", "volga", "ultima"):
            assert getattr(gc, name) == pytest.approx(getattr(gp, name), rel=1e-12)
        assert gc.delta - gp.delta == pytest.approx(math.exp(-0.02), rel=1e-12)


class TestDegenerate:
    def test_expired_call(self):
        g = calculate_vanilla(110, ATM.with_field("time_to_maturity", 0.0))
        assert g.price == g.payoff == 10.0
        assert g.delta == 1.0
        assert g.time_value == 0.0
        assert g.gamma == g.vega == g.theta == g.rho == g.ultima == 0.0

    def test_expired_otm_call(self):
        g = calculate_vanilla(90, ATM.with_field("time_to_maturity", -0.5))
        assert g.price == 0.0
        assert g.delta == 0.0

    def test_expired_put(self):
        put = ATM.with_field("option_type", "Put").with_field("time_to_maturity", 0.0)
        assert calculate_vanilla(90, put).delta == -1.0
        assert calculate_vanilla(90, put).price == 10.0
        assert calculate_vanilla(100, put).delta == 0.0

    def test_zero_vol(self):
        g = calculate_vanilla(120, ATM.with_field("volatility", 0.0))
        assert g.price == 20.0
        assert g.delta == 1.0
        assert g.vega == 0.0


class TestPayoff:
    def test_time_value(self):
        g = calculate_vanilla(120, ATM)
        assert g.payoff == 20.0
        assert g.time_value == pytest.approx(g.price - 20.0)
        assert g.time_value > 0


# ---------------------------------------------------------------------------
# Closed-form higher-order Greeks agree with bump-and-reprice
# ---------------------------------------------------------------------------
class TestAgainstFiniteDifferences:
    @pytest.fixture(params=["Call", "Put"])
    def leg(self, request):
        return OptionParams(strike=100, time_to_maturity=1.0, volatility=0.2,
                            risk_free_rate=0.05, dividend_yield=0.02,
                            option_type=request.param)

    def test_first_order(self, leg):
        cf = calculate_vanilla(100, leg)
        fd = numerical_greeks(_vanilla_pricer, 100, leg)
        assert fd.delta == pytest.approx(cf.delta, abs=1e-5)
        assert fd.gamma == pytest.approx(cf.gamma, rel=1e-4)
        assert fd.vega == pytest.approx(cf.vega, rel=1e-4)
        assert fd.rho == pytest.approx(cf.rho, rel=1e-4)
        assert fd.theta == pytest.approx(cf.theta, abs=0.02)

    def test_higher_order(self, leg):
        cf = calculate_vanilla(100, leg)
        fd = numerical_greeks(_vanilla_pricer, 100, leg)
        assert fd.vanna == pytest.approx(cf.vanna, rel=1e-3)
        assert fd.volga == pytest.approx(cf.volga, rel=1e-2)
        assert fd.zomma == pytest.approx(cf.zomma, rel=1e-2)
        assert fd.speed == pytest.approx(cf.speed, rel=2e-2)
        assert fd.ultima == pytest.approx(cf.ultima, rel=2e-2)
        assert fd.color == pytest.approx(cf.color, rel=5e-2)

    def test_color_is_calendar_time(self):
        # ATM gamma grows as expiry approaches
        assert calculate_vanilla(100, ATM).color > 0
