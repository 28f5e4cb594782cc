import pytest
from optgreeks import OptionType, Position, build_structure, calculate, portfolio_greeks

MARKET = dict(time_to_maturity=0.5, volatility=0.25, risk_free_rate=0.03)


def _shape(legs):
    return [(leg.option_type, leg.position, leg.strike) for leg in legs]


class TestBuildStructure:
    def test_straddle(self):
        assert _shape(build_structure("straddle", 100, **MARKET)) == [
            (OptionType.CALL, Position.LONG, 100),
            (OptionType.PUT, Position.LONG, 100),
        ]

    def test_iron_condor(self):
        legs = build_structure("iron_condor", 100, width=5, **MARKET)
        assert _shape(legs) == [
            (OptionType.PUT, Position.LONG, 90),
            (OptionType.PUT, Position.SHORT, 95),
            (OptionType.CALL, Position.SHORT, 105),
            (OptionType.CALL, Position.LONG, 110),
        ]

    def test_spreads(self):
        assert [leg.strike for leg in build_structure("bull_call", 100, **MARKET)] == [100, 110]
        assert [leg.strike for leg in build_structure("bear_put", 100, **MARKET)] == [100, 90]
        assert [leg.strike for leg in build_structure("strangle", 100, **MARKET)] == [90, 110]

    def test_market_inputs_shared(self):
        for leg in build_structure("iron_condor", 100, dividend_yield=0.01, **MARKET):
            assert leg.volatility == 0.25
            assert leg.dividend_yield == 0.01
            assert not leg.has_barrier

    def test_unknown(self):
        with pytest.raises(ValueError):
            build_structure("butterfly", 100, **MARKET)


class TestStructureValues:
    def test_straddle_is_call_plus_put(self):
        call, put = build_structure("Straddle", 100, **MARKET)
        g = portfolio_greeks(100, [call, put])
        assert g.price == pytest.approx(calculate(100, call).price + calculate(100, put).price)

    def test_bull_call_bounded_by_width(self):
        legs = build_structure("bull_call", 100, **MARKET)
        price = portfolio_greeks(100, legs).price
        assert 0.0 < price < 10.0

    def test_iron_condor_is_short_vega(self):
        legs = build_structure("iron_condor", 100, **MARKET)
        assert portfolio_greeks(100, legs).vega < 0
