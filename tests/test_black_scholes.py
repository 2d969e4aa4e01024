"""
Tests for Black-Scholes pricing and Greeks.
"""

import math

import numpy as np
import pytest

from bs_pricer.analytics.black_scholes import (
    MarketParameters,
    OptionType,
    PricingResult,
    bs_metrics,
    bs_price,
)
from bs_pricer.errors import DomainError, InvalidParameterError, PricingError


@pytest.fixture
def one_month_atm():
    """S=100, K=100, 30 days, r=5%, sigma=20%."""
    return MarketParameters(S0=100.0, K=100.0, T=30 / 365, r=0.05, sigma=0.2)


class TestConcreteScenario:
    """Check one fully worked example."""

    def test_call_price(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.call_price == pytest.approx(2.4934, abs=1e-3)

    def test_put_price(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.put_price == pytest.approx(2.0833, abs=1e-3)

    def test_delta(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.delta_call == pytest.approx(0.5400, abs=1e-3)
        assert result.delta_put == pytest.approx(-0.4600, abs=1e-3)

    def test_gamma_vega(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.gamma == pytest.approx(0.0692, abs=1e-3)
        assert result.vega == pytest.approx(11.3799, abs=1e-3)

    def test_theta_rho(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.theta_call == pytest.approx(-16.4207, abs=1e-3)
        assert result.theta_put == pytest.approx(-11.4412, abs=1e-3)
        assert result.rho_call == pytest.approx(4.2331, abs=1e-3)
        assert result.rho_put == pytest.approx(-3.9523, abs=1e-3)

    def test_from_days(self, one_month_atm):
        """30 calendar days is 30/365 years."""
        params = MarketParameters.from_days(100.0, 100.0, 30, 0.05, 0.2)
        assert params == one_month_atm


class TestPutCallParity:
    """C - P = S - K*exp(-rT)."""

    @pytest.mark.parametrize("S0,K,T,r,sigma", [
        (100, 100, 30 / 365, 0.05, 0.2),
        (100, 90, 1.0, 0.05, 0.25),
        (100, 110, 0.5, 0.03, 0.15),
        (50, 60, 2.0, 0.0, 0.6),
        (120, 100, 0.1, -0.01, 0.35),
        (100, 100, 1.0, 0.05, 4.5),
    ])
    def test_parity(self, S0, K, T, r, sigma):
        result = bs_metrics(MarketParameters(S0=S0, K=K, T=T, r=r, sigma=sigma))
        forward_gap = S0 - K * math.exp(-r * T)
        assert result.call_price - result.put_price == pytest.approx(forward_gap, abs=1e-6)

    def test_greek_relationships(self, one_month_atm):
        """Delta, theta and rho of calls and puts are linked by parity."""
        p = one_month_atm
        result = bs_metrics(p)
        discounted_K = p.K * math.exp(-p.r * p.T)
        assert result.delta_call - result.delta_put == pytest.approx(1.0)
        assert result.theta_call - result.theta_put == pytest.approx(-p.r * discounted_K)
        assert result.rho_call - result.rho_put == pytest.approx(p.T * discounted_K)


class TestGreeksAgainstFiniteDifferences:
    """Analytical Greeks match bumped prices."""

    def test_delta_gamma(self, one_month_atm):
        h = 0.01
        up = bs_metrics(one_month_atm.with_spot(100.0 + h))
        mid = bs_metrics(one_month_atm)
        down = bs_metrics(one_month_atm.with_spot(100.0 - h))
        fd_delta = (up.call_price - down.call_price) / (2 * h)
        fd_gamma = (up.call_price - 2 * mid.call_price + down.call_price) / h**2
        assert fd_delta == pytest.approx(mid.delta_call, abs=1e-3)
        assert fd_gamma == pytest.approx(mid.gamma, abs=1e-2)

    def test_vega(self, one_month_atm):
        h = 1e-4
        up = bs_metrics(one_month_atm.with_sigma(0.2 + h))
        down = bs_metrics(one_month_atm.with_sigma(0.2 - h))
        fd_vega = (up.put_price - down.put_price) / (2 * h)
        assert fd_vega == pytest.approx(bs_metrics(one_month_atm).vega, rel=1e-3)

    def test_theta_rho(self):
        base = dict(S0=100.0, K=105.0, T=0.5, r=0.04, sigma=0.3)
        result = bs_metrics(MarketParameters(**base))
        h = 1e-5

        later = bs_metrics(MarketParameters(**{**base, "T": base["T"] - h}))
        earlier = bs_metrics(MarketParameters(**{**base, "T": base["T"] + h}))
        fd_theta = -(earlier.call_price - later.call_price) / (2 * h)
        assert fd_theta == pytest.approx(result.theta_call, rel=1e-3)

        r_up = bs_metrics(MarketParameters(**{**base, "r": base["r"] + h}))
        r_down = bs_metrics(MarketParameters(**{**base, "r": base["r"] - h}))
        fd_rho = (r_up.put_price - r_down.put_price) / (2 * h)
        assert fd_rho == pytest.approx(result.rho_put, rel=1e-3)


class TestSelectors:
    """Test per-side access to the result."""

    def test_price_selection(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert result.price("call") == result.call_price
        assert result.price(OptionType.PUT) == result.put_price
        assert result.price("PUT") == result.put_price
        assert result.delta("put") == result.delta_put
        assert result.theta("call") == result.theta_call
        assert result.rho("put") == result.rho_put

    def test_for_option(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        side = result.for_option("put")
        assert side == {
            "price": result.put_price,
            "delta": result.delta_put,
            "gamma": result.gamma,
            "vega": result.vega,
            "theta": result.theta_put,
            "rho": result.rho_put,
        }

    def test_to_dict_keys(self, one_month_atm):
        data = bs_metrics(one_month_atm).to_dict()
        assert list(data) == [
            "callPrice", "putPrice", "delta_call", "delta_put", "gamma",
            "vega", "theta_call", "theta_put", "rho_call", "rho_put",
        ]
        assert data["callPrice"] == pytest.approx(2.4934, abs=1e-3)

    def test_invalid_option_type(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        with pytest.raises(InvalidParameterError, match="option_type must be"):
            result.price("straddle")

    def test_bs_price_matches_metrics(self, one_month_atm):
        p = one_month_atm
        assert bs_price(p.S0, p.K, p.r, p.T, p.sigma, "call") == bs_metrics(p).call_price
        assert bs_price(p.S0, p.K, p.r, p.T, p.sigma, "put") == bs_metrics(p).put_price

    def test_result_is_frozen(self, one_month_atm):
        result = bs_metrics(one_month_atm)
        assert isinstance(result, PricingResult)
        with pytest.raises(AttributeError):
            result.gamma = 0.0


class TestBoundaries:
    """Degenerate and invalid inputs fail explicitly."""

    def test_zero_maturity(self):
        with pytest.raises(DomainError, match="T is zero"):
            bs_metrics(MarketParameters(S0=100, K=100, T=0.0, r=0.05, sigma=0.2))

    def test_zero_volatility(self):
        with pytest.raises(DomainError, match="sigma is zero"):
            bs_metrics(MarketParameters(S0=100, K=100, T=1.0, r=0.05, sigma=0.0))

    @pytest.mark.parametrize("field,value,message", [
        ("S0", -1.0, "S0 must be positive"),
        ("S0", 0.0, "S0 must be positive"),
        ("K", -5.0, "K must be positive"),
        ("T", -0.1, "T must be non-negative"),
        ("sigma", -0.2, "sigma must be non-negative"),
        ("S0", float("nan"), "must be finite"),
        ("r", float("inf"), "must be finite"),
        ("sigma", float("inf"), "must be finite"),
        ("K", "100", "must be a real number"),
        ("T", None, "must be a real number"),
    ])
    def test_invalid_parameters(self, field, value, message):
        base = dict(S0=100.0, K=100.0, T=1.0, r=0.05, sigma=0.2)
        base[field] = value
        with pytest.raises(InvalidParameterError, match=message):
            bs_metrics(MarketParameters(**base))

    def test_invalid_checked_before_domain(self):
        """Negative spot is reported even when T is also zero."""
        with pytest.raises(InvalidParameterError):
            bs_metrics(MarketParameters(S0=-1.0, K=100, T=0.0, r=0.05, sigma=0.2))

    def test_overflow_is_domain_error(self):
        with pytest.raises(DomainError, match="undefined"):
            bs_metrics(MarketParameters(S0=100, K=100, T=1.0, r=-1000.0, sigma=0.2))

    def test_errors_are_value_errors(self):
        """Parameter errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            bs_metrics(MarketParameters(S0=-1.0, K=100, T=1.0, r=0.05, sigma=0.2))

    def test_error_kind(self):
        with pytest.raises(PricingError) as exc_info:
            bs_metrics(MarketParameters(S0=100, K=100, T=0.0, r=0.05, sigma=0.2))
        assert exc_info.value.kind == "DomainError"

    def test_numpy_scalars_accepted(self):
        params = MarketParameters(
            S0=np.float64(100.0), K=np.int64(100), T=np.float64(1.0), r=0.05, sigma=0.2
        )
        assert bs_metrics(params).call_price == pytest.approx(10.4506, abs=1e-3)


class TestMonotonicity:
    """Prices increase strictly with volatility, the precondition for bisection."""

    SIGMAS = [0.001] + list(np.linspace(0.05, 5.0, 100))

    @pytest.mark.parametrize("K,T", [
        (95.0, 30 / 365),
        (100.0, 30 / 365),
        (105.0, 30 / 365),
        (90.0, 1.0),
        (100.0, 1.0),
        (110.0, 1.0),
    ])
    @pytest.mark.parametrize("option_type", ["call", "put"])
    def test_price_increasing_in_sigma(self, K, T, option_type):
        prices = [
            bs_metrics(MarketParameters(S0=100.0, K=K, T=T, r=0.05, sigma=float(s))).price(option_type)
            for s in self.SIGMAS
        ]
        assert all(b > a for a, b in zip(prices, prices[1:]))
