"""
Implied volatility solver for European options.

Uses robust bisection method to solve for the volatility that
produces a given market price.
"""

import math
from dataclasses import dataclass
from enum import Enum

from bs_pricer.analytics.black_scholes import (
    MarketParameters,
    OptionType,
    bs_metrics,
    require_finite,
    validate_market,
)
from bs_pricer.analytics.normal import ERF_MAX_ABS_ERROR
from bs_pricer.errors import InvalidParameterError, SolverExhausted

SIGMA_LOW = 0.001
SIGMA_HIGH = 5.0
PRICE_TOL = 1e-6
MAX_ITER = 100


@dataclass(frozen=True)
class SolverConfig:
    """
    Bisection settings.

    Attributes
    ----------
    sigma_low : float
        Lower end of the volatility bracket
    sigma_high : float
        Upper end of the volatility bracket
    tol : float
        Absolute price tolerance for convergence; must exceed the error
        of the normal CDF approximation or convergence cannot be detected
    max_iter : int
        Maximum number of bisection steps
    """

    sigma_low: float = SIGMA_LOW
    sigma_high: float = SIGMA_HIGH
    tol: float = PRICE_TOL
    max_iter: int = MAX_ITER

    def __post_init__(self) -> None:
        if not 0 < self.sigma_low < self.sigma_high:
            raise InvalidParameterError(
                f"Volatility bracket must satisfy 0 < sigma_low < sigma_high, "
                f"got [{self.sigma_low}, {self.sigma_high}]"
            )
        if not math.isfinite(self.sigma_high):
            raise InvalidParameterError("sigma_high must be finite")
        if self.tol <= ERF_MAX_ABS_ERROR:
            raise InvalidParameterError(
                f"Tolerance {self.tol:g} must be coarser than the normal CDF "
                f"approximation error {ERF_MAX_ABS_ERROR:g}"
            )
        if self.max_iter < 1:
            raise InvalidParameterError("max_iter must be at least 1")


class SolverStatus(str, Enum):
    """Terminal state of a solve."""

    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ImpliedVolRequest:
    """
    An observed option price together with the market inputs except volatility.

    Attributes
    ----------
    market_price : float
        Observed option price (> 0)
    S0 : float
        Spot price
    K : float
        Strike price
    T : float
        Time to maturity in years
    r : float
        Risk-free rate
    option_type : OptionType | str
        'call' or 'put'
    """

    market_price: float
    S0: float
    K: float
    T: float
    r: float
    option_type: OptionType | str = OptionType.CALL

    def validate(self) -> OptionType:
        """Validate the request and return its parsed option type."""
        side = OptionType.parse(self.option_type)
        require_finite(market_price=self.market_price)
        if self.market_price <= 0:
            raise InvalidParameterError("Market price must be positive")
        validate_market(self.S0, self.K, self.T, self.r)
        return side


@dataclass(frozen=True)
class ImpliedVolResult:
    """
    Outcome of an implied volatility solve.

    Attributes
    ----------
    status : SolverStatus
        CONVERGED or EXHAUSTED
    implied_vol : float | None
        Volatility reproducing the market price, None when exhausted
    iterations : int
        Number of bisection steps performed
    """

    status: SolverStatus
    implied_vol: float | None
    iterations: int

    @property
    def converged(self) -> bool:
        return self.status is SolverStatus.CONVERGED

    def value(self) -> float:
        """
        Return the implied volatility.

        Raises
        ------
        SolverExhausted
            If the solve did not converge
        """
        if self.implied_vol is None:
            raise SolverExhausted(
                f"Implied volatility did not converge after {self.iterations} iterations"
            )
        return self.implied_vol

    def __repr__(self) -> str:
        if self.implied_vol is None:
            return f"ImpliedVolResult(status='{self.status.value}', iterations={self.iterations})"
        return (
            f"ImpliedVolResult(status='{self.status.value}', "
            f"implied_vol={self.implied_vol:.6f}, iterations={self.iterations})"
        )


def implied_vol(
    request: ImpliedVolRequest,
    config: SolverConfig | None = None,
) -> ImpliedVolResult:
    """
    Compute implied volatility using bisection method.

    Solves for σ such that BS(S0, K, r, T, σ, type) = market_price

    Parameters
    ----------
    request : ImpliedVolRequest
        Market price and inputs
    config : SolverConfig | None, optional
        Bracket, tolerance and iteration cap (default: SolverConfig())

    Returns
    -------
    ImpliedVolResult
        CONVERGED with the volatility, or EXHAUSTED with implied_vol=None
        when no midpoint matched the price within tol in max_iter steps

    Raises
    ------
    InvalidParameterError
        If the market price or market inputs are invalid
    DomainError
        If T == 0

    Notes
    -----
    Bisection relies on the option price being strictly increasing in σ,
    which holds for both calls and puts. It cannot overshoot or diverge the
    way Newton's method can when vega is small. The returned volatility is
    always a bracket midpoint, so it lies inside [sigma_low, sigma_high].
    Prices outside the range reachable within the bracket (for example a
    call price above spot) exhaust the iteration cap.
    """
    if config is None:
        config = SolverConfig()
    side = request.validate()

    sigma_l = config.sigma_low
    sigma_h = config.sigma_high
    params = MarketParameters(S0=request.S0, K=request.K, T=request.T, r=request.r, sigma=sigma_h)

    for iteration in range(1, config.max_iter + 1):
        sigma_mid = 0.5 * (sigma_l + sigma_h)
        model_price = bs_metrics(params.with_sigma(sigma_mid)).price(side)

        error = model_price - request.market_price
        if abs(error) < config.tol:
            return ImpliedVolResult(SolverStatus.CONVERGED, sigma_mid, iteration)

        if error > 0:
            # BS price too high, reduce sigma
            sigma_h = sigma_mid
        else:
            sigma_l = sigma_mid

    return ImpliedVolResult(SolverStatus.EXHAUSTED, None, config.max_iter)
