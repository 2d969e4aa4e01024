"""
Black-Scholes analytical pricing formulas for European options.

Prices and the full Greek set for both calls and puts are produced by a
single evaluation of d1/d2 so the fields of a PricingResult are always
mutually consistent.
"""

import math
import numbers
from dataclasses import asdict, dataclass, fields
from enum import Enum

from bs_pricer.analytics.normal import norm_cdf, norm_pdf
from bs_pricer.errors import DomainError, InvalidParameterError

DAYS_PER_YEAR = 365


class OptionType(str, Enum):
    """European option side."""

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value: "OptionType | str") -> "OptionType":
        """Coerce 'call'/'put' (any case) or an OptionType to OptionType."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidParameterError(
                f"option_type must be 'call' or 'put', got {value!r}"
            ) from None


def require_finite(**values: float) -> None:
    """Raise InvalidParameterError unless every keyword value is a finite real number."""
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidParameterError(f"{name} must be finite, got {value!r}")


def validate_market(S0: float, K: float, T: float, r: float) -> None:
    """
    Validate the volatility-free part of the market inputs.

    Raises
    ------
    InvalidParameterError
        If any value is non-finite, S0 or K is not positive, or T is negative
    DomainError
        If T == 0 (the option has expired and d1 is undefined)
    """
    require_finite(S0=S0, K=K, T=T, r=r)
    if S0 <= 0:
        raise InvalidParameterError("Spot price S0 must be positive")
    if K <= 0:
        raise InvalidParameterError("Strike K must be positive")
    if T < 0:
        raise InvalidParameterError("Time to maturity T must be non-negative")
    if T == 0:
        raise DomainError("Time to maturity T is zero: d1 is undefined")


@dataclass(frozen=True)
class MarketParameters:
    """
    Inputs of a single Black-Scholes evaluation.

    Attributes
    ----------
    S0 : float
        Spot price (> 0)
    K : float
        Strike price (> 0)
    T : float
        Time to maturity in years (> 0 for pricing)
    r : float
        Continuously compounded risk-free rate
    sigma : float
        Annualized volatility (> 0 for pricing)
    """

    S0: float
    K: float
    T: float
    r: float
    sigma: float

    @classmethod
    def from_days(
        cls,
        S0: float,
        K: float,
        days: float,
        r: float,
        sigma: float,
        day_count: int = DAYS_PER_YEAR,
    ) -> "MarketParameters":
        """Build parameters from calendar days to expiry (T = days / day_count)."""
        require_finite(days=days)
        return cls(S0=S0, K=K, T=days / day_count, r=r, sigma=sigma)

    def with_spot(self, S0: float) -> "MarketParameters":
        return MarketParameters(S0=S0, K=self.K, T=self.T, r=self.r, sigma=self.sigma)

    def with_sigma(self, sigma: float) -> "MarketParameters":
        return MarketParameters(S0=self.S0, K=self.K, T=self.T, r=self.r, sigma=sigma)

    def validate(self) -> None:
        """
        Check the parameters before any arithmetic is attempted.

        Raises
        ------
        InvalidParameterError
            Non-finite values, S0 <= 0, K <= 0, T < 0 or sigma < 0
        DomainError
            T == 0 or sigma == 0
        """
        require_finite(sigma=self.sigma)
        if self.sigma < 0:
            raise InvalidParameterError("Volatility sigma must be non-negative")
        validate_market(self.S0, self.K, self.T, self.r)
        if self.sigma == 0:
            raise DomainError("Volatility sigma is zero: d1 is undefined")


@dataclass(frozen=True)
class PricingResult:
    """
    Prices and Greeks for the call and the put on the same inputs.

    Attributes
    ----------
    call_price, put_price : float
        Theoretical option prices
    delta_call, delta_put : float
        ∂V/∂S
    gamma : float
        ∂²V/∂S², identical for call and put
    vega : float
        ∂V/∂σ per unit of volatility, identical for call and put
    theta_call, theta_put : float
        Time decay per year (∂V/∂t)
    rho_call, rho_put : float
        ∂V/∂r per unit of rate
    """

    call_price: float
    put_price: float
    delta_call: float
    delta_put: float
    gamma: float
    vega: float
    theta_call: float
    theta_put: float
    rho_call: float
    rho_put: float

    def price(self, option_type: OptionType | str) -> float:
        if OptionType.parse(option_type) is OptionType.CALL:
            return self.call_price
        return self.put_price

    def delta(self, option_type: OptionType | str) -> float:
        if OptionType.parse(option_type) is OptionType.CALL:
            return self.delta_call
        return self.delta_put

    def theta(self, option_type: OptionType | str) -> float:
        if OptionType.parse(option_type) is OptionType.CALL:
            return self.theta_call
        return self.theta_put

    def rho(self, option_type: OptionType | str) -> float:
        if OptionType.parse(option_type) is OptionType.CALL:
            return self.rho_call
        return self.rho_put

    def for_option(self, option_type: OptionType | str) -> dict[str, float]:
        """Price and Greeks of one side, keyed price/delta/gamma/vega/theta/rho."""
        return {
            "price": self.price(option_type),
            "delta": self.delta(option_type),
            "gamma": self.gamma,
            "vega": self.vega,
            "theta": self.theta(option_type),
            "rho": self.rho(option_type),
        }

    def to_dict(self) -> dict[str, float]:
        """Convert to the wire representation (callPrice/putPrice plus Greek keys)."""
        data = asdict(self)
        return {
            "callPrice": data.pop("call_price"),
            "putPrice": data.pop("put_price"),
            **data,
        }


def bs_metrics(params: MarketParameters) -> PricingResult:
    """
    Compute call/put prices and all Greeks using the Black-Scholes formula.

    Parameters
    ----------
    params : MarketParameters
        Spot, strike, maturity, rate and volatility

    Returns
    -------
    PricingResult
        All ten price/Greek fields from one set of intermediate terms

    Raises
    ------
    InvalidParameterError
        If the inputs are negative, non-positive where required, or non-finite
    DomainError
        If T == 0 or sigma == 0, or if the inputs are so extreme that the
        formula overflows to a non-finite value

    Notes
    -----
    d1 = [ln(S/K) + (r + σ²/2)T] / (σ√T),  d2 = d1 - σ√T

    - Call: S·N(d1) - K·e^(-rT)·N(d2)
    - Put:  K·e^(-rT)·N(-d2) - S·N(-d1)
    - Gamma = φ(d1) / (S·σ·√T), Vega = S·φ(d1)·√T
    - Theta_call = -S·φ(d1)·σ/(2√T) - r·K·e^(-rT)·N(d2)
    - Theta_put  = -S·φ(d1)·σ/(2√T) + r·K·e^(-rT)·N(-d2)
    - Rho_call = K·T·e^(-rT)·N(d2), Rho_put = -K·T·e^(-rT)·N(-d2)
    """
    params.validate()
    try:
        result = _evaluate(params.S0, params.K, params.T, params.r, params.sigma)
    except (OverflowError, ZeroDivisionError) as exc:
        raise DomainError(f"Black-Scholes formula is undefined for {params}: {exc}") from exc

    for f in fields(result):
        if not math.isfinite(getattr(result, f.name)):
            raise DomainError(
                f"Black-Scholes {f.name} is not finite for {params}"
            )

    return result


def _evaluate(S: float, K: float, T: float, r: float, sigma: float) -> PricingResult:
    sqrt_T = math.sqrt(T)
    vol_sqrt_T = sigma * sqrt_T
    d1 = (math.log(S / K) + (r + 0.5 * sigma**2) * T) / vol_sqrt_T
    d2 = d1 - vol_sqrt_T

    Nd1 = norm_cdf(d1)
    Nd2 = norm_cdf(d2)
    Nmd1 = norm_cdf(-d1)
    Nmd2 = norm_cdf(-d2)
    nd1 = norm_pdf(d1)

    discounted_K = K * math.exp(-r * T)
    time_decay = -(S * nd1 * sigma) / (2 * sqrt_T)

    return PricingResult(
        call_price=S * Nd1 - discounted_K * Nd2,
        put_price=discounted_K * Nmd2 - S * Nmd1,
        delta_call=Nd1,
        delta_put=Nd1 - 1.0,
        gamma=nd1 / (S * vol_sqrt_T),
        vega=S * nd1 * sqrt_T,
        theta_call=time_decay - r * discounted_K * Nd2,
        theta_put=time_decay + r * discounted_K * Nmd2,
        rho_call=T * discounted_K * Nd2,
        rho_put=-T * discounted_K * Nmd2,
    )


def bs_price(
    S0: float,
    K: float,
    r: float,
    T: float,
    sigma: float,
    option_type: OptionType | str,
) -> float:
    """
    Compute European option price using Black-Scholes formula.

    Thin selector over bs_metrics; see there for validation rules.

    Parameters
    ----------
    S0 : float
        Initial spot price (must be > 0)
    K : float
        Strike price (must be > 0)
    r : float
        Risk-free interest rate (annualized)
    T : float
        Time to maturity in years (must be > 0)
    sigma : float
        Volatility (annualized, must be > 0)
    option_type : OptionType | str
        'call' or 'put'

    Returns
    -------
    float
        Option price
    """
    side = OptionType.parse(option_type)
    return bs_metrics(MarketParameters(S0=S0, K=K, T=T, r=r, sigma=sigma)).price(side)
