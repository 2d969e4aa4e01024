"""
Black-Scholes Option Pricer

European option prices, Greeks and implied volatility under the
Black-Scholes model.
"""

from bs_pricer._version import __version__

# Analytics
from bs_pricer.analytics.black_scholes import (
    MarketParameters,
    OptionType,
    PricingResult,
    bs_metrics,
    bs_price,
)
from bs_pricer.analytics.implied_vol import (
    ImpliedVolRequest,
    ImpliedVolResult,
    SolverConfig,
    SolverStatus,
    implied_vol,
)
from bs_pricer.analytics.normal import norm_cdf, norm_pdf

# Errors
from bs_pricer.errors import (
    DomainError,
    InvalidParameterError,
    PricingError,
    SolverExhausted,
)

# Greeks
from bs_pricer.greeks.profile import GreeksProfile, greeks_profile

# Dispatch
from bs_pricer.service import Response, handle_request

__all__ = [
    # Version
    "__version__",
    # Analytics
    "MarketParameters",
    "OptionType",
    "PricingResult",
    "bs_metrics",
    "bs_price",
    "ImpliedVolRequest",
    "ImpliedVolResult",
    "SolverConfig",
    "SolverStatus",
    "implied_vol",
    "norm_cdf",
    "norm_pdf",
    # Errors
    "PricingError",
    "InvalidParameterError",
    "DomainError",
    "SolverExhausted",
    # Greeks
    "GreeksProfile",
    "greeks_profile",
    # Dispatch
    "Response",
    "handle_request",
]
