"""
Analytics module for Black-Scholes pricing and implied volatility.

Provides the closed-form pricing formulas, the normal distribution
approximation they use, and a bisection implied volatility solver.
"""

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
from bs_pricer.analytics.normal import ERF_MAX_ABS_ERROR, erf_approx, norm_cdf, norm_pdf

__all__ = [
    "ERF_MAX_ABS_ERROR",
    "ImpliedVolRequest",
    "ImpliedVolResult",
    "MarketParameters",
    "OptionType",
    "PricingResult",
    "SolverConfig",
    "SolverStatus",
    "bs_metrics",
    "bs_price",
    "erf_approx",
    "implied_vol",
    "norm_cdf",
    "norm_pdf",
]
