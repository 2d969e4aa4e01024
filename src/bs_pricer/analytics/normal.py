"""
Standard normal density and cumulative distribution.

The CDF uses the Abramowitz-Stegun 7.1.26 rational approximation to the
error function rather than math.erf, so that prices are reproducible
across platforms to the last digit the pricing form displays.
"""

import math

# Abramowitz & Stegun 7.1.26 coefficients
A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911

#: Maximum absolute error of erf_approx over the real line. Any price
#: tolerance used by the implied volatility solver must stay above this.
ERF_MAX_ABS_ERROR = 1.5e-7

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


def erf_approx(x: float) -> float:
    """
    Error function via the Abramowitz-Stegun rational approximation.

    Parameters
    ----------
    x : float
        Input value

    Returns
    -------
    float
        Approximation of erf(x), absolute error below ERF_MAX_ABS_ERROR
    """
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)
    t = 1.0 / (1.0 + P * x)
    poly = ((((A5 * t + A4) * t + A3) * t + A2) * t + A1) * t
    return sign * (1.0 - poly * math.exp(-x * x))


def norm_cdf(x: float) -> float:
    """
    Cumulative distribution function for standard normal distribution.

    Parameters
    ----------
    x : float
        Input value

    Returns
    -------
    float
        CDF value at x: P(Z <= x) where Z ~ N(0,1)
    """
    return 0.5 * (1.0 + erf_approx(x / _SQRT_2))


def norm_pdf(x: float) -> float:
    """
    Probability density function for standard normal distribution.

    Parameters
    ----------
    x : float
        Input value

    Returns
    -------
    float
        PDF value at x: φ(x) = exp(-x²/2)/√(2π)
    """
    return math.exp(-0.5 * x**2) / _SQRT_2PI
