"""
Greeks across a range of spot prices.

Produces the series behind the Greeks chart: for a fixed strike,
maturity, rate and volatility, the price and Greeks of one option side
evaluated on a grid of spot prices around the current spot.
"""

from dataclasses import dataclass

import numpy as np

from bs_pricer.analytics.black_scholes import MarketParameters, OptionType, bs_metrics
from bs_pricer.errors import InvalidParameterError

DEFAULT_POINTS = 80
DEFAULT_LOWER = 0.5
DEFAULT_UPPER = 1.5


@dataclass
class GreeksProfile:
    """
    Price and Greeks of one option side on a spot grid.

    Attributes
    ----------
    spots : np.ndarray
        Spot prices, increasing
    price : np.ndarray
        Option price at each spot
    delta : np.ndarray
        Delta at each spot
    gamma : np.ndarray
        Gamma at each spot
    vega : np.ndarray
        Vega at each spot
    theta : np.ndarray
        Theta at each spot
    option_type : OptionType
        Side the series were taken from
    """

    spots: np.ndarray
    price: np.ndarray
    delta: np.ndarray
    gamma: np.ndarray
    vega: np.ndarray
    theta: np.ndarray
    option_type: OptionType

    def __len__(self) -> int:
        return len(self.spots)

    def to_dict(self) -> dict[str, list[float]]:
        """Convert to plain lists for JSON serialization."""
        return {
            "spots": self.spots.tolist(),
            "price": self.price.tolist(),
            "delta": self.delta.tolist(),
            "gamma": self.gamma.tolist(),
            "vega": self.vega.tolist(),
            "theta": self.theta.tolist(),
        }


def greeks_profile(
    params: MarketParameters,
    option_type: OptionType | str = OptionType.CALL,
    n_points: int = DEFAULT_POINTS,
    lower: float = DEFAULT_LOWER,
    upper: float = DEFAULT_UPPER,
) -> GreeksProfile:
    """
    Evaluate price and Greeks on a grid of spot prices.

    Parameters
    ----------
    params : MarketParameters
        Base inputs; params.S0 is the centre of the grid
    option_type : OptionType | str
        'call' or 'put'
    n_points : int
        Number of grid points (>= 2)
    lower : float
        Lowest spot as a multiple of params.S0 (> 0)
    upper : float
        Highest spot as a multiple of params.S0 (> lower)

    Returns
    -------
    GreeksProfile
        Series of length n_points

    Raises
    ------
    InvalidParameterError
        If the grid arguments or the base parameters are invalid
    DomainError
        If params.T or params.sigma is zero
    """
    side = OptionType.parse(option_type)
    if n_points < 2:
        raise InvalidParameterError("n_points must be at least 2")
    if lower <= 0:
        raise InvalidParameterError("lower must be positive")
    if upper <= lower:
        raise InvalidParameterError("upper must be greater than lower")
    params.validate()

    spots = params.S0 * np.linspace(lower, upper, n_points)
    series = np.empty((5, n_points))

    for i, spot in enumerate(spots):
        result = bs_metrics(params.with_spot(float(spot)))
        series[:, i] = (
            result.price(side),
            result.delta(side),
            result.gamma,
            result.vega,
            result.theta(side),
        )

    price, delta, gamma, vega, theta = series
    return GreeksProfile(
        spots=spots,
        price=price,
        delta=delta,
        gamma=gamma,
        vega=vega,
        theta=theta,
        option_type=side,
    )
