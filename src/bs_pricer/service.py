"""
Request dispatch for the pricing engine.

Transport-free handler for JSON-shaped requests. A web framework route
or any other transport decodes the request body into a mapping, calls
handle_request, and writes Response.status / Response.body back out.

Supported actions
-----------------
price
    Fields S, K, r, sigma and T (years) or T_days. Body is the full
    PricingResult (callPrice, putPrice, delta_call, ...).
implied_vol
    Fields market_price, S, K, r, T or T_days, optionType. Body is
    {"implied_vol": float} or {"implied_vol": None} if the solver
    exhausted its iterations.
greeks_profile
    Pricing fields plus optional optionType and points. Body holds the
    spot grid and one list per Greek.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from bs_pricer.analytics.black_scholes import (
    DAYS_PER_YEAR,
    MarketParameters,
    OptionType,
    bs_metrics,
)
from bs_pricer.analytics.implied_vol import ImpliedVolRequest, implied_vol
from bs_pricer.errors import InvalidParameterError, PricingError
from bs_pricer.greeks.profile import DEFAULT_POINTS, greeks_profile

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


@dataclass
class Response:
    """Status code and JSON-serializable body."""

    status: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == HTTP_OK


def _number(payload: Mapping[str, Any], key: str) -> float:
    if key not in payload or payload[key] is None:
        raise InvalidParameterError(f"Missing required field '{key}'")
    value = payload[key]
    if isinstance(value, bool):
        raise InvalidParameterError(f"Field '{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidParameterError(
            f"Field '{key}' must be a number, got {value!r}"
        ) from None


def _maturity(payload: Mapping[str, Any]) -> float:
    if payload.get("T") is None and payload.get("T_days") is not None:
        return _number(payload, "T_days") / DAYS_PER_YEAR
    return _number(payload, "T")


def _option_type(payload: Mapping[str, Any]) -> OptionType:
    return OptionType.parse(payload.get("optionType", OptionType.CALL))


def _market_parameters(payload: Mapping[str, Any]) -> MarketParameters:
    return MarketParameters(
        S0=_number(payload, "S"),
        K=_number(payload, "K"),
        T=_maturity(payload),
        r=_number(payload, "r"),
        sigma=_number(payload, "sigma"),
    )


def _price(payload: Mapping[str, Any]) -> dict[str, Any]:
    return bs_metrics(_market_parameters(payload)).to_dict()


def _implied_vol(payload: Mapping[str, Any]) -> dict[str, Any]:
    request = ImpliedVolRequest(
        market_price=_number(payload, "market_price"),
        S0=_number(payload, "S"),
        K=_number(payload, "K"),
        T=_maturity(payload),
        r=_number(payload, "r"),
        option_type=_option_type(payload),
    )
    return {"implied_vol": implied_vol(request).implied_vol}


def _greeks_profile(payload: Mapping[str, Any]) -> dict[str, Any]:
    n_points = payload.get("points", DEFAULT_POINTS)
    if isinstance(n_points, bool) or not isinstance(n_points, int):
        raise InvalidParameterError(f"Field 'points' must be an integer, got {n_points!r}")
    profile = greeks_profile(
        _market_parameters(payload),
        option_type=_option_type(payload),
        n_points=n_points,
    )
    return profile.to_dict()


ACTIONS: dict[str, Callable[[Mapping[str, Any]], dict[str, Any]]] = {
    "price": _price,
    "implied_vol": _implied_vol,
    "greeks_profile": _greeks_profile,
}


def handle_request(payload: Mapping[str, Any]) -> Response:
    """
    Dispatch one request to the pricing engine.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Decoded request body with an 'action' key

    Returns
    -------
    Response
        200 with the action's result, or 400 with either
        {"error": "Invalid action"} or
        {"error": {"kind": ..., "message": ...}} for parameter and
        domain errors
    """
    if not isinstance(payload, Mapping):
        return Response(HTTP_BAD_REQUEST, {"error": "Invalid action"})

    action = payload.get("action")
    handler = ACTIONS.get(action) if isinstance(action, str) else None
    if handler is None:
        return Response(HTTP_BAD_REQUEST, {"error": "Invalid action"})

    try:
        body = handler(payload)
    except PricingError as exc:
        return Response(
            HTTP_BAD_REQUEST,
            {"error": {"kind": exc.kind, "message": str(exc)}},
        )
    return Response(HTTP_OK, body)
