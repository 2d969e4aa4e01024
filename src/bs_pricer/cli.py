#!/usr/bin/env python
"""
Command-line interface for Black-Scholes pricing.

This module provides the main CLI entrypoint for the bs-price command.

Example usage:
    bs-price --S0 100 --K 100 --r 0.05 --sigma 0.2 --T_days 30
    bs-price --S0 100 --K 100 --r 0.05 --T_days 30 --implied_vol 2.4854
    bs-price --S0 100 --K 100 --r 0.05 --sigma 0.2 --T 0.5 --option_type put --profile
"""

import argparse
import json
import sys

from bs_pricer.analytics.black_scholes import DAYS_PER_YEAR, MarketParameters, bs_metrics
from bs_pricer.analytics.implied_vol import ImpliedVolRequest, implied_vol
from bs_pricer.errors import PricingError
from bs_pricer.greeks.profile import DEFAULT_POINTS, greeks_profile
from bs_pricer.service import handle_request


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    args : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Black-Scholes option pricing and implied volatility",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Market parameters
    parser.add_argument("--S0", type=float, required=True, help="Spot price")
    parser.add_argument("--K", type=float, required=True, help="Strike price")
    parser.add_argument("--r", type=float, required=True, help="Risk-free rate")
    maturity = parser.add_mutually_exclusive_group(required=True)
    maturity.add_argument("--T", type=float, help="Time to maturity (years)")
    maturity.add_argument("--T_days", type=float, help="Days to expiration")
    parser.add_argument(
        "--sigma",
        type=float,
        default=None,
        help="Volatility (required unless only --implied_vol is requested)",
    )
    parser.add_argument(
        "--option_type",
        type=str,
        choices=["call", "put"],
        default="call",
        help="Option type: call or put",
    )

    # Analytics
    parser.add_argument(
        "--implied_vol",
        type=float,
        default=None,
        help="Compute implied volatility from given market price",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print Greeks across spot prices from 0.5x to 1.5x spot",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=DEFAULT_POINTS,
        help="Number of spot points in the Greeks profile",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of tables",
    )

    return parser.parse_args(args)


def _years(parsed: argparse.Namespace) -> float:
    if parsed.T is not None:
        return parsed.T
    return parsed.T_days / DAYS_PER_YEAR


def _run_json(parsed: argparse.Namespace) -> int:
    base = {"S": parsed.S0, "K": parsed.K, "T": _years(parsed), "r": parsed.r}
    requests = []
    if parsed.sigma is not None:
        requests.append({"action": "price", "sigma": parsed.sigma, **base})
        if parsed.profile:
            requests.append({
                "action": "greeks_profile",
                "sigma": parsed.sigma,
                "optionType": parsed.option_type,
                "points": parsed.points,
                **base,
            })
    if parsed.implied_vol is not None:
        requests.append({
            "action": "implied_vol",
            "market_price": parsed.implied_vol,
            "optionType": parsed.option_type,
            **base,
        })

    output = {}
    exit_code = 0
    for request in requests:
        response = handle_request(request)
        output[request["action"]] = response.body
        if not response.ok:
            exit_code = 1
        elif request["action"] == "implied_vol" and response.body["implied_vol"] is None:
            exit_code = 1

    print(json.dumps(output, indent=2))
    return exit_code


def main(args: list[str] | None = None) -> int:
    """Main entry point for CLI.

    Parameters
    ----------
    args : list[str] | None
        Command-line arguments. If None, uses sys.argv.

    Returns
    -------
    int
        Exit code (0 for success, non-zero for errors).
    """
    parsed = parse_args(args)

    if parsed.sigma is None and parsed.implied_vol is None:
        print("Error: --sigma is required unless --implied_vol is given", file=sys.stderr)
        return 1
    if parsed.profile and parsed.sigma is None:
        print("Error: --profile requires --sigma", file=sys.stderr)
        return 1

    if parsed.json:
        return _run_json(parsed)

    T = _years(parsed)

    # Print input parameters
    print("=" * 70)
    print("Black-Scholes Option Pricing")
    print("=" * 70)
    print("\nInput Parameters:")
    print(f"  Spot Price (S0):        {parsed.S0:,.2f}")
    print(f"  Strike Price (K):       {parsed.K:,.2f}")
    print(f"  Risk-free Rate (r):     {parsed.r:.4f}")
    if parsed.sigma is not None:
        print(f"  Volatility (σ):         {parsed.sigma:.4f}")
    print(f"  Time to Maturity (T):   {T:.4f} years")
    print(f"  Option Type:            {parsed.option_type.upper()}")

    try:
        if parsed.sigma is not None:
            params = MarketParameters(S0=parsed.S0, K=parsed.K, T=T, r=parsed.r, sigma=parsed.sigma)
            result = bs_metrics(params)
            side = result.for_option(parsed.option_type)

            print("\n" + "=" * 70)
            print("Option Price & Greeks")
            print("=" * 70)
            print(f"  Theoretical Price:      {side['price']:.4f}")
            print(f"  Delta:                  {side['delta']:.4f}")
            print(f"  Gamma:                  {side['gamma']:.6f}")
            print(f"  Theta:                  {side['theta']:.6f}")
            print(f"  Vega:                   {side['vega']:.4f}")
            print(f"  Rho:                    {side['rho']:.4f}")
            print("\nPut-Call Parity:")
            print(f"  C - P:                  {result.call_price - result.put_price:.6f}")

            if parsed.profile:
                profile = greeks_profile(params, parsed.option_type, n_points=parsed.points)
                print("\n" + "=" * 70)
                print("Greeks Profile")
                print("=" * 70)
                print(f"{'Spot':>10} {'Price':>12} {'Delta':>10} {'Gamma':>10} "
                      f"{'Vega':>10} {'Theta':>12}")
                print("-" * 70)
                for i in range(len(profile)):
                    print(f"{profile.spots[i]:>10.2f} {profile.price[i]:>12.4f} "
                          f"{profile.delta[i]:>10.4f} {profile.gamma[i]:>10.6f} "
                          f"{profile.vega[i]:>10.4f} {profile.theta[i]:>12.4f}")

        if parsed.implied_vol is not None:
            print("\n" + "=" * 70)
            print("Implied Volatility")
            print("=" * 70)

            request = ImpliedVolRequest(
                market_price=parsed.implied_vol,
                S0=parsed.S0,
                K=parsed.K,
                T=T,
                r=parsed.r,
                option_type=parsed.option_type,
            )
            iv_result = implied_vol(request)
            print(f"\nMarket Price:      {parsed.implied_vol:.6f}")
            if not iv_result.converged:
                print(f"Implied Vol:       not found after {iv_result.iterations} iterations")
                print("\n" + "=" * 70)
                return 1

            iv = iv_result.value()
            print(f"Implied Vol:       {iv:.6f}")
            print(f"Iterations:        {iv_result.iterations}")

            # Verify by computing BS price with implied vol
            verify = bs_metrics(
                MarketParameters(S0=parsed.S0, K=parsed.K, T=T, r=parsed.r, sigma=iv)
            ).price(parsed.option_type)
            print("\nVerification:")
            print(f"  BS(IV) Price:    {verify:.6f}")
            print(f"  Target Price:    {parsed.implied_vol:.6f}")
            print(f"  Price Error:     {abs(verify - parsed.implied_vol):.2e}")

    except PricingError as e:
        print(f"\nError ({e.kind}): {e}", file=sys.stderr)
        return 1

    print("\n" + "=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
