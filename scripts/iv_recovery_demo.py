#!/usr/bin/env python
"""
Implied volatility recovery demonstration.

Prices calls and puts across strikes with a known volatility, feeds the
prices back to the bisection solver, and reports how closely the input
volatility is recovered. Ends with an unreachable price to show the
explicit "not found" outcome.
"""

import sys
from pathlib import Path

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bs_pricer.analytics.black_scholes import MarketParameters, bs_metrics
from bs_pricer.analytics.implied_vol import ImpliedVolRequest, implied_vol


def main():
    """Run IV recovery demonstration."""
    # Parameters
    S0 = 100.0
    r = 0.05
    T = 30 / 365
    sigma = 0.2

    strikes = [80, 90, 95, 100, 105, 110, 120]

    print("=" * 100)
    print("Implied Volatility Recovery Demonstration")
    print("=" * 100)
    print(f"\nParameters: S0={S0}, r={r}, T={T:.4f}, sigma={sigma}")
    print("\n" + "-" * 100)
    print(f"{'Strike':<10} {'Type':<6} {'Model Price':<15} {'Implied Vol':<15} "
          f"{'Iterations':<12} {'Abs Error':<12}")
    print("-" * 100)

    errors = []
    for K in strikes:
        result = bs_metrics(MarketParameters(S0=S0, K=K, T=T, r=r, sigma=sigma))
        for option_type in ("call", "put"):
            price = result.price(option_type)
            iv_result = implied_vol(
                ImpliedVolRequest(market_price=price, S0=S0, K=K, T=T, r=r, option_type=option_type)
            )
            if iv_result.converged:
                error = abs(iv_result.value() - sigma)
                errors.append(error)
                print(f"{K:<10.1f} {option_type:<6} {price:<15.6f} {iv_result.value():<15.6f} "
                      f"{iv_result.iterations:<12} {error:<12.2e}")
            else:
                print(f"{K:<10.1f} {option_type:<6} {price:<15.6f} {'NOT FOUND':<15} "
                      f"{iv_result.iterations:<12}")

    print("-" * 100)

    if errors:
        print("\nRecovery Statistics:")
        print(f"  Maximum error:  {max(errors):.2e}")
        print(f"  Average error:  {sum(errors) / len(errors):.2e}")

    # No volatility reproduces a call price above spot
    unreachable = S0 * 1.5
    iv_result = implied_vol(
        ImpliedVolRequest(market_price=unreachable, S0=S0, K=100.0, T=T, r=r, option_type="call")
    )
    print(f"\nCall priced at {unreachable:.2f} (above spot): {iv_result!r}")
    print("=" * 100)


if __name__ == "__main__":
    main()
