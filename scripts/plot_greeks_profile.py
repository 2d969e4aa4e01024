#!/usr/bin/env python
"""
Greeks profile visualization.

Plots Delta on the left axis and Gamma, Vega and Theta on the right axis
across spot prices from 0.5x to 1.5x spot, with vertical markers at the
current spot and the strike.
"""

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bs_pricer.analytics.black_scholes import MarketParameters
from bs_pricer.greeks.profile import greeks_profile


def main():
    """Generate Greeks profile plot."""
    parser = argparse.ArgumentParser(description="Plot Black-Scholes Greeks across spot")
    parser.add_argument("--S0", type=float, default=100.0)
    parser.add_argument("--K", type=float, default=100.0)
    parser.add_argument("--T_days", type=float, default=30.0)
    parser.add_argument("--r", type=float, default=0.05)
    parser.add_argument("--sigma", type=float, default=0.2)
    parser.add_argument("--option_type", choices=["call", "put"], default="call")
    parser.add_argument("--no-show", action="store_true", help="Save without opening a window")
    args = parser.parse_args()

    params = MarketParameters.from_days(args.S0, args.K, args.T_days, args.r, args.sigma)
    profile = greeks_profile(params, args.option_type)

    print("=" * 80)
    print("Greeks Profile")
    print("=" * 80)
    print(f"\nParameters: S0={params.S0}, K={params.K}, T={params.T:.4f}, "
          f"r={params.r}, sigma={params.sigma}, option_type={args.option_type}")
    print(f"Spot grid: {profile.spots[0]:.2f} to {profile.spots[-1]:.2f} ({len(profile)} points)")

    print("\nGenerating plot...")

    fig, ax_delta = plt.subplots(figsize=(12, 5))
    ax_other = ax_delta.twinx()

    ax_delta.plot(profile.spots, profile.delta, color="teal", alpha=0.6, linewidth=2, label="Delta")
    ax_other.plot(profile.spots, profile.gamma, color="red", alpha=0.6, linewidth=2, label="Gamma")
    ax_other.plot(profile.spots, profile.vega, color="green", alpha=0.6, linewidth=2, label="Vega")
    ax_other.plot(profile.spots, profile.theta, color="orange", alpha=0.6, linewidth=2, label="Theta")

    ax_delta.axvline(params.S0, color="gold", linewidth=2, label="Current Price")
    ax_delta.axvline(params.K, color="purple", linewidth=2, label="Strike Price")

    ax_delta.set_xlabel("Stock Price", fontsize=12)
    ax_delta.set_ylabel("Delta", fontsize=12)
    ax_other.set_ylabel("Gamma / Vega / Theta", fontsize=12)
    ax_delta.set_title("Option Greeks vs Stock Price", fontsize=14, fontweight="bold")

    lines = ax_delta.get_legend_handles_labels()
    other = ax_other.get_legend_handles_labels()
    ax_delta.legend(lines[0] + other[0], lines[1] + other[1], fontsize=10, loc="upper left")
    ax_delta.grid(True, alpha=0.3, linestyle=":")
    fig.tight_layout()

    # Create plots directory if it doesn't exist
    plots_dir = Path(__file__).parent.parent / "plots"
    plots_dir.mkdir(exist_ok=True)

    output_path = plots_dir / f"greeks_profile_{args.option_type}.png"
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    print(f"\nPlot saved to: {output_path}")

    if not args.no_show:
        plt.show()

    print("=" * 80)


if __name__ == "__main__":
    main()
