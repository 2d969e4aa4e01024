"""
Greeks package initialization.
"""

from bs_pricer.greeks.profile import GreeksProfile, greeks_profile

__all__ = [
    'GreeksProfile',
    'greeks_profile',
]
