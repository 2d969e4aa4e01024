"""
Exception taxonomy for pricing and implied volatility.

Parameter errors subclass ValueError so callers that already guard
pricing calls with ``except ValueError`` keep working.
"""


class PricingError(Exception):
    """Base class for all errors raised by the pricing engine."""

    @property
    def kind(self) -> str:
        """Machine-readable error kind (the exception class name)."""
        return type(self).__name__


class InvalidParameterError(PricingError, ValueError):
    """Negative, zero where positivity is required, or non-finite input."""


class DomainError(PricingError, ArithmeticError):
    """Inputs for which the Black-Scholes formula is undefined (T == 0 or sigma == 0)."""


class SolverExhausted(PricingError):
    """Implied volatility bisection did not converge within its iteration cap."""
