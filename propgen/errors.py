from __future__ import annotations


def generator_error(location: str, issue: str, hint: str) -> str:
    return f"{location}: {issue}. Fix: {hint}."


class GeneratorConfigurationError(ValueError):
    """Raised when a generator cannot honour the constraints it was given."""


class DomainExhaustedError(LookupError):
    """Raised when an exhaustive domain generator has nothing left to return."""
