"""Composable, stateful generators of random data streams, with result-aware combinators and shared streams."""

__version__ = "0.1.0"

__all__ = ["combinators", "errors", "generator", "shared", "state", "trying"]