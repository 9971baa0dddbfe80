from __future__ import annotations


class ScorewaveError(Exception):
    """Base class for errors raised by the rendering core."""


class DomainError(ScorewaveError, ValueError):
    """An offset fell outside the domain a function is defined on."""


class OrderingError(ScorewaveError, ValueError):
    """Two bounds were given in the wrong order (e.g. end before begin)."""


class UnresolvedDependencyError(ScorewaveError, ValueError):
    """A performance cannot be set up: no parts, bad sample rate, or no instrument."""


class UnsupportedTransitionError(ScorewaveError, NotImplementedError):
    """A value change asked for a transition kind that has no implementation."""
